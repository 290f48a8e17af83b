from __future__ import annotations

import pytest

from placement.modele.grille import Grille, preference_place


def test_grille_depuis_motif():
    grille = Grille.depuis_motif(["XX.", ".XX"])
    assert (grille.lignes, grille.colonnes) == (2, 3)
    assert grille.places() == [0, 1, 4, 5]
    assert grille.nb_places() == 4
    assert str(grille) == "XX.\n.XX"


def test_indices_ligne_colonne():
    grille = Grille.vide(3, 4)
    assert grille.indice(2, 1) == 9
    assert grille.ligne_colonne(9) == (2, 1)
    assert not grille.dans_grille(3, 0)
    assert not grille.existe(9)
    assert not grille.existe(42)


def test_taille_incoherente_refusee():
    with pytest.raises(ValueError):
        Grille(2, 2, [True, True, True])


def test_preference_devant_puis_centre():
    grille = Grille.vide(3, 5)
    devant_centre = preference_place(grille, grille.indice(0, 2), 1000)
    devant_bord = preference_place(grille, grille.indice(0, 0), 1000)
    deuxieme_centre = preference_place(grille, grille.indice(1, 2), 1000)
    assert devant_centre > devant_bord > deuxieme_centre
