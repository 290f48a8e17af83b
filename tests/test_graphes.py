from __future__ import annotations

import random

from placement.modele.graphes import construire_graphes
from placement.modele.grille import Grille


def _grille_aleatoire(rng: random.Random, lignes: int, colonnes: int) -> Grille:
    return Grille(lignes, colonnes, [rng.random() < 0.6 for _ in range(lignes * colonnes)])


def test_allee_simple():
    g = construire_graphes(Grille.depuis_motif(["XX.XX"]))
    assert g.aretes_directes() == {(0, 1), (3, 4)}
    assert g.aretes_ecart() == {(1, 3)}
    assert g.ilots == [0, 0, -1, 1, 1]


def test_ecart_en_diagonale():
    # la case vide (0,1) borde les sièges 0 et 3
    g = construire_graphes(Grille.depuis_motif(["X.", ".X"]))
    assert g.aretes_directes() == frozenset()
    assert g.aretes_ecart() == {(0, 3)}
    assert g.ilot(0) != g.ilot(3)


def test_ilots_numerotes_dans_l_ordre_de_lecture():
    g = construire_graphes(Grille.depuis_motif(["X.X", "X.X", "..."]))
    assert g.ilots[0] == 0 and g.ilots[3] == 0
    assert g.ilots[2] == 1 and g.ilots[5] == 1
    assert g.places_par_ilot() == {0: [0, 3], 1: [2, 5]}
    assert g.taille_ilot(1) == 2


def test_relations_symetriques():
    rng = random.Random(2024)
    for _ in range(25):
        g = construire_graphes(_grille_aleatoire(rng, rng.randint(1, 6), rng.randint(1, 7)))
        for adjacence in (g.adjacence_directe, g.adjacence_ecart):
            for a, voisins in adjacence.items():
                for b in voisins:
                    assert a in adjacence[b]


def test_ilots_partitionnent_les_places():
    rng = random.Random(7)
    for _ in range(25):
        grille = _grille_aleatoire(rng, rng.randint(1, 6), rng.randint(1, 7))
        g = construire_graphes(grille)
        for i in range(grille.taille()):
            assert (g.ilot(i) >= 0) == grille.existe(i)
        assert sorted(set(i for i in g.ilots if i >= 0)) == list(range(g.nb_ilots()))
        # deux voisins directs sont toujours dans le même îlot
        for a, b in g.aretes_directes():
            assert g.ilot(a) == g.ilot(b)


def test_retirer_une_place_ne_fusionne_pas_d_ilots():
    rng = random.Random(11)
    for _ in range(20):
        grille = _grille_aleatoire(rng, 4, 5)
        places = grille.places()
        if not places:
            continue
        avant = construire_graphes(grille)
        retiree = rng.choice(places)
        cases = list(grille.cases())
        cases[retiree] = False
        apres = construire_graphes(Grille(grille.lignes, grille.colonnes, cases))
        restantes = [p for p in places if p != retiree]
        for a in restantes:
            for b in restantes:
                if avant.ilot(a) != avant.ilot(b):
                    assert apres.ilot(a) != apres.ilot(b)
