from __future__ import annotations

from placement.contraintes.base import Restriction
from placement.contraintes.compilation import compiler_restrictions
from placement.contraintes.types import TypeRestriction as T
from placement.modele.graphes import construire_graphes
from placement.modele.grille import Grille
from placement.parametres import ParametresHeuristiques
from placement.solveurs.base import Infaisabilite
from placement.solveurs.retour_arriere import SolveurRetourArriere


def _solveur(motif, eleves, restrictions=(), parametres=None):
    grille = Grille.depuis_motif(motif)
    graphes = construire_graphes(grille)
    jeu = compiler_restrictions(list(restrictions), eleves)
    return grille, graphes, SolveurRetourArriere(grille, graphes, jeu, parametres)


def test_ordre_places_plus_contraintes_d_abord():
    _, _, sol = _solveur(["XXX"], [])
    assert sol.ordonner_places([0, 1, 2]) == [0, 2, 1]


def test_pair_interdit_le_meme_ilot():
    grille, _, sol = _solveur(["XXX"], ["A", "B"], [Restriction("A", "B", T.PAIR)])
    res = sol.resoudre(grille.places(), ["A", "B"])
    assert res.affectation is None
    assert res.echec is Infaisabilite.RESTRICTIONS_INSATISFAITES


def test_pair_autorise_deux_ilots_distincts():
    grille, _, sol = _solveur(["X.X"], ["A", "B"], [Restriction("A", "B", T.PAIR)])
    res = sol.resoudre(grille.places(), ["A", "B"])
    assert res.succes
    assert set(res.affectation.values()) == {"A", "B"}


def test_gap_interdit_de_part_et_d_autre_d_une_allee():
    grille, _, sol = _solveur(["X.X"], ["A", "B"], [Restriction("A", "B", T.GAP)])
    res = sol.resoudre(grille.places(), ["A", "B"])
    assert res.echec is Infaisabilite.RESTRICTIONS_INSATISFAITES


def test_must_direct_place_les_partenaires_cote_a_cote():
    eleves = ["A", "B", "C", "D"]
    grille, graphes, sol = _solveur(["XX.XX"], eleves, [Restriction("A", "C", T.MUST_DIRECT)])
    res = sol.resoudre(grille.places(), ["A", "B", "C", "D"])
    assert res.succes
    position = {e: p for p, e in res.affectation.items()}
    assert graphes.sont_voisins_directs(position["A"], position["C"])


def test_epingle_respectee():
    grille, _, sol = _solveur(["XX.XX"], ["A", "B", "C", "D"])
    res = sol.resoudre([0, 1, 3], ["A", "B", "C", "D"], {4: "A"})
    assert res.succes
    assert res.affectation[4] == "A"
    assert sorted(res.affectation.values()) == ["A", "B", "C", "D"]


def test_epingle_en_double():
    grille, _, sol = _solveur(["XX.XX"], ["A", "B"])
    res = sol.resoudre([1, 3], ["A", "B"], {0: "A", 4: "A"})
    assert res.echec is Infaisabilite.EPINGLE_EN_DOUBLE
    assert res.details["eleve"] == "A"
    assert res.details["places"] == [0, 4]


def test_epingles_incompatibles():
    grille, _, sol = _solveur(["XX.XX"], ["A", "B"], [Restriction("A", "B", T.PAIR)])
    res = sol.resoudre([], ["A", "B"], {0: "A", 1: "B"})
    assert res.echec is Infaisabilite.EPINGLES_INCOMPATIBLES
    assert {res.details["eleve_a"], res.details["eleve_b"]} == {"A", "B"}


def test_budget_d_essais_epuise():
    params = ParametresHeuristiques(essais_max=1)
    grille, _, sol = _solveur(["XXX"], ["A", "B"], [Restriction("A", "B", T.PAIR)], params)
    res = sol.resoudre(grille.places(), ["A", "B"])
    assert res.echec is Infaisabilite.RESTRICTIONS_INSATISFAITES
    assert res.details["budget_epuise"] is True


def test_surplus_de_places_laissees_vides():
    grille, _, sol = _solveur(["XXX.X"], ["A", "B"], [Restriction("A", "B", T.PAIR)])
    res = sol.resoudre(grille.places(), ["A", "B"])
    assert res.succes
    assert len(res.affectation) == 2
