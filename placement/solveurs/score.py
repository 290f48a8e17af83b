from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from ..modele.graphes import GraphesGrille
from ..modele.grille import Grille, preference_place
from ..parametres import ParametresHeuristiques


class ScoreCandidat:
    """Score lexicographique d'une affectation candidate.

    Ordre de comparaison : moins d'îlots solitaires, puis plus de paires de
    voisins directs occupées, puis meilleure qualité cumulée des places.
    """

    def __init__(self, places_isolees: int, paires_voisines: int, qualite: int) -> None:
        self.places_isolees: int = places_isolees
        self.paires_voisines: int = paires_voisines
        self.qualite: int = qualite

    def cle(self) -> Tuple[int, int, int]:
        """Clé de tri : la plus petite est la meilleure."""
        return self.places_isolees, -self.paires_voisines, -self.qualite

    def meilleur_que(self, autre: Optional["ScoreCandidat"]) -> bool:
        return autre is None or self.cle() < autre.cle()

    def en_dict(self) -> Dict[str, Any]:
        return {
            "lonely_clusters": self.places_isolees,
            "adjacent_pairs": self.paires_voisines,
            "seat_quality": self.qualite,
        }

    def __eq__(self, autre: object) -> bool:
        return isinstance(autre, ScoreCandidat) and self.cle() == autre.cle()

    def __hash__(self) -> int:
        return hash(self.cle())

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return f"ScoreCandidat(isoles={self.places_isolees}, paires={self.paires_voisines}, qualite={self.qualite})"


def evaluer_affectation(
        affectation: Mapping[int, Optional[str]],
        *,
        grille: Grille,
        graphes: GraphesGrille,
        parametres: Optional[ParametresHeuristiques] = None,
) -> ScoreCandidat:
    """Calcule le `ScoreCandidat` d'une affectation {place: élève ou None}."""
    params: ParametresHeuristiques = parametres or ParametresHeuristiques()
    occupees = [p for p, e in affectation.items() if e]

    occupation: Dict[int, int] = {}
    for p in occupees:
        ilot = graphes.ilot(p)
        occupation[ilot] = occupation.get(ilot, 0) + 1
    # un îlot d'une seule place n'est jamais « solitaire »
    isolees: int = sum(1 for ilot, n in occupation.items() if n == 1 and graphes.taille_ilot(ilot) >= 2)

    occupe = set(occupees)
    paires: int = sum(1 for a, b in graphes.aretes_directes() if a in occupe and b in occupe)
    qualite: int = sum(preference_place(grille, p, params.poids_rang) for p in occupees)
    return ScoreCandidat(isolees, paires, qualite)
