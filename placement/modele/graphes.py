from __future__ import annotations

from typing import Dict, FrozenSet, List, Set, Tuple

from .grille import Grille

Arete = Tuple[int, int]

# 4-voisinage puis 8-voisinage (hors case centrale)
_DIRECTIONS_ORTHO: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
_DIRECTIONS_HUIT: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


class GraphesGrille:
    """Relations dérivées de la grille, utilisées par la sélection et le solveur.

    Attributs
    ---------
    adjacence_directe : Dict[int, List[int]]
        Voisins orthogonaux (sièges existants uniquement), listes triées.
    adjacence_ecart : Dict[int, List[int]]
        Sièges bordant une même case vide (8-voisinage), listes triées.
    ilots : List[int]
        Identifiant d'îlot (composante connexe sous l'adjacence directe)
        pour chaque case ; -1 pour une case sans siège.
    """

    def __init__(
            self,
            adjacence_directe: Dict[int, List[int]],
            adjacence_ecart: Dict[int, List[int]],
            ilots: List[int],
    ) -> None:
        self.adjacence_directe: Dict[int, List[int]] = adjacence_directe
        self.adjacence_ecart: Dict[int, List[int]] = adjacence_ecart
        self.ilots: List[int] = ilots

        self._par_ilot: Dict[int, List[int]] = {}
        for indice, ilot in enumerate(ilots):
            if ilot >= 0:
                self._par_ilot.setdefault(ilot, []).append(indice)

    def ilot(self, indice: int) -> int:
        return self.ilots[indice]

    def nb_ilots(self) -> int:
        return len(self._par_ilot)

    def places_par_ilot(self) -> Dict[int, List[int]]:
        """Retourne {id_ilot: [indices des sièges]}."""
        return {k: list(v) for k, v in self._par_ilot.items()}

    def places_de_l_ilot(self, ilot: int) -> List[int]:
        return self._par_ilot.get(ilot, [])

    def taille_ilot(self, ilot: int) -> int:
        return len(self._par_ilot.get(ilot, []))

    def voisins_directs(self, indice: int) -> List[int]:
        return self.adjacence_directe.get(indice, [])

    def voisins_ecart(self, indice: int) -> List[int]:
        return self.adjacence_ecart.get(indice, [])

    def degre_direct(self, indice: int) -> int:
        return len(self.adjacence_directe.get(indice, []))

    def sont_voisins_directs(self, a: int, b: int) -> bool:
        return b in self.adjacence_directe.get(a, [])

    def aretes_directes(self) -> FrozenSet[Arete]:
        return _aretes(self.adjacence_directe)

    def aretes_ecart(self) -> FrozenSet[Arete]:
        return _aretes(self.adjacence_ecart)


def _aretes(adjacence: Dict[int, List[int]]) -> FrozenSet[Arete]:
    return frozenset((a, b) for a, voisins in adjacence.items() for b in voisins if a < b)


def construire_graphes(grille: Grille) -> GraphesGrille:
    """Dérive l'adjacence directe, l'adjacence d'écart et les îlots de la grille."""
    directe: Dict[int, Set[int]] = {i: set() for i in grille.places()}
    ecart: Dict[int, Set[int]] = {i: set() for i in grille.places()}

    for indice in range(grille.taille()):
        r, c = grille.ligne_colonne(indice)

        if grille.existe(indice):
            for dr, dc in _DIRECTIONS_ORTHO:
                rr, cc = r + dr, c + dc
                if grille.dans_grille(rr, cc) and grille.existe(grille.indice(rr, cc)):
                    directe[indice].add(grille.indice(rr, cc))
            continue

        # Case vide : tous les sièges qui la bordent (diagonales comprises)
        # sont reliés deux à deux.
        bordure: List[int] = []
        for dr, dc in _DIRECTIONS_HUIT:
            rr, cc = r + dr, c + dc
            if grille.dans_grille(rr, cc) and grille.existe(grille.indice(rr, cc)):
                bordure.append(grille.indice(rr, cc))
        for i, a in enumerate(bordure):
            for b in bordure[i + 1:]:
                ecart[a].add(b)
                ecart[b].add(a)

    adjacence_directe: Dict[int, List[int]] = {k: sorted(v) for k, v in directe.items()}
    adjacence_ecart: Dict[int, List[int]] = {k: sorted(v) for k, v in ecart.items()}
    return GraphesGrille(adjacence_directe, adjacence_ecart, _calculer_ilots(grille, adjacence_directe))


def _calculer_ilots(grille: Grille, adjacence_directe: Dict[int, List[int]]) -> List[int]:
    """Parcours en profondeur (pile explicite) ; ids séquentiels à partir de 0."""
    ilots: List[int] = [-1] * grille.taille()
    prochain: int = 0

    for depart in grille.places():
        if ilots[depart] != -1:
            continue
        pile: List[int] = [depart]
        ilots[depart] = prochain
        while pile:
            courant: int = pile.pop()
            for voisin in adjacence_directe.get(courant, []):
                if ilots[voisin] == -1:
                    ilots[voisin] = prochain
                    pile.append(voisin)
        prochain += 1

    return ilots
