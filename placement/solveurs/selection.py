from __future__ import annotations

import random
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..modele.graphes import GraphesGrille
from ..modele.grille import Grille, preference_place
from ..parametres import ParametresHeuristiques


class _Selection:
    """État courant d'une sélection : places retenues et occupation par îlot."""

    def __init__(self, graphes: GraphesGrille, libres: Iterable[int], occupees: Iterable[int]) -> None:
        self.graphes: GraphesGrille = graphes
        self.choisies: List[int] = []
        self.restantes: Set[int] = set(libres)
        self.occupation: Dict[int, int] = {}
        for p in occupees:
            ilot = graphes.ilot(p)
            if ilot >= 0:
                self.occupation[ilot] = self.occupation.get(ilot, 0) + 1

    def prendre(self, place: int) -> None:
        self.choisies.append(place)
        self.restantes.discard(place)
        ilot = self.graphes.ilot(place)
        self.occupation[ilot] = self.occupation.get(ilot, 0) + 1

    def rendre(self, place: int) -> None:
        self.choisies.remove(place)
        self.restantes.add(place)
        ilot = self.graphes.ilot(place)
        self.occupation[ilot] -= 1

    def occupants(self, ilot: int) -> int:
        return self.occupation.get(ilot, 0)


def selectionner_places(
        candidates: Iterable[int],
        nombre: int,
        *,
        grille: Grille,
        graphes: GraphesGrille,
        occupees: Iterable[int] = (),
        tentative: int = 0,
        parametres: Optional[ParametresHeuristiques] = None,
        rng: Optional[random.Random] = None,
        voisins_requis: Iterable[int] = (),
) -> List[int]:
    """Choisit exactement `nombre` places parmi `candidates`.

    Privilégie les places les mieux notées (devant, au centre) et évite de
    laisser un îlot avec un seul occupant. `occupees` désigne les places déjà
    prises (épinglées) avant l'appel ; `voisins_requis` celles dont l'occupant
    attend un partenaire `MUST_DIRECT` non épinglé, qui reçoivent d'abord un
    voisin direct libre. Le nombre de places examinées par îlot lors de la
    recherche de paires varie avec un palier tiré dans `rng`, ou avec
    `tentative` à défaut de générateur.

    Retour:
        Liste triée des indices retenus.
    """
    params: ParametresHeuristiques = parametres or ParametresHeuristiques()
    libres: List[int] = sorted(set(candidates))
    if nombre <= 0:
        return []
    if nombre >= len(libres):
        return libres

    pref: Dict[int, int] = {p: preference_place(grille, p, params.poids_rang) for p in libres}
    sel = _Selection(graphes, libres, occupees)

    def meilleures_libres(ilot: int) -> List[int]:
        return sorted(
            (p for p in graphes.places_de_l_ilot(ilot) if p in sel.restantes),
            key=lambda p: (-pref[p], p),
        )

    # 1) Un élève épinglé qui attend un partenaire garde un voisin direct libre
    for place in sorted(set(voisins_requis)):
        if len(sel.choisies) >= nombre:
            break
        voisins = graphes.voisins_directs(place)
        if any(v in sel.choisies for v in voisins):
            continue
        libres_voisins = sorted((v for v in voisins if v in sel.restantes), key=lambda v: (-pref[v], v))
        if libres_voisins:
            sel.prendre(libres_voisins[0])

    # puis un îlot qui n'a qu'un occupant épinglé reçoit un voisin
    for ilot in sorted(i for i, n in sel.occupation.items() if n == 1):
        if len(sel.choisies) >= nombre:
            break
        meilleures = meilleures_libres(ilot)
        if meilleures:
            sel.prendre(meilleures[0])

    # 2) Paires de places dans un même îlot, tant qu'il reste au moins deux places
    palier: int = params.tirer_palier(rng) if rng is not None else tentative
    largeur: int = params.largeur_exploration(palier)
    while nombre - len(sel.choisies) >= 2:
        meilleure: Optional[Tuple[int, int]] = None
        meilleure_valeur: Optional[int] = None
        for ilot in range(graphes.nb_ilots()):
            for a, b in combinations(meilleures_libres(ilot)[:largeur], 2):
                valeur = pref[a] + pref[b]
                if graphes.sont_voisins_directs(a, b):
                    valeur += params.bonus_paire_voisine
                if meilleure_valeur is None or valeur > meilleure_valeur:
                    meilleure, meilleure_valeur = (a, b), valeur
        if meilleure is None:
            break
        sel.prendre(meilleure[0])
        sel.prendre(meilleure[1])

    # 3) Places restantes une à une, en pénalisant l'ouverture d'un îlot solitaire
    def valeur_seule(p: int) -> int:
        ilot = graphes.ilot(p)
        if sel.occupants(ilot) == 0 and graphes.taille_ilot(ilot) > 1:
            return pref[p] - params.penalite_isolement
        return pref[p]

    while len(sel.choisies) < nombre and sel.restantes:
        sel.prendre(max(sel.restantes, key=lambda p: (valeur_seule(p), -p)))

    # 4) Nettoyage : un échange par îlot resté solitaire
    for ilot in range(graphes.nb_ilots()):
        if graphes.taille_ilot(ilot) < 2 or sel.occupants(ilot) != 1:
            continue
        seuls = [p for p in sel.choisies if graphes.ilot(p) == ilot]
        if len(seuls) != 1:
            # occupant épinglé : on ne peut pas le déplacer
            continue
        remplacants = [
            p for p in sel.restantes
            if graphes.ilot(p) != ilot
            and (sel.occupants(graphes.ilot(p)) >= 1 or graphes.taille_ilot(graphes.ilot(p)) == 1)
        ]
        if not remplacants:
            continue
        sel.rendre(seuls[0])
        sel.prendre(max(remplacants, key=lambda p: (pref[p], -p)))

    return sorted(sel.choisies)
