from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from .base import Infaisabilite, ResultatResolution
from ..contraintes.compilation import JeuContraintes
from ..modele.graphes import GraphesGrille
from ..modele.grille import Grille, preference_place
from ..parametres import ParametresHeuristiques

logger = logging.getLogger(__name__)


class SolveurRetourArriere:
    """Retour arrière (backtracking) place par place, places les plus contraintes d'abord.

    Caractéristiques
    ----------------
    - Les épingles sont posées avant la recherche ; leurs places et leurs
      élèves sortent du problème.
    - Ordre des places : degré d'adjacence directe croissant, puis préférence
      décroissante, puis indice.
    - Les élèves sont essayés dans l'ordre reçu (mélangé par l'appelant).
    - `MUST_DIRECT` : si le partenaire n'est pas encore placé, on vérifie
      seulement qu'un voisin direct libre existe ; ce voisin n'est pas réservé
      et peut être consommé plus tard par un autre élève.
    """

    def __init__(
            self,
            grille: Grille,
            graphes: GraphesGrille,
            jeu: JeuContraintes,
            parametres: Optional[ParametresHeuristiques] = None,
    ) -> None:
        self.grille: Grille = grille
        self.graphes: GraphesGrille = graphes
        self.jeu: JeuContraintes = jeu
        self.parametres: ParametresHeuristiques = parametres or ParametresHeuristiques()

        self._affectation: Dict[int, str] = {}
        self._position: Dict[str, int] = {}
        self._epingles: Dict[int, str] = {}
        self._reserve: Set[int] = set()
        self._ordre: List[int] = []
        self._restants: List[str] = []
        self._utilises: Set[str] = set()
        self.essais: int = 0
        self.verifications: int = 0

    # ------------------------------------------------------------------ API

    def ordonner_places(self, places: Sequence[int]) -> List[int]:
        """Places les plus contraintes d'abord (moins de voisins directs)."""
        poids: int = self.parametres.poids_rang
        return sorted(
            places,
            key=lambda p: (self.graphes.degre_direct(p), -preference_place(self.grille, p, poids), p),
        )

    def resoudre(
            self,
            places: Sequence[int],
            eleves: Sequence[str],
            epingles: Optional[Mapping[int, str]] = None,
    ) -> ResultatResolution:
        """Affecte `eleves` aux `places` en respectant épingles et restrictions.

        Retour:
            `ResultatResolution` avec l'affectation complète (épingles comprises)
            ou une cause d'échec ; aucune exception n'est levée pour un échec.
        """
        self._reinitialiser()
        epingles_triees: List[Tuple[int, str]] = sorted((epingles or {}).items())

        for place, eleve in epingles_triees:
            if eleve in self._position:
                return ResultatResolution.en_echec(
                    Infaisabilite.EPINGLE_EN_DOUBLE, eleve=eleve, places=[self._position[eleve], place]
                )
            self._epingles[place] = eleve
            self._position[eleve] = place
        self._affectation = dict(self._epingles)

        conflit = self._conflit_entre_epingles(epingles_triees)
        if conflit is not None:
            return ResultatResolution.en_echec(
                Infaisabilite.EPINGLES_INCOMPATIBLES, eleve_a=conflit[0], eleve_b=conflit[1]
            )

        self._restants = [e for e in eleves if e not in self._position]
        self._ordre = self.ordonner_places([p for p in places if p not in self._epingles])
        self._reserve = set(self._ordre)

        if len(self._ordre) < len(self._restants):
            return ResultatResolution.en_echec(
                Infaisabilite.PLACES_INSUFFISANTES,
                eleves=len(self._restants) + len(self._epingles),
                places=len(self._ordre) + len(self._epingles),
            )

        if self._retour_arriere(0):
            return ResultatResolution(dict(self._affectation), essais=self.essais, verifications=self.verifications)

        budget_epuise: bool = self.essais > self.parametres.essais_max
        if budget_epuise:
            logger.debug("budget de %d essais épuisé", self.parametres.essais_max)
        return ResultatResolution.en_echec(
            Infaisabilite.RESTRICTIONS_INSATISFAITES,
            essais=self.essais,
            verifications=self.verifications,
            budget_epuise=budget_epuise,
        )

    def peut_placer(self, eleve: str, place: int) -> bool:
        """Vérifie qu'`eleve` peut s'asseoir en `place` vu l'affectation partielle."""
        self.verifications += 1

        epingle: Optional[str] = self._epingles.get(place)
        if epingle is not None and epingle != eleve:
            return False

        for autre_place in self.graphes.places_de_l_ilot(self.graphes.ilot(place)):
            autre = self._affectation.get(autre_place)
            if autre is not None and autre_place != place and self.jeu.interdit_meme_ilot(eleve, autre):
                return False

        for voisin in self.graphes.voisins_ecart(place):
            autre = self._affectation.get(voisin)
            if autre is not None and self.jeu.interdit_ecart(eleve, autre):
                return False

        for partenaire in self.jeu.partenaires_voisins(eleve):
            place_partenaire: Optional[int] = self._position.get(partenaire)
            if place_partenaire is not None:
                if not self.graphes.sont_voisins_directs(place, place_partenaire):
                    return False
            elif not any(self._reservable(v, partenaire) for v in self.graphes.voisins_directs(place)):
                return False

        return True

    # ------------------------------------------------------------------ interne

    def _reinitialiser(self) -> None:
        self._affectation = {}
        self._position = {}
        self._epingles = {}
        self._reserve = set()
        self._ordre = []
        self._restants = []
        self._utilises = set()
        self.essais = 0
        self.verifications = 0

    def _reservable(self, place: int, partenaire: str) -> bool:
        if place not in self._reserve or place in self._affectation:
            return False
        epingle: Optional[str] = self._epingles.get(place)
        return epingle is None or epingle == partenaire

    def _conflit_entre_epingles(self, epingles: Sequence[Tuple[int, str]]) -> Optional[Tuple[str, str]]:
        """Première paire d'élèves épinglés qui viole une restriction, sinon `None`."""
        for i, (pa, a) in enumerate(epingles):
            for pb, b in epingles[i + 1:]:
                if self.graphes.ilot(pa) == self.graphes.ilot(pb) and self.jeu.interdit_meme_ilot(a, b):
                    return a, b
                if pb in self.graphes.voisins_ecart(pa) and self.jeu.interdit_ecart(a, b):
                    return a, b
                if b in self.jeu.partenaires_voisins(a) and not self.graphes.sont_voisins_directs(pa, pb):
                    return a, b
        return None

    def _retour_arriere(self, i: int) -> bool:
        if len(self._utilises) == len(self._restants):
            return True
        if i >= len(self._ordre):
            return False

        place: int = self._ordre[i]
        for eleve in self._restants:
            if eleve in self._utilises:
                continue
            self.essais += 1
            if self.essais > self.parametres.essais_max:
                return False
            if not self.peut_placer(eleve, place):
                continue

            self._affectation[place] = eleve
            self._position[eleve] = place
            self._utilises.add(eleve)

            if self._retour_arriere(i + 1):
                return True

            self._utilises.remove(eleve)
            del self._position[eleve]
            del self._affectation[place]

        # Place laissée vide, seulement s'il reste assez de places derrière
        if len(self._ordre) - i - 1 >= len(self._restants) - len(self._utilises):
            return self._retour_arriere(i + 1)
        return False
