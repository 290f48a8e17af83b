from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .base import Infaisabilite, ResultatResolution, message_echec
from .retour_arriere import SolveurRetourArriere
from .score import ScoreCandidat, evaluer_affectation
from .selection import selectionner_places
from ..contraintes.base import Restriction
from ..contraintes.compilation import JeuContraintes, compiler_restrictions
from ..epingles import epingles_depuis_affectation, reconcilier_epingles
from ..modele.graphes import GraphesGrille, construire_graphes
from ..modele.grille import Grille
from ..parametres import ParametresHeuristiques

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemandeGeneration:
    """Entrée complète et autonome d'une génération de plan.

    Attributs
    ---------
    grille : Grille
        Disposition des places.
    eleves : Tuple[str, ...]
        Liste ordonnée des élèves, déjà dédoublonnée.
    restrictions : Tuple[Restriction, ...]
        Restrictions saisies (les invalides seront écartées).
    epingles : Mapping[int, str]
        Épingles du brouillon précédent {place: élève}.
    """

    grille: Grille
    eleves: Tuple[str, ...]
    restrictions: Tuple[Restriction, ...] = ()
    epingles: Mapping[int, str] = field(default_factory=dict)


class ResultatGeneration:
    """Résultat d'une génération : plan retenu ou cause d'échec.

    Attributs
    ---------
    affectation : Optional[Dict[int, Optional[str]]]
        {indice de case: élève ou None} pour toutes les places existantes.
    score : Optional[ScoreCandidat]
        Score du plan retenu.
    epingles : Dict[int, str]
        Épingles à reporter sur le brouillon suivant.
    tentatives : int
        Nombre de tentatives effectuées.
    echec : Optional[Infaisabilite]
        Cause de l'échec, `None` en cas de succès.
    details : Dict[str, Any]
        Complément d'information sur l'échec.
    """

    def __init__(
            self,
            affectation: Optional[Dict[int, Optional[str]]] = None,
            score: Optional[ScoreCandidat] = None,
            epingles: Optional[Dict[int, str]] = None,
            tentatives: int = 0,
            echec: Optional[Infaisabilite] = None,
            details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.affectation: Optional[Dict[int, Optional[str]]] = affectation
        self.score: Optional[ScoreCandidat] = score
        self.epingles: Dict[int, str] = epingles or {}
        self.tentatives: int = tentatives
        self.echec: Optional[Infaisabilite] = echec
        self.details: Dict[str, Any] = details or {}

    @property
    def succes(self) -> bool:
        return self.echec is None and self.affectation is not None

    def message(self) -> str:
        if self.echec is None:
            return "Plan généré."
        return message_echec(self.echec, self.details)


class OptimiseurMultiTentatives:
    """
    Répète sélection des places + retour arrière avec un ordre d'élèves mélangé,
    et garde le meilleur plan au sens de `ScoreCandidat`.

    `rng` est injectable pour des tests reproductibles ; par défaut un
    `random.Random` non amorcé.
    """

    def __init__(
            self,
            parametres: Optional[ParametresHeuristiques] = None,
            *,
            rng: Optional[random.Random] = None,
            seed: Optional[int] = None,
    ) -> None:
        self.parametres: ParametresHeuristiques = parametres or ParametresHeuristiques()
        self.rng: random.Random = rng if rng is not None else random.Random(seed)

    def generer(self, demande: DemandeGeneration) -> ResultatGeneration:
        grille: Grille = demande.grille
        eleves: List[str] = list(demande.eleves)
        graphes: GraphesGrille = construire_graphes(grille)
        jeu: JeuContraintes = compiler_restrictions(demande.restrictions, eleves)
        epingles: Dict[int, str] = reconcilier_epingles(
            demande.epingles, grille=grille, eleves=eleves, eleves_fixes=jeu.eleves_fixes
        )

        nb_places: int = grille.nb_places()
        if len(eleves) > nb_places:
            details = {"eleves": len(eleves), "places": nb_places}
            logger.info("génération impossible: %s élèves pour %s places", len(eleves), nb_places)
            return ResultatGeneration(echec=Infaisabilite.PLACES_INSUFFISANTES, details=details)

        solveur = SolveurRetourArriere(grille, graphes, jeu, self.parametres)
        epinglees = set(epingles)
        candidates: List[int] = [p for p in grille.places() if p not in epinglees]
        eleves_epingles = set(epingles.values())
        restants: List[str] = [e for e in eleves if e not in eleves_epingles]
        voisins_requis: List[int] = [
            p for p, e in epingles.items()
            if any(partenaire not in eleves_epingles for partenaire in jeu.partenaires_voisins(e))
        ]

        meilleur: Optional[Dict[int, str]] = None
        meilleur_score: Optional[ScoreCandidat] = None
        tentatives: int = 0

        for tentative in range(max(1, self.parametres.tentatives_max)):
            tentatives = tentative + 1
            ordre: List[str] = list(restants)
            self.rng.shuffle(ordre)

            places: List[int] = selectionner_places(
                candidates,
                len(ordre),
                grille=grille,
                graphes=graphes,
                occupees=epinglees,
                tentative=tentative,
                parametres=self.parametres,
                rng=self.rng,
                voisins_requis=voisins_requis,
            )
            res: ResultatResolution = solveur.resoudre(places, ordre, epingles)

            if res.echec in (Infaisabilite.EPINGLE_EN_DOUBLE, Infaisabilite.EPINGLES_INCOMPATIBLES):
                logger.info("épingles en conflit: %s", res.details)
                return ResultatGeneration(tentatives=tentatives, echec=res.echec, details=res.details)
            if res.affectation is None:
                logger.debug("tentative %d: échec après %d essais", tentative, res.essais)
                continue

            score = evaluer_affectation(res.affectation, grille=grille, graphes=graphes, parametres=self.parametres)
            logger.debug("tentative %d: %r (%d essais)", tentative, score, res.essais)
            if score.meilleur_que(meilleur_score):
                meilleur, meilleur_score = res.affectation, score
            if meilleur_score.places_isolees == 0:
                break

        details: Dict[str, Any] = {}
        if meilleur is None and len(candidates) > len(restants):
            # aucun sous-ensemble n'a convenu : recherche sur toutes les places libres
            ordre = list(restants)
            self.rng.shuffle(ordre)
            res = solveur.resoudre(candidates, ordre, epingles)
            logger.info("recherche élargie à %d places libres: %s", len(candidates),
                        "succès" if res.affectation is not None else "échec")
            if res.affectation is not None:
                meilleur = res.affectation
                meilleur_score = evaluer_affectation(meilleur, grille=grille, graphes=graphes,
                                                     parametres=self.parametres)
                details = {"recherche_elargie": True}

        if meilleur is None:
            logger.info("aucun plan valide après %d tentatives", tentatives)
            return ResultatGeneration(
                tentatives=tentatives,
                echec=Infaisabilite.RESTRICTIONS_INSATISFAITES,
                details={"tentatives": tentatives},
            )

        affectation: Dict[int, Optional[str]] = {p: meilleur.get(p) for p in grille.places()}
        logger.info("plan retenu après %d tentative(s): %r", tentatives, meilleur_score)
        return ResultatGeneration(
            affectation=affectation,
            score=meilleur_score,
            epingles=epingles_depuis_affectation(affectation, jeu.eleves_fixes),
            tentatives=tentatives,
            details=details,
        )


def generer_plan(
        demande: DemandeGeneration,
        *,
        parametres: Optional[ParametresHeuristiques] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
) -> ResultatGeneration:
    """Point d'entrée fonctionnel : une demande en entrée, un résultat en sortie."""
    return OptimiseurMultiTentatives(parametres, rng=rng, seed=seed).generer(demande)


def affectation_en_liste(grille: Grille, affectation: Mapping[int, Optional[str]]) -> List[str]:
    """Vue « une case par indice » ('' pour une case vide ou sans siège), comme côté UI."""
    return [affectation.get(i) or "" for i in range(grille.taille())]
