from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, Mapping, Optional

from celery import shared_task
from django.core.cache import cache

from .fabrique_ui import demande_depuis_payload
from .modele.graphes import construire_graphes
from .parametres import ParametresHeuristiques
from .solveurs.base import Infaisabilite
from .solveurs.optimiseur import DemandeGeneration, ResultatGeneration, generer_plan

logger = logging.getLogger(__name__)

DUREE_BROUILLON_S = 3600


# --------------------------------------------------------------------------- helpers de conversion

def _cle_brouillon(token: str) -> str:
    return f"pl:{token}:resultat"


def _parse_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Normalise les options et pose les défauts.

    Champs reconnus (tous facultatifs) :
      - seed: int | null      graine du mélange des élèves
      - attempts: int | null  plafond de tentatives (borné par les réglages)
    """
    o: Dict[str, Any] = {**(options or {})}

    seed_raw: Any = o.get("seed")
    try:
        o["seed"] = int(seed_raw) if seed_raw is not None else None
    except (TypeError, ValueError):
        o["seed"] = None

    attempts_raw: Any = o.get("attempts")
    try:
        o["attempts"] = max(1, int(attempts_raw)) if attempts_raw is not None else None
    except (TypeError, ValueError):
        o["attempts"] = None
    return o


def _parametres(options: Mapping[str, Any]) -> ParametresHeuristiques:
    params = ParametresHeuristiques.depuis_settings()
    if options.get("attempts"):
        params = params.avec(tentatives_max=min(params.tentatives_max, int(options["attempts"])))
    return params


def _brouillon_precedent(token: Optional[str]) -> Optional[Dict[str, Any]]:
    if not token:
        return None
    return cache.get(_cle_brouillon(token))


def _reponse_succes(demande: DemandeGeneration, res: ResultatGeneration, token: str) -> Dict[str, Any]:
    assert res.affectation is not None and res.score is not None
    graphes = construire_graphes(demande.grille)
    return {
        "status": "SUCCESS",
        "assignment": {str(p): e for p, e in res.affectation.items() if e},
        "pins": {str(p): e for p, e in res.epingles.items()},
        "score": res.score.en_dict(),
        "attempts": res.tentatives,
        "draft": token,
        "pair_edges": len(graphes.aretes_directes()),
        "gap_edges": len(graphes.aretes_ecart()),
        "message": res.message(),
    }


# --------------------------------------------------------------------------- tâche principale

@shared_task(bind=True)
def t_generer_plan(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Tâche de génération d'un plan :
      - traduit le payload UI en demande autonome (grille, élèves, restrictions, épingles),
      - reprend les épingles du brouillon précédent si le payload n'en fournit pas,
      - lance l'optimiseur multi-tentatives,
      - met le résultat en cache sous le jeton de brouillon.

    En cas d'échec, aucun plan partiel n'est renvoyé ; le plan du brouillon
    précédent est rappelé tel quel dans `previous`.
    """
    options = _parse_options(payload.get("options"))
    token: str = str(payload.get("draft") or secrets.token_urlsafe(16))
    precedent = _brouillon_precedent(payload.get("draft"))

    try:
        demande = demande_depuis_payload(payload)
    except ValueError as exc:
        logger.warning("payload invalide: %s", exc)
        return {"status": "FAILURE", "error": "payload_invalide", "message": str(exc)}

    if "pins" not in payload and precedent:
        demande = DemandeGeneration(
            grille=demande.grille,
            eleves=demande.eleves,
            restrictions=demande.restrictions,
            epingles={int(k): v for k, v in precedent.get("pins", {}).items()},
        )

    res = generer_plan(demande, parametres=_parametres(options), seed=options["seed"])

    if not res.succes:
        assert res.echec is not None
        logger.warning("génération en échec (%s): %s", res.echec.value, res.details)
        echec: Dict[str, Any] = {
            "status": "FAILURE",
            "error": res.echec.value,
            "message": res.message(),
            "details": res.details,
            "attempts": res.tentatives,
            "draft": token,
            "previous": (precedent or {}).get("assignment"),
        }
        if res.echec is Infaisabilite.RESTRICTIONS_INSATISFAITES:
            # rappel lisible des restrictions à assouplir
            echec["restrictions"] = [r.texte_humain() for r in demande.restrictions]
        return echec

    reponse = _reponse_succes(demande, res, token)
    cache.set(_cle_brouillon(token), {"assignment": reponse["assignment"], "pins": reponse["pins"]},
              timeout=DUREE_BROUILLON_S)
    return reponse
