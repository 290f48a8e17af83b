# placement/fabrique_ui.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .contraintes import enregistrement  # noqa: F401  (enregistre les fabriques)
from .contraintes.base import Restriction
from .contraintes.registre import ContexteFabrique, restriction_depuis_code
from .modele.grille import Grille
from .solveurs.optimiseur import DemandeGeneration

logger = logging.getLogger(__name__)


# --- helpers ---------------------------------------------------------------

def analyser_noms(texte: str) -> List[str]:
    """
    Une ligne par élève : espaces superflus retirés, lignes vides ignorées,
    doublons (casse ignorée) retirés en gardant la première graphie.
    """
    vus: set[str] = set()
    out: List[str] = []
    for ligne in (texte or "").splitlines():
        nom = ligne.strip()
        if not nom or nom.lower() in vus:
            continue
        vus.add(nom.lower())
        out.append(nom)
    return out


def _noms_depuis_payload(payload: Mapping[str, Any]) -> List[str]:
    """Accepte `students` (liste de noms ou de dicts {"name": ...}) ou `names_text` ; lève `ValueError` sinon."""
    students = payload.get("students")
    if students is None:
        return analyser_noms(str(payload.get("names_text", "")))
    if not isinstance(students, (list, tuple)):
        raise ValueError(f"liste d'élèves invalide: {type(students).__name__}")
    lignes: List[str] = []
    for s in students:
        lignes.append(str(s.get("name", "")) if isinstance(s, Mapping) else str(s))
    return analyser_noms("\n".join(lignes))


def grille_depuis_payload(grid: Mapping[str, Any]) -> Grille:
    """Lève `ValueError` si la grille est mal formée."""
    try:
        lignes = int(grid["rows"])
        colonnes = int(grid["cols"])
        existe = [bool(v) for v in grid["exists"]]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"grille invalide: {exc}") from exc
    return Grille(lignes, colonnes, existe)


def epingles_depuis_payload(pins: Optional[Mapping[str, Any]]) -> Dict[int, str]:
    """Convertit {"12": "Alice"} en {12: "Alice"} ; les entrées vides sont ignorées."""
    out: Dict[int, str] = {}
    for cle, nom in (pins or {}).items():
        if not nom:
            continue
        try:
            out[int(cle)] = str(nom).strip()
        except ValueError as exc:
            raise ValueError(f"Clé de place invalide: {cle!r}") from exc
    return out


# --- public ----------------------------------------------------------------

def restrictions_depuis_ui(restrictions_ui: Sequence[Mapping[str, Any]], eleves: Sequence[str]) -> List[Restriction]:
    """
    Traduit la liste brute des restrictions UI ({a, b, type}) en objets métier
    via le registre. Une restriction de type inconnu ou citant un élève absent
    est écartée.
    """
    ctx = ContexteFabrique(eleves)
    out: List[Restriction] = []
    for code in restrictions_ui or []:
        try:
            r = restriction_depuis_code(code, ctx)
        except ValueError as exc:
            logger.debug("restriction UI ignorée (%s)", exc)
            continue
        if r is not None:
            out.append(r)
    return out


def demande_depuis_payload(payload: Mapping[str, Any]) -> DemandeGeneration:
    """Construit une `DemandeGeneration` autonome à partir du payload du navigateur."""
    grille = grille_depuis_payload(payload.get("grid") or {})
    eleves = _noms_depuis_payload(payload)
    restrictions = restrictions_depuis_ui(payload.get("restrictions") or [], eleves)
    return DemandeGeneration(
        grille=grille,
        eleves=tuple(eleves),
        restrictions=tuple(restrictions),
        epingles=epingles_depuis_payload(payload.get("pins")),
    )
