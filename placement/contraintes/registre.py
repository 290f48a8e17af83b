from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .base import Restriction
from .types import TypeRestriction

FabriqueRestriction = Callable[[Mapping[str, Any], "ContexteFabrique"], Optional[Restriction]]

logger = logging.getLogger(__name__)


class ContexteFabrique:
    """Contexte nécessaire pour reconstruire une restriction à partir d'un dict.

    Attributs
    ---------
    noms : frozenset[str]
        Noms des élèves de la liste courante ; une restriction citant un autre
        nom est écartée.
    """

    def __init__(self, noms: Iterable[str]) -> None:
        self.noms: frozenset[str] = frozenset(noms)

    def connu(self, nom: Optional[str]) -> bool:
        return nom is not None and nom in self.noms


_REGISTRE: Dict[TypeRestriction, FabriqueRestriction] = {}


def enregistrer(type_r: TypeRestriction):
    """Décorateur enregistrant une fabrique pour un `TypeRestriction`."""

    def deco(fabrique: FabriqueRestriction) -> FabriqueRestriction:
        _REGISTRE[type_r] = fabrique
        return fabrique

    return deco


def restriction_depuis_code(code: Mapping[str, Any], contexte: ContexteFabrique) -> Optional[Restriction]:
    """Reconstitue une restriction à partir d'un dictionnaire « code_machine ».

    Retourne `None` si la restriction doit être écartée (élève inconnu) ; le
    code écarté est journalisé en DEBUG. Lève `ValueError` si le code n'est
    pas un dictionnaire ou si son type est inconnu, `KeyError` si aucune
    fabrique n'est enregistrée pour ce type.
    """
    if not isinstance(code, Mapping):
        raise ValueError(f"Restriction mal formée: {code!r}")
    type_valeur: str = str(code.get("type", "")).strip().upper()
    try:
        type_r: TypeRestriction = TypeRestriction(type_valeur)
    except ValueError as exc:
        raise ValueError(f"Type de restriction inconnu: {type_valeur!r}") from exc

    fab: Optional[FabriqueRestriction] = _REGISTRE.get(type_r)
    if fab is None:
        raise KeyError(f"Aucune fabrique enregistrée pour le type {type_r}")
    restriction: Optional[Restriction] = fab(code, contexte)
    if restriction is None:
        logger.debug("restriction écartée (élève inconnu): %r", dict(code))
    return restriction
