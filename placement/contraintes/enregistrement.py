from __future__ import annotations

from typing import Any, Mapping, Optional

from .base import Restriction
from .registre import ContexteFabrique, enregistrer
from .types import TypeRestriction


def _nom(code: Mapping[str, Any], cle: str) -> Optional[str]:
    brut = code.get(cle)
    if brut is None:
        return None
    nom = str(brut).strip()
    return nom or None


def _binaire(type_r: TypeRestriction, code: Mapping[str, Any], ctx: ContexteFabrique) -> Optional[Restriction]:
    a, b = _nom(code, "a"), _nom(code, "b")
    if not ctx.connu(a) or not ctx.connu(b):
        return None
    return Restriction(eleve_a=a, eleve_b=b, type=type_r)


@enregistrer(TypeRestriction.PAIR)
def _fab_pair(code: Mapping[str, Any], ctx: ContexteFabrique):
    return _binaire(TypeRestriction.PAIR, code, ctx)


@enregistrer(TypeRestriction.GAP)
def _fab_gap(code: Mapping[str, Any], ctx: ContexteFabrique):
    return _binaire(TypeRestriction.GAP, code, ctx)


@enregistrer(TypeRestriction.MUST_DIRECT)
def _fab_must_direct(code: Mapping[str, Any], ctx: ContexteFabrique):
    return _binaire(TypeRestriction.MUST_DIRECT, code, ctx)


@enregistrer(TypeRestriction.FIXED_SEAT)
def _fab_fixed_seat(code: Mapping[str, Any], ctx: ContexteFabrique):
    """Seul le champ `a` compte ; un éventuel `b` envoyé par l'UI est ignoré."""
    a = _nom(code, "a")
    if not ctx.connu(a):
        return None
    return Restriction(eleve_a=a, eleve_b=None, type=TypeRestriction.FIXED_SEAT)
