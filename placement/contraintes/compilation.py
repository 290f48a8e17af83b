from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set, Tuple

from .base import Restriction, paire
from .types import TypeRestriction

logger = logging.getLogger(__name__)


class JeuContraintes:
    """Restrictions normalisées, prêtes pour la sélection et le solveur.

    Attributs
    ---------
    paires_interdites : FrozenSet[FrozenSet[str]]
        Paires (`PAIR`) qui ne doivent pas partager un îlot.
    ecarts_interdits : FrozenSet[FrozenSet[str]]
        Paires (`GAP`) qui ne doivent ni partager un îlot, ni être reliées
        par l'adjacence d'écart.
    doivent_etre_voisins : Tuple[Tuple[str, str], ...]
        Paires (`MUST_DIRECT`) à placer sur des sièges voisins directs.
    eleves_fixes : FrozenSet[str]
        Élèves soumis à une restriction `FIXED_SEAT`.
    """

    def __init__(
            self,
            paires_interdites: Iterable[FrozenSet[str]] = (),
            ecarts_interdits: Iterable[FrozenSet[str]] = (),
            doivent_etre_voisins: Iterable[Tuple[str, str]] = (),
            eleves_fixes: Iterable[str] = (),
    ) -> None:
        self.paires_interdites: FrozenSet[FrozenSet[str]] = frozenset(paires_interdites)
        self.ecarts_interdits: FrozenSet[FrozenSet[str]] = frozenset(ecarts_interdits)
        self.doivent_etre_voisins: Tuple[Tuple[str, str], ...] = tuple(doivent_etre_voisins)
        self.eleves_fixes: FrozenSet[str] = frozenset(eleves_fixes)

        self._partenaires: Dict[str, List[str]] = {}
        for a, b in self.doivent_etre_voisins:
            self._partenaires.setdefault(a, []).append(b)
            self._partenaires.setdefault(b, []).append(a)

    def interdit_meme_ilot(self, a: str, b: str) -> bool:
        """`GAP` est plus fort que `PAIR` : il interdit aussi le même îlot."""
        p = paire(a, b)
        return p in self.paires_interdites or p in self.ecarts_interdits

    def interdit_ecart(self, a: str, b: str) -> bool:
        return paire(a, b) in self.ecarts_interdits

    def partenaires_voisins(self, eleve: str) -> List[str]:
        return self._partenaires.get(eleve, [])

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return (
            f"JeuContraintes(pair={len(self.paires_interdites)}, gap={len(self.ecarts_interdits)}, "
            f"voisins={len(self.doivent_etre_voisins)}, fixes={len(self.eleves_fixes)})"
        )


def compiler_restrictions(restrictions: Sequence[Restriction], eleves: Sequence[str]) -> JeuContraintes:
    """Normalise une liste de restrictions pour la liste d'élèves courante.

    Une restriction citant un élève absent, incomplète ou portant deux fois sur
    le même élève est écartée sans erreur.
    """
    presents: Set[str] = set(eleves)
    pair: Set[FrozenSet[str]] = set()
    gap: Set[FrozenSet[str]] = set()
    voisins: List[Tuple[str, str]] = []
    deja_voisins: Set[FrozenSet[str]] = set()
    fixes: Set[str] = set()

    for r in restrictions:
        if r.eleve_a not in presents:
            logger.debug("restriction écartée (élève inconnu %r): %s", r.eleve_a, r.code_machine())
            continue

        if r.type is TypeRestriction.FIXED_SEAT:
            fixes.add(r.eleve_a)
            continue

        if r.eleve_b is None or r.eleve_b not in presents:
            logger.debug("restriction écartée (second élève absent): %s", r.code_machine())
            continue
        if r.est_auto_paire():
            logger.debug("restriction écartée (même élève): %s", r.code_machine())
            continue

        cle = paire(r.eleve_a, r.eleve_b)
        if r.type is TypeRestriction.PAIR:
            pair.add(cle)
        elif r.type is TypeRestriction.GAP:
            gap.add(cle)
        elif r.type is TypeRestriction.MUST_DIRECT and cle not in deja_voisins:
            deja_voisins.add(cle)
            voisins.append((r.eleve_a, r.eleve_b))

    return JeuContraintes(
        paires_interdites=pair,
        ecarts_interdits=gap,
        doivent_etre_voisins=voisins,
        eleves_fixes=fixes,
    )
