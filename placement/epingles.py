# épingles : places imposées aux élèves `FIXED_SEAT`, reportées d'un brouillon à l'autre
from __future__ import annotations

import logging
from typing import AbstractSet, Dict, Mapping, Optional, Sequence

from .modele.grille import Grille

logger = logging.getLogger(__name__)


def reconcilier_epingles(
        precedentes: Optional[Mapping[int, str]],
        *,
        grille: Grille,
        eleves: Sequence[str],
        eleves_fixes: AbstractSet[str],
) -> Dict[int, str]:
    """
    Ne garde que les épingles encore valides : place existante, élève présent
    dans la liste et toujours soumis à `FIXED_SEAT`.

    Un même élève épinglé sur deux places est conservé tel quel : le solveur
    signale ce conflit.
    """
    presents = set(eleves)
    valides: Dict[int, str] = {}
    for place, eleve in (precedentes or {}).items():
        if not grille.existe(place):
            logger.debug("épingle retirée: place %s inexistante (%s)", place, eleve)
        elif eleve not in presents:
            logger.debug("épingle retirée: %s n'est plus dans la liste", eleve)
        elif eleve not in eleves_fixes:
            logger.debug("épingle retirée: %s n'a plus de restriction FIXED_SEAT", eleve)
        else:
            valides[place] = eleve
    return valides


def epingles_depuis_affectation(
        affectation: Mapping[int, Optional[str]],
        eleves_fixes: AbstractSet[str],
) -> Dict[int, str]:
    """Reconstruit {place: élève} pour les élèves fixés, d'après une affectation."""
    return {p: e for p, e in affectation.items() if e is not None and e in eleves_fixes}
