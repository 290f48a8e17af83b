from __future__ import annotations

from enum import Enum


class TypeRestriction(str, Enum):
    """Enum centralisant les types de restrictions saisies par l'enseignant.

    Hérite de `str` pour une sérialisation JSON directe (valeur = nom stable).
    """

    # Binaires (paire d'élèves)
    PAIR = "PAIR"                # jamais dans le même îlot de tables
    GAP = "GAP"                  # ni même îlot, ni de part et d'autre d'une allée
    MUST_DIRECT = "MUST_DIRECT"  # doivent être voisins directs

    # Unaire (élève)
    FIXED_SEAT = "FIXED_SEAT"    # place épinglée, conservée d'un brouillon à l'autre

    def est_binaire(self) -> bool:
        return self is not TypeRestriction.FIXED_SEAT
