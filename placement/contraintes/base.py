from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from .types import TypeRestriction


@dataclass(frozen=True)
class Restriction:
    """Restriction déclarée par l'enseignant.

    Attributs
    ---------
    eleve_a : str
        Premier élève concerné.
    eleve_b : Optional[str]
        Second élève pour les types binaires, `None` pour `FIXED_SEAT`.
    type : TypeRestriction
        Nature de la restriction.
    """

    eleve_a: str
    eleve_b: Optional[str]
    type: TypeRestriction

    def est_auto_paire(self) -> bool:
        """Vrai si les deux sujets désignent le même élève (casse ignorée)."""
        return self.eleve_b is not None and self.eleve_a.strip().lower() == self.eleve_b.strip().lower()

    def texte_humain(self) -> str:
        a, b = self.eleve_a, self.eleve_b
        if self.type is TypeRestriction.PAIR:
            return f"{a} et {b} ne doivent pas être sur le même îlot"
        if self.type is TypeRestriction.GAP:
            return f"{a} et {b} ne doivent être ni sur le même îlot, ni de part et d'autre d'une allée"
        if self.type is TypeRestriction.MUST_DIRECT:
            return f"{a} et {b} doivent être assis côte à côte"
        return f"{a} garde sa place"

    def code_machine(self) -> Dict[str, Any]:
        """Représentation sérialisable, stable et exploitable par des outils."""
        code: Dict[str, Any] = {"type": self.type.value, "a": self.eleve_a}
        if self.eleve_b is not None:
            code["b"] = self.eleve_b
        return code


def paire(a: str, b: str) -> FrozenSet[str]:
    """Paire non ordonnée de noms d'élèves."""
    return frozenset((a, b))
