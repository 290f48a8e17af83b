from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Infaisabilite(str, Enum):
    """Causes d'échec d'une génération, transmises telles quelles à l'appelant."""

    PLACES_INSUFFISANTES = "places_insuffisantes"
    EPINGLE_EN_DOUBLE = "epingle_en_double"
    EPINGLES_INCOMPATIBLES = "epingles_incompatibles"
    RESTRICTIONS_INSATISFAITES = "restrictions_insatisfaites"


def message_echec(echec: Infaisabilite, details: Optional[Mapping[str, Any]] = None) -> str:
    """Texte lisible, destiné à l'interface, pour une cause d'échec."""
    d: Mapping[str, Any] = details or {}
    if echec is Infaisabilite.PLACES_INSUFFISANTES:
        return f"Pas assez de places. Élèves : {d.get('eleves', '?')}, places : {d.get('places', '?')}."
    if echec is Infaisabilite.EPINGLE_EN_DOUBLE:
        return f"{d.get('eleve', 'Un élève')} est épinglé(e) sur plusieurs places."
    if echec is Infaisabilite.EPINGLES_INCOMPATIBLES:
        return (
            f"Les places épinglées de {d.get('eleve_a', '?')} et {d.get('eleve_b', '?')} "
            "violent une restriction."
        )
    return (
        "Aucun plan valide trouvé avec la disposition et les restrictions actuelles. "
        "Essayez de retirer des restrictions ou d'ajuster les places et les allées."
    )


class ResultatResolution:
    """Résultat d'une tentative de résolution.

    Attributs
    ---------
    affectation : Optional[Dict[int, str]]
        {indice de place: élève} pour les places occupées (ou `None` si échec).
    essais : int
        Nombre de placements testés.
    verifications : int
        Nombre de validations de contraintes effectuées.
    echec : Optional[Infaisabilite]
        Cause de l'échec, `None` en cas de succès.
    details : Dict[str, Any]
        Informations complémentaires sur l'échec (élève fautif, compteurs).
    """

    def __init__(
            self,
            affectation: Optional[Dict[int, str]],
            essais: int,
            verifications: int,
            echec: Optional[Infaisabilite] = None,
            details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.affectation: Optional[Dict[int, str]] = affectation
        self.essais: int = essais
        self.verifications: int = verifications
        self.echec: Optional[Infaisabilite] = echec
        self.details: Dict[str, Any] = details or {}

    @property
    def succes(self) -> bool:
        return self.affectation is not None

    @classmethod
    def en_echec(cls, echec: Infaisabilite, essais: int = 0, verifications: int = 0,
                 **details: Any) -> "ResultatResolution":
        return cls(None, essais=essais, verifications=verifications, echec=echec, details=dict(details))
