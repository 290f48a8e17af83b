from .base import Infaisabilite, ResultatResolution, message_echec
from .optimiseur import DemandeGeneration, OptimiseurMultiTentatives, ResultatGeneration, generer_plan

__all__ = [
    "DemandeGeneration",
    "Infaisabilite",
    "OptimiseurMultiTentatives",
    "ResultatGeneration",
    "ResultatResolution",
    "generer_plan",
    "message_echec",
]
