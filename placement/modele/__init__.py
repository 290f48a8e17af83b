from .grille import Grille, preference_place
from .graphes import GraphesGrille, construire_graphes

__all__ = ["Grille", "GraphesGrille", "construire_graphes", "preference_place"]
