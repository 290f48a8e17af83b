from __future__ import annotations

import random
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ParametresHeuristiques:
    """Réglages des heuristiques de génération.

    Attributs
    ---------
    tentatives_max : int
        Nombre maximal de tentatives (sélection + résolution) par génération.
    poids_rang : int
        Poids de la rangée dans la préférence de siège ; doit dépasser le
        nombre de colonnes pour que la rangée domine le centrage.
    bonus_paire_voisine : int
        Bonus d'une paire de sièges choisie dans un îlot quand les deux sièges
        sont voisins directs.
    penalite_isolement : int
        Pénalité d'un siège isolé qui ouvrirait un nouvel îlot à un seul occupant.
    longueur_prefixe_paires : int
        Nombre de meilleurs sièges libres examinés par îlot pour former une paire.
    paliers_variation : int
        Nombre de largeurs d'exploration différentes, tirées au hasard à chaque tentative.
    essais_max : int
        Budget de placements testés par le retour arrière, par tentative.
    """

    tentatives_max: int = 40
    poids_rang: int = 1000
    bonus_paire_voisine: int = 60
    penalite_isolement: int = 250
    longueur_prefixe_paires: int = 6
    paliers_variation: int = 4
    essais_max: int = 200_000

    def largeur_exploration(self, palier: int) -> int:
        """Nombre de sièges candidats par îlot examinés pour un palier de variation."""
        return self.longueur_prefixe_paires + (palier % max(1, self.paliers_variation))

    def tirer_palier(self, rng: random.Random) -> int:
        return rng.randrange(max(1, self.paliers_variation))

    def avec(self, **valeurs: Any) -> "ParametresHeuristiques":
        return replace(self, **valeurs)

    @classmethod
    def depuis_mapping(cls, valeurs: Optional[Mapping[str, Any]]) -> "ParametresHeuristiques":
        """Construit les paramètres à partir d'un dict ; les clés inconnues sont ignorées."""
        connus = {f.name for f in fields(cls)}
        retenus = {k: int(v) for k, v in (valeurs or {}).items() if k in connus}
        return cls(**retenus)

    @classmethod
    def depuis_settings(cls) -> "ParametresHeuristiques":
        """Lit `settings.PLACEMENT_HEURISTIQUES` (défauts si absent)."""
        from django.conf import settings

        return cls.depuis_mapping(getattr(settings, "PLACEMENT_HEURISTIQUES", None))
