from __future__ import annotations

from typing import List, Sequence, Tuple


class Grille:
    """
    Modélise la salle comme une grille `lignes` x `colonnes` de cases.

    Chaque case porte un booléen `existe` : vrai si un siège y est posé.
    L'indice d'une case vaut `ligne * colonnes + colonne` ; les cases sans
    siège gardent leur indice pour rester alignées avec le frontend.

    Exemple :
        grille = Grille.depuis_motif([
            "XX.XX",   # deux tables de 2, séparées par une allée
            "XX.XX",
        ])
    """

    def __init__(self, lignes: int, colonnes: int, existe: Sequence[bool]) -> None:
        if lignes < 0 or colonnes < 0:
            raise ValueError(f"Dimensions invalides: {lignes}x{colonnes}")
        if len(existe) != lignes * colonnes:
            raise ValueError(
                f"Le tableau 'existe' doit contenir {lignes * colonnes} cases, reçu {len(existe)}"
            )
        self._lignes: int = lignes
        self._colonnes: int = colonnes
        # Copie défensive
        self._existe: Tuple[bool, ...] = tuple(bool(v) for v in existe)

    @classmethod
    def vide(cls, lignes: int, colonnes: int) -> "Grille":
        """Construit une grille sans aucun siège."""
        return cls(lignes, colonnes, [False] * (lignes * colonnes))

    @classmethod
    def depuis_motif(cls, motif: Sequence[str]) -> "Grille":
        """
        Construit une grille depuis un motif texte, une chaîne par rangée.

        'X' ou '#' marque un siège, tout autre caractère une case vide.
        Les rangées plus courtes sont complétées par des cases vides.
        """
        colonnes: int = max((len(ligne) for ligne in motif), default=0)
        existe: List[bool] = []
        for ligne in motif:
            for c in range(colonnes):
                existe.append(c < len(ligne) and ligne[c] in "X#")
        return cls(len(motif), colonnes, existe)

    # --- Accès de base -----------------------------------------------------

    @property
    def lignes(self) -> int:
        return self._lignes

    @property
    def colonnes(self) -> int:
        return self._colonnes

    def taille(self) -> int:
        """Nombre total de cases (sièges ou non)."""
        return len(self._existe)

    def existe(self, indice: int) -> bool:
        """Indique si la case `indice` porte un siège."""
        return 0 <= indice < len(self._existe) and self._existe[indice]

    def cases(self) -> Tuple[bool, ...]:
        return self._existe

    def indice(self, ligne: int, colonne: int) -> int:
        return ligne * self._colonnes + colonne

    def ligne_colonne(self, indice: int) -> Tuple[int, int]:
        return divmod(indice, self._colonnes)

    def dans_grille(self, ligne: int, colonne: int) -> bool:
        return 0 <= ligne < self._lignes and 0 <= colonne < self._colonnes

    def places(self) -> List[int]:
        """Indices de toutes les cases portant un siège, dans l'ordre de lecture."""
        return [i for i, v in enumerate(self._existe) if v]

    def nb_places(self) -> int:
        return sum(1 for v in self._existe if v)

    def __str__(self) -> str:
        """Rendu texte rangée par rangée ('X' = siège, '.' = vide)."""
        parts: List[str] = []
        for r in range(self._lignes):
            debut: int = r * self._colonnes
            parts.append("".join("X" if v else "." for v in self._existe[debut:debut + self._colonnes]))
        return "\n".join(parts)


def preference_place(grille: Grille, indice: int, poids_rang: int) -> int:
    """
    Score de « qualité » d'un siège : plus il est proche du tableau (rangée
    faible) et du centre de la salle, plus il est élevé.

    La rangée domine la colonne dès que `poids_rang` dépasse le nombre de
    colonnes. L'écart au centre est doublé pour rester entier.
    """
    r, c = grille.ligne_colonne(indice)
    return (grille.lignes - r) * poids_rang - abs(2 * c - (grille.colonnes - 1))
