from __future__ import annotations

import json
import random
from pathlib import Path
from typing import List, Optional

from .contraintes.base import Restriction
from .contraintes.types import TypeRestriction
from .fabrique_ui import demande_depuis_payload
from .modele.grille import Grille
from .solveurs.optimiseur import DemandeGeneration, ResultatGeneration, affectation_en_liste, generer_plan


def afficher_plan(grille: Grille, res: ResultatGeneration) -> str:
    """Rendu texte du plan : une rangée par ligne, '·' pour une place vide."""
    assert res.affectation is not None
    cases: List[str] = affectation_en_liste(grille, res.affectation)
    largeur: int = max((len(n) for n in cases), default=1) or 1
    lignes: List[str] = []
    for r in range(grille.lignes):
        cellules: List[str] = []
        for c in range(grille.colonnes):
            i = grille.indice(r, c)
            if not grille.existe(i):
                cellules.append(" " * largeur)
            else:
                cellules.append((cases[i] or "·").ljust(largeur))
        lignes.append(" | ".join(cellules).rstrip())
    return "\n".join(lignes)


def construire_exemple(graine: Optional[int] = 42) -> None:
    """
    construit une salle en îlots, une liste d'élèves et quelques restrictions,
    puis lance l'optimiseur et affiche le plan retenu.
    """
    grille = Grille.depuis_motif([
        "XX.XX.XX",
        "XX.XX.XX",
        "........",
        "XX.XX.XX",
        "XX.XX.XX",
    ])
    eleves: List[str] = [f"Élève {chr(65 + i)}" for i in range(18)]
    restrictions = (
        Restriction(eleves[0], eleves[1], TypeRestriction.PAIR),
        Restriction(eleves[2], eleves[3], TypeRestriction.GAP),
        Restriction(eleves[4], eleves[5], TypeRestriction.MUST_DIRECT),
        Restriction(eleves[6], None, TypeRestriction.FIXED_SEAT),
    )
    demande = DemandeGeneration(grille=grille, eleves=tuple(eleves), restrictions=restrictions,
                                epingles={0: eleves[6]})

    res = generer_plan(demande, rng=random.Random(graine))
    _imprimer(grille, res)

    # export JSON « code_machine » des restrictions
    print("\n=== restrictions ===")
    print(json.dumps([r.code_machine() for r in restrictions], ensure_ascii=False, indent=2))


def generer_depuis_fichier(chemin: Path, graine: Optional[int] = None) -> int:
    """Génère un plan depuis un payload JSON (même format que l'API)."""
    payload = json.loads(chemin.read_text(encoding="utf-8"))
    demande = demande_depuis_payload(payload)
    res = generer_plan(demande, rng=random.Random(graine))
    _imprimer(demande.grille, res)
    return 0 if res.succes else 2


def _imprimer(grille: Grille, res: ResultatGeneration) -> None:
    if not res.succes:
        print(f"aucune solution trouvée : {res.message()}")
        return
    assert res.score is not None
    print("=== plan retenu ===")
    print(afficher_plan(grille, res))
    print(f"\n{res.tentatives} tentative(s), score : {res.score.en_dict()}")


def run_exemple(graine: Optional[int] = 42) -> None:
    # alias pour __main__.py
    return construire_exemple(graine)


if __name__ == "__main__":
    construire_exemple()
