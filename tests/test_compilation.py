from __future__ import annotations

from placement.contraintes.base import Restriction
from placement.contraintes.compilation import compiler_restrictions
from placement.contraintes.types import TypeRestriction as T

ELEVES = ["Alice", "Bob", "Chloé", "David"]


def test_types_repartis():
    jeu = compiler_restrictions(
        [
            Restriction("Alice", "Bob", T.PAIR),
            Restriction("Chloé", "David", T.GAP),
            Restriction("Alice", "Chloé", T.MUST_DIRECT),
            Restriction("David", None, T.FIXED_SEAT),
        ],
        ELEVES,
    )
    assert jeu.paires_interdites == {frozenset({"Alice", "Bob"})}
    assert jeu.ecarts_interdits == {frozenset({"Chloé", "David"})}
    assert jeu.doivent_etre_voisins == (("Alice", "Chloé"),)
    assert jeu.eleves_fixes == {"David"}


def test_gap_interdit_aussi_le_meme_ilot():
    jeu = compiler_restrictions(
        [Restriction("Alice", "Bob", T.PAIR), Restriction("Chloé", "David", T.GAP)], ELEVES
    )
    assert jeu.interdit_meme_ilot("Bob", "Alice")
    assert jeu.interdit_meme_ilot("David", "Chloé")
    assert jeu.interdit_ecart("David", "Chloé")
    assert not jeu.interdit_ecart("Alice", "Bob")


def test_restrictions_invalides_ecartees():
    jeu = compiler_restrictions(
        [
            Restriction("Alice", "Zoé", T.PAIR),     # élève inconnu
            Restriction("Zoé", None, T.FIXED_SEAT),  # élève inconnu
            Restriction("Bob", None, T.GAP),         # second élève manquant
            Restriction("Alice", "Alice", T.PAIR),   # même élève
        ],
        ELEVES,
    )
    assert not jeu.paires_interdites
    assert not jeu.ecarts_interdits
    assert not jeu.eleves_fixes


def test_auto_paire_casse_ignoree():
    assert Restriction("Alice", " alice", T.PAIR).est_auto_paire()
    assert not Restriction("Alice", "Bob", T.PAIR).est_auto_paire()


def test_voisins_dedoublonnes():
    jeu = compiler_restrictions(
        [Restriction("Alice", "Bob", T.MUST_DIRECT), Restriction("Bob", "Alice", T.MUST_DIRECT)], ELEVES
    )
    assert len(jeu.doivent_etre_voisins) == 1
    assert jeu.partenaires_voisins("Bob") == ["Alice"]
    assert jeu.partenaires_voisins("Chloé") == []
