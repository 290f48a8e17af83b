# placement/__main__.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _run_exemple(graine: int | None) -> int:
    from .exemples import run_exemple

    run_exemple(graine)
    return 0


def _run_generer(fichier: str, graine: int | None) -> int:
    from .exemples import generer_depuis_fichier

    chemin = Path(fichier)
    if not chemin.is_file():
        print(f"Fichier introuvable : {fichier}", file=sys.stderr)
        return 1
    return generer_depuis_fichier(chemin, graine)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="placement",
        description="Génération de plans de classe en ligne de commande."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Affiche le détail des tentatives.")
    sub = parser.add_subparsers(dest="cmd")

    p_ex = sub.add_parser("exemple", help="Exécute le scénario d'exemple.")
    p_ex.add_argument("--graine", type=int, default=42)
    p_ex.set_defaults(func=lambda a: _run_exemple(a.graine))

    p_gen = sub.add_parser("generer", help="Génère un plan depuis un payload JSON.")
    p_gen.add_argument("fichier")
    p_gen.add_argument("--graine", type=int, default=None)
    p_gen.set_defaults(func=lambda a: _run_generer(a.fichier, a.graine))

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # défaut: si aucune sous-commande n'est fournie, on lance l'exemple
    if not args.cmd:
        return _run_exemple(42)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
