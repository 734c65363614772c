"""Interface en ligne de commande stmtrecon."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from stmtrecon import __version__
from stmtrecon.config import ReconConfig, StmtReconError
from stmtrecon.io_tables import load_table, load_tables
from stmtrecon.matching.linker import Matcher, build_classifier
from stmtrecon.report import print_report_console


def cmd_headers(filepath: str, sheet: str | None = None, config_path: str | None = None) -> int:
    """Affiche chaque en-tête d'un fichier avec le type détecté."""
    config = ReconConfig.load(config_path) if config_path else ReconConfig()
    table = load_table(filepath, sheet)
    classifier = build_classifier(config)
    print(f"En-têtes de {filepath}:")
    for idx, header in enumerate(table.headers):
        print(f"  [{idx}] {header!r} -> {classifier.classify(header).value}")
    return 0


def cmd_run(
    file_a: str | None,
    file_b: str | None,
    *,
    config_path: str | None = None,
    threshold: float | None = None,
    sheet_a: str | None = None,
    sheet_b: str | None = None,
) -> int:
    """Exécute le rapprochement entre deux fichiers et affiche le rapport."""
    config = ReconConfig.load(config_path) if config_path else ReconConfig()
    overrides: dict[str, object] = {}
    if file_a:
        overrides["file_a"] = file_a
    if file_b:
        overrides["file_b"] = file_b
    if sheet_a is not None:
        overrides["sheet_a"] = sheet_a
    if sheet_b is not None:
        overrides["sheet_b"] = sheet_b
    if threshold is not None:
        overrides["threshold"] = threshold
    if overrides:
        config = replace(config, **overrides)

    if not config.file_a or not config.file_b:
        print("Erreur: deux fichiers requis (arguments ou file_a/file_b dans la config).", file=sys.stderr)
        return 1

    table_a, table_b = load_tables(config)

    result = Matcher(config).run(table_a, table_b)
    print_report_console(result, table_a, table_b)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stmtrecon",
        description="Rapprochement de relevés bancaires aux colonnes hétérogènes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée")

    subparsers = parser.add_subparsers(dest="command", help="Commandes")

    # headers
    p_headers = subparsers.add_parser("headers", help="Afficher le type détecté de chaque en-tête")
    p_headers.add_argument("file", help="Fichier CSV/xlsx/ods")
    p_headers.add_argument("--sheet", help="Feuille (défaut : la première)")
    p_headers.add_argument("--config", "-c", help="Fichier config JSON")

    # run
    p_run = subparsers.add_parser("run", help="Rapprocher deux fichiers")
    p_run.add_argument("file_a", nargs="?", help="Fichier A (parcouru dans l'ordre)")
    p_run.add_argument("file_b", nargs="?", help="Fichier B")
    p_run.add_argument("--config", "-c", help="Fichier config JSON")
    p_run.add_argument("--threshold", "-t", type=float, help="Seuil de similarité (0-1)")
    p_run.add_argument("--sheet-a", help="Feuille du fichier A")
    p_run.add_argument("--sheet-b", help="Feuille du fichier B")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "headers":
            return cmd_headers(args.file, args.sheet, args.config)

        if args.command == "run":
            return cmd_run(
                args.file_a,
                args.file_b,
                config_path=args.config,
                threshold=args.threshold,
                sheet_a=args.sheet_a,
                sheet_b=args.sheet_b,
            )
    except StmtReconError as e:
        print(f"Erreur: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
