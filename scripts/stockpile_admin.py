"""Outils d'administration Stockpile : données par défaut, import CSV, export du rapport."""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.catalog_import import import_products, read_products_csv  # noqa: E402
from core.errors import StockpileError  # noqa: E402
from core.inventory_policy import build_report  # noqa: E402
from core.report_export import format_report_csv, report_filename  # noqa: E402
from core.repositories import build_stores  # noqa: E402
from core.seed_data import seed_defaults  # noqa: E402
from core.session import Session  # noqa: E402

logger = logging.getLogger("stockpile.admin")


def _cmd_seed(args: argparse.Namespace) -> int:
    stores = build_stores()
    created = seed_defaults(stores.catalog, stores.users)
    print(f"{created['users']} utilisateurs et {created['products']} produits ajoutés.")
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    stores = build_stores()
    session = Session(stores.users)
    password = args.password or getpass.getpass("Mot de passe: ")
    session.sign_in(args.email, password)

    summary = import_products(session, stores.catalog, read_products_csv(args.input))
    print(
        f"{summary['rows_received']} lignes analysées, {summary['created']} produits créés, "
        f"{summary['skipped_duplicates']} doublons ignorés."
    )
    for rejected in summary["rejected_rows"]:
        print(f"  ligne {rejected['line']}: {rejected['reason']}")
    return 1 if summary["rejected_rows"] else 0


def _cmd_export(args: argparse.Namespace) -> int:
    stores = build_stores()
    output = args.output or Path(report_filename())
    output.write_text(format_report_csv(build_report(stores.catalog.list())), encoding="utf-8")
    print(f"Rapport écrit dans {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Administration du catalogue Stockpile.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée.")
    commands = parser.add_subparsers(dest="command", required=True)

    seed = commands.add_parser("seed", help="Insère les comptes et produits par défaut si le stockage est vide.")
    seed.set_defaults(handler=_cmd_seed)

    importer = commands.add_parser("import", help="Importe des produits depuis un CSV.")
    importer.add_argument("input", type=Path, help="CSV avec au moins une colonne 'name'.")
    importer.add_argument("--email", required=True, help="Compte administrateur.")
    importer.add_argument("--password", help="Mot de passe (demandé si absent).")
    importer.set_defaults(handler=_cmd_import)

    export = commands.add_parser("export", help="Écrit le rapport d'inventaire au format CSV.")
    export.add_argument("--output", type=Path, help="Fichier cible (inventory-report-AAAA-MM-JJ.csv par défaut).")
    export.set_defaults(handler=_cmd_export)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        return args.handler(args)
    except StockpileError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
