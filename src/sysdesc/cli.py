#!/usr/bin/env python3
"""Command line interface.

Usage:
    sysdesc [--store DIR] [--config FILE] [-v] show NAME [--scope KIND ...]
    sysdesc compare NAME1 NAME2 [--scope KIND ...] [--show-all]
    sysdesc export-autoinstall NAME --target DIR

Environment:
    SYSDESC_STORE_DIR     Description store directory
    SYSDESC_LOG_LEVEL     Console log level
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .compare import compare_descriptions
from .config import Settings
from .errors import SysdescError, ExportFailed
from .export import AutoinstallExporter
from .renderers import render_description, render_comparison
from .store import DescriptionStore
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysdesc",
        description="Compare system descriptions and export them as AutoYaST profiles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Show services and packages of a description
    sysdesc show web01 --scope services --scope packages

    # Compare two descriptions
    sysdesc compare web01 web02

    # Write an AutoYaST bundle
    sysdesc export-autoinstall web01 --target /srv/www/autoyast/web01
""",
    )
    parser.add_argument(
        "--store",
        type=Path,
        help="Description store directory (default: from settings)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Settings file (default: search sysdesc.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Show a description")
    show.add_argument("name", help="Description name")
    show.add_argument(
        "--scope",
        action="append",
        dest="scopes",
        help="Only show this scope (repeatable)",
    )

    compare = commands.add_parser("compare", help="Compare two descriptions")
    compare.add_argument("name1", help="First description")
    compare.add_argument("name2", help="Second description")
    compare.add_argument(
        "--scope",
        action="append",
        dest="scopes",
        help="Only compare this scope (repeatable)",
    )
    compare.add_argument(
        "--show-all",
        action="store_true",
        default=None,
        help="Also list elements common to both descriptions",
    )

    export = commands.add_parser(
        "export-autoinstall",
        help="Export a description as AutoYaST profile bundle",
    )
    export.add_argument("name", help="Description name")
    export.add_argument(
        "--target",
        type=Path,
        required=True,
        help="Directory to write the bundle to",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else None,
        log_to_file=False,
    )

    try:
        settings = Settings.load(args.config)
        store = DescriptionStore(args.store or settings.store_dir)

        if args.command == "show":
            description = store.load(args.name)
            render_description(description, kinds=args.scopes, sink=sys.stdout)

        elif args.command == "compare":
            description_a = store.load(args.name1)
            description_b = store.load(args.name2)
            show_all = settings.show_all if args.show_all is None else args.show_all

            comparison = compare_descriptions(description_a, description_b, kinds=args.scopes)
            render_comparison(comparison, show_all=show_all, sink=sys.stdout)

        elif args.command == "export-autoinstall":
            description = store.load(args.name)
            target = AutoinstallExporter(settings).export(description, args.target)
            logger.info(f"Exported '{description.name}' to {target}")

    except ExportFailed as e:
        logger.error(str(e))
        for step, error in e.failures:
            logger.error(f"  {step}: {error}")
        return 1
    except SysdescError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
