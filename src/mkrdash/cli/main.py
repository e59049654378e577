"""
mkrdash command line.

Usage:
    mkrdash dashboards                       # list dashboards as JSON
    mkrdash dashboards generate [-p] <file>  # render YAML, create/update
    mkrdash dashboards pull                  # save dashboard-<id>.json files
    mkrdash dashboards push -F <file>        # create/update from a JSON file
    mkrdash dashboards migrate --id <id>     # legacy -> markdown widget
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from mkrdash import __version__
from mkrdash.config.settings import get_settings
from mkrdash.core.errors import main_with_error_handling
from mkrdash.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mkrdash", description="Mackerel custom dashboards CLI")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--apikey", help="Mackerel API key (default: $MACKEREL_APIKEY)")
    parser.add_argument("--apibase", help="Mackerel API base URL (default: $MACKEREL_APIBASE)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command")

    dashboards_parser = subparsers.add_parser(
        "dashboards",
        help="Manipulate custom dashboards",
        description="Manipulate custom dashboards. With no subcommand, lists all dashboards.",
    )
    dashboards_subparsers = dashboards_parser.add_subparsers(dest="dashboards_command")

    generate_parser = dashboards_subparsers.add_parser(
        "generate", help="Generate a custom dashboard from a YAML file"
    )
    generate_parser.add_argument("file", help="Path to dashboard YAML file")
    generate_parser.add_argument(
        "-p", "--print", dest="print_only", action="store_true",
        help="Print the markdown to stdout instead of creating the dashboard",
    )
    generate_parser.add_argument(
        "--org", help="Organization name for graph URLs (skips the API lookup)"
    )

    pull_parser = dashboards_subparsers.add_parser(
        "pull", help="Save all dashboards to dashboard-<id>.json files"
    )
    pull_parser.add_argument("--output-dir", default=".", help="Directory for the files")

    push_parser = dashboards_subparsers.add_parser(
        "push", help="Create or update a dashboard from a JSON file"
    )
    push_parser.add_argument("-F", "--file-path", help="Dashboard JSON file")

    migrate_parser = dashboards_subparsers.add_parser(
        "migrate", help="Migrate a legacy dashboard to a markdown widget dashboard"
    )
    migrate_parser.add_argument("--id", dest="dashboard_id", help="Dashboard ID")
    migrate_parser.add_argument(
        "--output-dir", default=".", help="Where to save the dashboard if creation fails"
    )

    return parser


@main_with_error_handling()
def run(args: argparse.Namespace) -> int:
    from mkrdash.cli.dashboards import (
        generate_dashboards_command,
        list_dashboards_command,
        migrate_dashboard_command,
        pull_dashboards_command,
        push_dashboard_command,
    )

    settings = get_settings(apikey=args.apikey, apibase=args.apibase)

    if args.dashboards_command == "generate":
        return generate_dashboards_command(
            args.file, print_only=args.print_only, org=args.org, settings=settings
        )
    if args.dashboards_command == "pull":
        return pull_dashboards_command(args.output_dir, settings=settings)
    if args.dashboards_command == "push":
        return push_dashboard_command(args.file_path, settings=settings)
    if args.dashboards_command == "migrate":
        return migrate_dashboard_command(
            args.dashboard_id, args.output_dir, settings=settings
        )
    return list_dashboards_command(settings=settings)


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.WARNING, verbose=args.verbose)

    if args.command != "dashboards":
        parser.print_help()
        sys.exit(0)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
