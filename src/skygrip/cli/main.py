"""CLI entry point for Skygrip."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from ..store.kinds import default_registry
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="skygrip",
        description="Skygrip - typed entity storage and full-text search on Redis",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Log store round trips")

    subparsers = parser.add_subparsers(dest="command", required=False)

    # Status command
    subparsers.add_parser("status", help="Show server version and Redis reachability")

    # Index commands
    index_parser = subparsers.add_parser("index", help="Manage search indexes")
    index_subparsers = index_parser.add_subparsers(dest="index_cmd", required=True)
    rebuild_parser = index_subparsers.add_parser("rebuild", help="Drop and recreate indexes")
    rebuild_parser.add_argument("kind", nargs="?", default=None, help="Kind to rebuild (default: all)")

    # One command group per entity kind
    for kind in default_registry():
        kind_parser = subparsers.add_parser(kind.prefix, help=f"Manage {kind.prefix} entities")
        commands.add_entity_arguments(kind_parser)

    return parser


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    config = Config.from_env()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    try:
        if args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "index":
            commands.handle_index(args, config)
        elif args.command in default_registry():
            commands.handle_entity(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
