"""Index management commands for Skygrip CLI."""

import asyncio

from ...app import create_application
from ...core.config import Config


def handle_index(args, config: Config) -> None:
    """Handle index subcommands.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    if args.index_cmd == "rebuild":
        names = asyncio.run(_rebuild(config, args.kind))
        for name in names:
            print(f"✓ Rebuilt {name}")


async def _rebuild(config: Config, kind: str | None) -> list[str]:
    async with await create_application(config, build_indexes=False) as app:
        return await app.build_indexes(kind)
