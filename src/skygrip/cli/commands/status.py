"""Status command for Skygrip CLI."""

import asyncio
import json

from loguru import logger

from ...app import create_application
from ...core.config import Config
from ...core.exceptions import TransportError


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    status = asyncio.run(_handle_status_async(config))
    print(json.dumps(status))


async def _handle_status_async(config: Config) -> dict[str, str]:
    """Connect without touching indexes and report status."""
    try:
        app = await create_application(config, build_indexes=False)
    except TransportError as e:
        logger.warning(f"Store unreachable: {e}")
        return {"server": config.server_name, "version": config.version, "redis": "unreachable"}

    async with app:
        return await app.status()
