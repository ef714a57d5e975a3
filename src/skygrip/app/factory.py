"""Application composition root.

Example:
    from skygrip.app import create_application
    from skygrip.core.config import Config

    async with await create_application(Config.from_env()) as app:
        async for thing in app.things.fetch_all():
            print(thing.name)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.instrumentation import configure_tracing
from .application import Application

if TYPE_CHECKING:
    from ..core.config import Config
    from ..store.client import DocumentStore
    from ..store.kinds import KindRegistry


async def create_application(
    config: "Config",
    store: "DocumentStore | None" = None,
    registry: "KindRegistry | None" = None,
    build_indexes: bool = True,
) -> Application:
    """Connect to the store, provision indexes and wire repositories.

    Index provisioning runs before any repository is handed out. If it fails
    the connection is closed and the error propagates, so no caller ever
    gets an application with stale or missing indexes.

    Args:
        config: Application configuration.
        store: Store to use; a RedisStore built from config when None.
        registry: Entity kinds; the built-in kinds when None.
        build_indexes: Provision every kind's index during start-up.

    Returns:
        Connected Application instance.

    Raises:
        TransportError: If the store cannot be reached or an index cannot
            be provisioned.
    """
    # Lazy imports to avoid circular dependencies
    from ..store.client import RedisStore
    from ..store.kinds import default_registry

    configure_tracing(config.tracing)

    if store is None:
        store = RedisStore(config.redis)
    if registry is None:
        registry = default_registry()

    await store.connect()
    app = Application(store=store, registry=registry, config=config)

    if build_indexes:
        try:
            names = await app.build_indexes()
        except Exception:
            await store.close()
            raise
        logger.info(f"Search indexes provisioned: {names}")

    return app
