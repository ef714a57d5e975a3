"""Application container class.

This module provides the Application class holding the shared store
connection and one repository per registered entity kind.

Use create_application() from skygrip.app to create a connected instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from ..core.exceptions import TransportError
from ..core.types import File, Thing
from ..store.indexes import IndexManager
from ..store.repositories import EntityRepository

if TYPE_CHECKING:
    from ..core.config import Config
    from ..store.client import DocumentStore
    from ..store.kinds import KindRegistry


class Application:
    """Application container with wired repositories and lifecycle management.

    Attributes:
        things: Repository for Thing entities.
        files: Repository for File entities.

    Example:
        async with await create_application(config) as app:
            thing = app.things.create(name="foo")
            await app.things.save(thing)
    """

    def __init__(
        self,
        store: "DocumentStore",
        registry: "KindRegistry",
        config: "Config",
    ):
        """Initialize Application with a connected store.

        This constructor is for internal use. Use create_application() instead.

        Args:
            store: Connected document store shared by all repositories.
            registry: Entity kinds to expose.
            config: Application configuration.
        """
        self._store = store
        self._registry = registry
        self._config = config
        self._indexes = IndexManager(store)
        self._repositories: dict[str, EntityRepository[Any]] = {
            kind.prefix: EntityRepository(store, kind, page_size=config.search.page_size)
            for kind in registry
        }

    @property
    def store(self) -> "DocumentStore":
        """Get the shared document store."""
        return self._store

    @property
    def config(self) -> "Config":
        """Get application configuration."""
        return self._config

    @property
    def registry(self) -> "KindRegistry":
        """Get the registered entity kinds."""
        return self._registry

    @property
    def things(self) -> EntityRepository[Thing]:
        """Get the Thing repository."""
        return self.repository("thing")

    @property
    def files(self) -> EntityRepository[File]:
        """Get the File repository."""
        return self.repository("file")

    def repository(self, prefix: str) -> EntityRepository[Any]:
        """Get the repository of a registered kind.

        Raises:
            LookupError: If no kind uses this prefix.
        """
        try:
            return self._repositories[prefix]
        except KeyError:
            raise LookupError(f"Unknown entity kind: {prefix!r}") from None

    async def build_indexes(self, prefix: str | None = None) -> list[str]:
        """Drop and recreate search indexes.

        Args:
            prefix: Kind to rebuild; all kinds when None.

        Returns:
            Names of the rebuilt indexes.
        """
        kinds = [self.repository(prefix).kind] if prefix else list(self._registry)
        for kind in kinds:
            await self._indexes.ensure_kind_index(kind)
        return [kind.index_name for kind in kinds]

    async def status(self) -> dict[str, str]:
        """Report server name, version and store reachability."""
        try:
            reachable = await self._store.ping()
        except TransportError as e:
            logger.warning(f"Store unreachable: {e}")
            reachable = False

        return {
            "server": self._config.server_name,
            "version": self._config.version,
            "redis": "ok" if reachable else "unreachable",
        }

    async def close(self) -> None:
        """Clean shutdown of all resources."""
        await self._store.close()

    async def __aenter__(self) -> "Application":
        """Enter async context."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context and clean up resources."""
        await self.close()
