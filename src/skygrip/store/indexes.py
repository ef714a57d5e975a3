"""Search index provisioning for Skygrip."""

from typing import Any, Sequence

from loguru import logger

from ..core.exceptions import IndexNotFoundError
from ..core.types import SchemaField
from .client import DocumentStore
from .kinds import EntityKind


class IndexManager:
    """Creates and rebuilds the search index of each entity kind."""

    def __init__(self, store: DocumentStore):
        """Initialize with a store.

        Args:
            store: Connected document store.
        """
        self.store = store

    async def ensure_index(self, name: str, schema: Sequence[SchemaField], key_prefix: str) -> None:
        """Make the index match the given schema.

        Drops any existing index of that name, then creates it again, so
        calling this repeatedly always leaves exactly one index with the
        current definition. Documents are kept and re-indexed by Redis.

        Args:
            name: Index name.
            schema: Searchable fields with their weights.
            key_prefix: Only keys starting with this prefix are indexed.

        Raises:
            TransportError: If dropping fails for a reason other than the
                index being absent, or if creation fails.
        """
        try:
            await self.store.drop_index(name)
            logger.debug(f"Dropped existing index: {name}")
        except IndexNotFoundError:
            logger.debug(f"No existing index to drop: {name}")

        await self.store.create_index(name, schema, key_prefix)
        logger.info(f"Index ready: name={name!r}, prefix={key_prefix!r}, fields={[f.alias for f in schema]}")

    async def ensure_kind_index(self, kind: EntityKind[Any]) -> None:
        """Provision the index for an entity kind."""
        await self.ensure_index(kind.index_name, kind.schema, kind.key_prefix)
