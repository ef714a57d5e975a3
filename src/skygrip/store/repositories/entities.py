"""Generic entity CRUD and search for Skygrip."""

from __future__ import annotations

import re
from typing import Any, AsyncIterator, Generic

from loguru import logger

from ...utils.ids import new_id
from ..client import DocumentStore
from ..indexes import IndexManager
from ..kinds import EntityKind, EntityT
from ..pagination import PAGE_SIZE, paginate

MATCH_ALL = "*"

# RediSearch query operators and separators
_QUERY_SPECIAL = re.compile(r"""([,.<>{}\[\]"':;!@#$%^&*()\-+=~|/\\])""")


def escape_terms(text: str) -> str:
    """Escape query syntax so each whitespace-separated word is a literal term.

    Example:
        >>> escape_terms("foo-bar.png baz")
        'foo\\\\-bar\\\\.png baz'
    """
    return " ".join(_QUERY_SPECIAL.sub(r"\\\1", term) for term in text.split())


class EntityRepository(Generic[EntityT]):
    """Repository for one entity kind.

    Every entity is stored as a JSON document under ``<prefix>:<id>`` and
    indexed by the kind's ``<prefix>:index``.

    Example:
        >>> things = EntityRepository(store, THINGS)
        >>> thing = things.create(name="foo")
        >>> await things.save(thing)
        >>> async for found in things.search("foo"):
        ...     print(found.id)
    """

    def __init__(self, store: DocumentStore, kind: EntityKind[EntityT], page_size: int = PAGE_SIZE):
        """Initialize with a store and the kind it manages.

        Args:
            store: Connected document store.
            kind: Entity kind describing keys, schema and (de)serialization.
            page_size: Documents requested per search round trip.
        """
        self.store = store
        self.kind = kind
        self.page_size = page_size

    def create(self, **fields: Any) -> EntityT:
        """Build a new, unsaved entity with a fresh id.

        Args:
            **fields: Field values; omitted optional fields take their defaults.

        Returns:
            The new entity. Nothing is written until save().
        """
        if "id" in fields:
            raise TypeError("create() assigns the id; use the entity constructor to rebuild one")
        return self.kind.factory(id=new_id(), **fields)

    async def save(self, entity: EntityT) -> None:
        """Write the entity, replacing any stored version.

        Raises:
            TransportError: If the store fails.
        """
        key = self.key_of(entity)
        await self.store.set_document(key, self.kind.to_document(entity))
        logger.debug(f"Saved {key}")

    async def remove(self, entity: EntityT) -> None:
        """Delete the stored entity. The in-memory entity is left as is.

        Raises:
            TransportError: If the store fails.
        """
        await self.remove_by_id(entity.id)  # type: ignore[attr-defined]

    async def remove_by_id(self, entity_id: str) -> None:
        """Delete the entity stored under an id; a missing id is not an error.

        Raises:
            TransportError: If the store fails.
        """
        key = self.kind.key(entity_id)
        await self.store.delete(key)
        logger.debug(f"Removed {key}")

    async def fetch_by_id(self, entity_id: str) -> EntityT | None:
        """Load an entity by id.

        Returns:
            The entity, or None if nothing is stored under the id.

        Raises:
            TransportError: If the store fails.
        """
        document = await self.store.get_document(self.kind.key(entity_id))
        if document is None:
            return None
        return self.kind.from_document(document)

    def search(self, query: str) -> AsyncIterator[EntityT]:
        """Stream every entity matching a query.

        The stream is lazy and single-use: pages are fetched as it is
        consumed, and iterating again requires a new call.

        Args:
            query: RediSearch query against this kind's index.

        Returns:
            Async iterator over matching entities.
        """
        return self._fetch_many(query)

    def fetch_all(self) -> AsyncIterator[EntityT]:
        """Stream every stored entity of this kind."""
        return self.search(MATCH_ALL)

    def fetch_by_keywords(self, keywords: str) -> AsyncIterator[EntityT]:
        """Stream entities containing all keywords in any indexed field.

        Keywords are matched literally; punctuation is not query syntax.
        Blank input matches every entity, like fetch_all().
        """
        return self.search(escape_terms(keywords) or MATCH_ALL)

    def fetch_by_field(self, field: str, value: str) -> AsyncIterator[EntityT]:
        """Stream entities whose indexed field matches value.

        Args:
            field: Alias of an indexed field (e.g. "name").
            value: Terms to look for in that field.

        Raises:
            ValueError: If the field is not part of the index.
        """
        if not self.kind.searchable(field):
            raise ValueError(f"Field {field!r} is not searchable for kind {self.kind.prefix!r}")
        return self.search(f"@{field}:({escape_terms(value)})")

    async def build_index(self) -> None:
        """Drop and recreate this kind's search index."""
        await IndexManager(self.store).ensure_kind_index(self.kind)

    def key_of(self, entity: EntityT) -> str:
        """Store key of an entity."""
        return self.kind.key(entity.id)  # type: ignore[attr-defined]

    async def _fetch_many(self, query: str) -> AsyncIterator[EntityT]:
        index_name = self.kind.index_name

        async def fetch_page(offset: int, limit: int):
            return await self.store.search(index_name, query, offset, limit)

        async for document in paginate(fetch_page, self.page_size):
            yield self.kind.from_document(document)
