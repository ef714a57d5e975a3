"""Redis Stack connection manager for Skygrip.

Documents are stored with RedisJSON and indexed with RediSearch. ``RedisStore``
owns the single client shared by every repository and translates redis-py
errors into Skygrip exceptions.
"""

from __future__ import annotations

import json
from typing import Any, Protocol, Sequence, runtime_checkable

from loguru import logger
from redis.asyncio import Redis
from redis.commands.search.field import TextField
from redis.commands.search.query import Query
from redis.exceptions import RedisError, ResponseError

from ..core.config import RedisConfig
from ..core.exceptions import IndexNotFoundError, TransportError
from ..core.instrumentation import traced_request
from ..core.types import SchemaField, SearchPage

# Replies RediSearch versions give for FT.DROPINDEX on a missing index
_UNKNOWN_INDEX_REPLIES = ("unknown index name", "no such index", "index not found")


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for the document store and search index.

    Repositories and the index manager depend on this protocol so tests can
    substitute an in-memory implementation.
    """

    async def connect(self) -> None:
        """Open the connection."""
        ...

    async def close(self) -> None:
        """Close the connection."""
        ...

    async def ping(self) -> bool:
        """Check that the store answers."""
        ...

    async def get_document(self, key: str) -> dict[str, Any] | None:
        """Read the document at key, or None when absent."""
        ...

    async def set_document(self, key: str, document: dict[str, Any]) -> None:
        """Replace the document at key."""
        ...

    async def delete(self, key: str) -> None:
        """Delete the document at key; no error when absent."""
        ...

    async def create_index(self, name: str, schema: Sequence[SchemaField], key_prefix: str) -> None:
        """Create a JSON search index over keys starting with key_prefix."""
        ...

    async def drop_index(self, name: str) -> None:
        """Drop an index, raising IndexNotFoundError when it does not exist."""
        ...

    async def search(self, index_name: str, query: str, offset: int, limit: int) -> SearchPage:
        """Run one paged query against an index."""
        ...


def is_unknown_index_error(error: Exception) -> bool:
    """Check whether a Redis reply means the index does not exist."""
    message = str(error).lower()
    return any(reply in message for reply in _UNKNOWN_INDEX_REPLIES)


class RedisStore:
    """Redis Stack connection manager."""

    def __init__(self, config: RedisConfig):
        """Initialize store with connection settings.

        Args:
            config: Redis connection configuration.
        """
        self.config = config
        self._client: Redis | None = None

    @property
    def connected(self) -> bool:
        """Check whether connect() has been called."""
        return self._client is not None

    async def connect(self) -> None:
        """Open the connection and verify the server answers.

        Raises:
            TransportError: If the server cannot be reached.
        """
        if self._client is not None:
            return

        client = Redis(
            host=self.config.host,
            port=self.config.port,
            password=self.config.password,
            db=self.config.db,
            socket_timeout=self.config.socket_timeout,
            decode_responses=True,
        )
        try:
            await client.ping()
        except RedisError as e:
            await client.aclose()
            raise TransportError(
                f"Failed to connect to Redis at {self.config.host}:{self.config.port}: {e}"
            ) from e

        self._client = client
        logger.info(f"Connected to Redis: {self.config.host}:{self.config.port}/{self.config.db}")

    async def close(self) -> None:
        """Close the connection."""
        if self._client is None:
            return
        try:
            await self._client.aclose()
        except RedisError as e:
            raise TransportError(f"Failed to close Redis connection: {e}") from e
        finally:
            self._client = None
        logger.debug("Redis connection closed")

    async def ping(self) -> bool:
        """Check that the server answers.

        Returns:
            True if the server replied to PING.
        """
        client = self._require_client()
        try:
            return bool(await client.ping())
        except RedisError as e:
            raise TransportError(f"Ping failed: {e}") from e

    async def get_document(self, key: str) -> dict[str, Any] | None:
        """Read a JSON document.

        Args:
            key: Document key.

        Returns:
            The document, or None if the key does not exist.

        Raises:
            TransportError: If the command fails.
        """
        client = self._require_client()
        with traced_request("json.get", attributes={"db.key": key}):
            try:
                document = await client.json().get(key)
            except RedisError as e:
                raise TransportError(f"JSON.GET {key} failed: {e}") from e
        logger.debug(f"JSON.GET {key}: {'hit' if document is not None else 'miss'}")
        return document

    async def set_document(self, key: str, document: dict[str, Any]) -> None:
        """Write a JSON document, replacing whatever is stored at key.

        Args:
            key: Document key.
            document: JSON-serializable document.

        Raises:
            TransportError: If the command fails.
        """
        client = self._require_client()
        with traced_request("json.set", attributes={"db.key": key}):
            try:
                await client.json().set(key, "$", document)
            except RedisError as e:
                raise TransportError(f"JSON.SET {key} failed: {e}") from e
        logger.debug(f"JSON.SET {key}")

    async def delete(self, key: str) -> None:
        """Delete a key. Deleting a missing key is not an error.

        Args:
            key: Document key.

        Raises:
            TransportError: If the command fails.
        """
        client = self._require_client()
        with traced_request("unlink", attributes={"db.key": key}):
            try:
                removed = await client.unlink(key)
            except RedisError as e:
                raise TransportError(f"UNLINK {key} failed: {e}") from e
        logger.debug(f"UNLINK {key}: removed={removed}")

    async def create_index(self, name: str, schema: Sequence[SchemaField], key_prefix: str) -> None:
        """Create a RediSearch index over JSON documents.

        Args:
            name: Index name.
            schema: Searchable fields with their weights.
            key_prefix: Only keys starting with this prefix are indexed.

        Raises:
            TransportError: If the index cannot be created.
        """
        client = self._require_client()
        args: list[Any] = [name, "ON", "JSON", "PREFIX", 1, key_prefix, "SCHEMA"]
        for schema_field in schema:
            args.extend(
                TextField(
                    schema_field.path,
                    weight=schema_field.weight,
                    as_name=schema_field.alias,
                ).redis_args()
            )

        with traced_request("ft.create", attributes={"db.index": name}):
            try:
                await client.execute_command("FT.CREATE", *args)
            except RedisError as e:
                raise TransportError(f"FT.CREATE {name} failed: {e}") from e
        logger.debug(f"FT.CREATE {name}: prefix={key_prefix!r}, fields={[f.alias for f in schema]}")

    async def drop_index(self, name: str) -> None:
        """Drop a RediSearch index, keeping the indexed documents.

        Args:
            name: Index name.

        Raises:
            IndexNotFoundError: If no index with this name exists.
            TransportError: If the command fails for any other reason.
        """
        client = self._require_client()
        with traced_request("ft.dropindex", attributes={"db.index": name}):
            try:
                await client.ft(name).dropindex(delete_documents=False)
            except ResponseError as e:
                if is_unknown_index_error(e):
                    raise IndexNotFoundError(name) from e
                raise TransportError(f"FT.DROPINDEX {name} failed: {e}") from e
            except RedisError as e:
                raise TransportError(f"FT.DROPINDEX {name} failed: {e}") from e
        logger.debug(f"FT.DROPINDEX {name}")

    async def search(self, index_name: str, query: str, offset: int, limit: int) -> SearchPage:
        """Run one page of a search query.

        Args:
            index_name: Index to query.
            query: RediSearch query string ("*" matches everything).
            offset: Number of matches to skip.
            limit: Maximum number of documents to return.

        Returns:
            SearchPage with the total match count and this window's documents.

        Raises:
            TransportError: If the query fails.
        """
        client = self._require_client()
        attributes = {"db.index": index_name, "db.query": query, "db.offset": offset, "db.limit": limit}
        with traced_request("ft.search", attributes=attributes):
            try:
                result = await client.ft(index_name).search(Query(query).paging(offset, limit))
            except RedisError as e:
                raise TransportError(f"FT.SEARCH {index_name} {query!r} failed: {e}") from e

        # JSON indexes return the whole document under "$", exposed as .json
        documents = [json.loads(doc.json) for doc in result.docs]
        logger.debug(
            f"FT.SEARCH {index_name} {query!r} LIMIT {offset} {limit}: "
            f"total={result.total}, returned={len(documents)}"
        )
        return SearchPage(total=result.total, documents=documents)

    def _require_client(self) -> Redis:
        """Return the live client.

        Raises:
            TransportError: If connect() has not been called.
        """
        if self._client is None:
            raise TransportError("Redis not connected")
        return self._client
