"""In-memory document store fake for testing.

Implements the DocumentStore protocol from skygrip.store.client with a
small RediSearch-like matcher:

- ``*`` matches every document under the index prefix
- bare terms must all appear (as whole tokens) in some indexed field
- ``@field:(terms)`` / ``@field:term`` restricts the terms to one field
- backslash-escaped punctuation is treated as a term separator

Results are returned in key order, which stands in for engine order.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from skygrip.core.exceptions import IndexNotFoundError, TransportError
from skygrip.core.types import SchemaField, SearchPage

_TOKEN = re.compile(r"[0-9a-z]+")
_FIELD_CLAUSE = re.compile(r"@(\w+):(?:\(((?:\\.|[^)\\])*)\)|(\S+))")


def tokenize(text: str) -> set[str]:
    """Split text into lowercase alphanumeric tokens."""
    return set(_TOKEN.findall(text.lower()))


@dataclass
class FakeIndex:
    """An index definition held by the fake."""

    name: str
    schema: tuple[SchemaField, ...]
    key_prefix: str


@dataclass
class SearchCall:
    """One recorded page request."""

    index_name: str
    query: str
    offset: int
    limit: int


@dataclass
class InMemoryDocumentStore:
    """In-memory document store and search index for testing."""

    documents: dict[str, dict[str, Any]] = field(default_factory=dict)
    indexes: dict[str, FakeIndex] = field(default_factory=dict)
    search_calls: list[SearchCall] = field(default_factory=list)
    created_indexes: list[str] = field(default_factory=list)
    connected: bool = False
    reachable: bool = True
    # Error raised by drop_index instead of normal behavior
    drop_error: Exception | None = None

    async def connect(self) -> None:
        """Connect (fails when unreachable)."""
        if not self.reachable:
            raise TransportError("Failed to connect to Redis at fake:6379")
        self.connected = True

    async def close(self) -> None:
        """Close (no-op for fake)."""
        self.connected = False

    async def ping(self) -> bool:
        """Answer ping."""
        self._check()
        return True

    async def get_document(self, key: str) -> dict[str, Any] | None:
        """Get a copy of the stored document."""
        self._check()
        document = self.documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    async def set_document(self, key: str, document: dict[str, Any]) -> None:
        """Replace the document at key."""
        self._check()
        self.documents[key] = copy.deepcopy(document)

    async def delete(self, key: str) -> None:
        """Delete the key if present."""
        self._check()
        self.documents.pop(key, None)

    async def create_index(self, name: str, schema: Sequence[SchemaField], key_prefix: str) -> None:
        """Create an index; a duplicate name is an error, as in Redis."""
        self._check()
        if name in self.indexes:
            raise TransportError(f"FT.CREATE {name} failed: Index already exists")
        self.indexes[name] = FakeIndex(name, tuple(schema), key_prefix)
        self.created_indexes.append(name)

    async def drop_index(self, name: str) -> None:
        """Drop an index."""
        self._check()
        if self.drop_error is not None:
            raise self.drop_error
        if name not in self.indexes:
            raise IndexNotFoundError(name)
        del self.indexes[name]

    async def search(self, index_name: str, query: str, offset: int, limit: int) -> SearchPage:
        """Run one page of a query."""
        self._check()
        self.search_calls.append(SearchCall(index_name, query, offset, limit))
        index = self.indexes.get(index_name)
        if index is None:
            raise TransportError(f"FT.SEARCH {index_name} failed: No such index")

        matches = [
            document
            for key, document in sorted(self.documents.items())
            if key.startswith(index.key_prefix) and self._matches(index, document, query)
        ]
        return SearchPage(
            total=len(matches),
            documents=[copy.deepcopy(d) for d in matches[offset:offset + limit]],
        )

    def _check(self) -> None:
        if not self.connected:
            raise TransportError("Redis not connected")

    @staticmethod
    def _matches(index: FakeIndex, document: dict[str, Any], query: str) -> bool:
        query = query.strip()
        if query == "*":
            return True

        field_tokens = {
            f.alias: tokenize(str(document.get(f.path.removeprefix("$."), "")))
            for f in index.schema
        }
        all_tokens = set().union(*field_tokens.values()) if field_tokens else set()

        for clause in _FIELD_CLAUSE.finditer(query):
            alias = clause.group(1)
            terms = tokenize(clause.group(2) or clause.group(3))
            if alias not in field_tokens or not terms <= field_tokens[alias]:
                return False

        remaining = _FIELD_CLAUSE.sub(" ", query)
        return tokenize(remaining) <= all_tokens
