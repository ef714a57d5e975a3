"""Test fakes for testing without a Redis server.

Example:
    from tests.fakes import InMemoryDocumentStore

    store = InMemoryDocumentStore()
    await store.connect()
    things = EntityRepository(store, THINGS)
"""

from .store import FakeIndex, InMemoryDocumentStore, SearchCall, tokenize

__all__ = [
    "InMemoryDocumentStore",
    "FakeIndex",
    "SearchCall",
    "tokenize",
]
