"""Pytest configuration and fixtures."""

import pytest

from skygrip.core.config import Config
from skygrip.core.types import File, Thing
from skygrip.store.indexes import IndexManager
from skygrip.store.kinds import FILES, THINGS
from skygrip.store.repositories import EntityRepository
from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def config() -> Config:
    """Provide a default Config instance."""
    return Config()


@pytest.fixture
async def store() -> InMemoryDocumentStore:
    """Provide a connected in-memory store with the built-in indexes."""
    fake = InMemoryDocumentStore()
    await fake.connect()
    manager = IndexManager(fake)
    await manager.ensure_kind_index(THINGS)
    await manager.ensure_kind_index(FILES)
    yield fake
    await fake.close()


@pytest.fixture
def thing_repo(store: InMemoryDocumentStore) -> EntityRepository[Thing]:
    """Provide a Thing repository."""
    return EntityRepository(store, THINGS)


@pytest.fixture
def file_repo(store: InMemoryDocumentStore) -> EntityRepository[File]:
    """Provide a File repository."""
    return EntityRepository(store, FILES)
