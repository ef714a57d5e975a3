"""Pytest configuration and fixtures for integration tests.

These run against a live Redis Stack (RedisJSON + RediSearch) located by
the usual REDIS_* environment variables, and are skipped when none answers.
"""

import pytest

from skygrip.core.config import Config
from skygrip.core.exceptions import TransportError
from skygrip.core.types import File, Thing
from skygrip.store.client import RedisStore
from skygrip.store.kinds import FILES, THINGS, EntityKind
from skygrip.store.repositories import EntityRepository

# Prefixes used only by these tests so a shared server is left alone
THING_PREFIX = "itestthing"
FILE_PREFIX = "itestfile"


@pytest.fixture
def integration_config() -> Config:
    """Provide configuration read from the environment."""
    return Config.from_env()


@pytest.fixture
async def redis_store(integration_config: Config):
    """Provide a connected RedisStore, or skip if Redis is unreachable."""
    store = RedisStore(integration_config.redis)
    try:
        await store.connect()
    except TransportError as e:
        pytest.skip(f"Redis Stack not available: {e}")
    yield store
    await store.close()


async def _clear(store: RedisStore, kind: EntityKind) -> None:
    # Collect first; deleting mid-stream would shift later pages
    ids = [entity.id async for entity in EntityRepository(store, kind).fetch_all()]
    for entity_id in ids:
        await store.delete(kind.key(entity_id))


@pytest.fixture
async def integration_things(redis_store: RedisStore):
    """Provide a Thing repository on a private prefix with a fresh index."""
    kind = EntityKind.for_dataclass(Thing, THINGS.schema, prefix=THING_PREFIX)
    repo = EntityRepository(redis_store, kind)
    await repo.build_index()
    await _clear(redis_store, kind)
    yield repo
    await _clear(redis_store, kind)
    await redis_store.drop_index(kind.index_name)


@pytest.fixture
async def integration_files(redis_store: RedisStore):
    """Provide a File repository on a private prefix with a fresh index."""
    kind = EntityKind.for_dataclass(File, FILES.schema, prefix=FILE_PREFIX)
    repo = EntityRepository(redis_store, kind)
    await repo.build_index()
    await _clear(redis_store, kind)
    yield repo
    await _clear(redis_store, kind)
    await redis_store.drop_index(kind.index_name)
