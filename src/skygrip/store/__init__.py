"""Data access layer for Skygrip.

This package provides the persistence layer:
- RedisStore: Redis Stack connection, JSON documents and search commands
- IndexManager: idempotent search index provisioning
- EntityKind: key prefix, index schema and (de)serialization of an entity type
- EntityRepository: typed CRUD and streaming search per entity kind
- paginate: offset pagination over search results

Example:
    from skygrip.store import EntityRepository, IndexManager, RedisStore, THINGS

    store = RedisStore(config.redis)
    await store.connect()
    await IndexManager(store).ensure_kind_index(THINGS)
    things = EntityRepository(store, THINGS)
"""

from .client import DocumentStore, RedisStore
from .indexes import IndexManager
from .kinds import FILES, THINGS, EntityKind, KindRegistry, default_registry
from .pagination import PAGE_SIZE, paginate
from .repositories import EntityRepository

__all__ = [
    # Connection
    "DocumentStore",
    "RedisStore",
    # Indexes
    "IndexManager",
    # Kinds
    "EntityKind",
    "KindRegistry",
    "THINGS",
    "FILES",
    "default_registry",
    # Pagination
    "PAGE_SIZE",
    "paginate",
    # Repositories
    "EntityRepository",
]
