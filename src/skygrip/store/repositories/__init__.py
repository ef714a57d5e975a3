"""Repository implementations for the Skygrip store.

- EntityRepository: CRUD and paginated search for any entity kind

Repositories accept a DocumentStore and an EntityKind in __init__; they hold
no connection of their own.

Example:
    from skygrip.store import RedisStore
    from skygrip.store.kinds import THINGS
    from skygrip.store.repositories import EntityRepository

    store = RedisStore(config.redis)
    await store.connect()
    things = EntityRepository(store, THINGS)
"""

from .entities import MATCH_ALL, EntityRepository

__all__ = [
    "EntityRepository",
    "MATCH_ALL",
]
