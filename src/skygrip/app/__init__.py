"""Application composition root and lifecycle.

This module provides:
- The Application class holding the store connection and repositories
- create_application() to connect, provision indexes and wire everything

Example:
    from skygrip.app import create_application
    from skygrip.core.config import Config

    async with await create_application(Config()) as app:
        thing = app.things.create(name="foo")
        await app.things.save(thing)
"""

from .application import Application
from .factory import create_application

__all__ = [
    "Application",
    "create_application",
]
