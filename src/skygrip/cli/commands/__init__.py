"""Command implementations for Skygrip CLI."""

from .entities import add_entity_arguments, handle_entity
from .index import handle_index
from .status import handle_status

__all__ = [
    "add_entity_arguments",
    "handle_entity",
    "handle_index",
    "handle_status",
]
