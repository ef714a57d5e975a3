"""Core types, configuration and errors for Skygrip."""

from .config import Config, RedisConfig, SearchConfig
from .exceptions import (
    DuplicatePrefixError,
    EmptyValueError,
    IndexNotFoundError,
    InvalidValueError,
    OptionalError,
    SkygripError,
    StoreError,
    TransportError,
)
from .instrumentation import TracingConfig
from .types import File, SchemaField, SearchPage, Thing

__all__ = [
    "Config",
    "RedisConfig",
    "SearchConfig",
    "TracingConfig",
    "SkygripError",
    "StoreError",
    "TransportError",
    "IndexNotFoundError",
    "OptionalError",
    "InvalidValueError",
    "EmptyValueError",
    "DuplicatePrefixError",
    "SchemaField",
    "SearchPage",
    "Thing",
    "File",
]
