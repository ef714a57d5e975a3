"""Custom exceptions for Skygrip."""


class SkygripError(Exception):
    """Base exception for all Skygrip errors."""

    pass


class StoreError(SkygripError):
    """Document store or search index operation failed."""

    pass


class TransportError(StoreError):
    """The store could not be reached or rejected a command."""

    pass


class IndexNotFoundError(StoreError):
    """Search index does not exist."""

    def __init__(self, name: str):
        """Initialize exception with the index name.

        Args:
            name: Name of the index that was not found.
        """
        self.name = name
        super().__init__(f"Index not found: {name}")


class OptionalError(SkygripError):
    """Misuse of an optional value."""

    pass


class InvalidValueError(OptionalError):
    """Attempted to wrap a missing value as present."""

    pass


class EmptyValueError(OptionalError):
    """Attempted to unwrap an absent value."""

    pass


class DuplicatePrefixError(SkygripError, ValueError):
    """Two entity kinds were registered with the same key prefix."""

    pass
