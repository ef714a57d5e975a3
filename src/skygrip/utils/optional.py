"""Helpers for values that may be absent.

Lookups that can miss return ``T | None``. These functions give the
presence checks explicit names and failure modes::

    thing = await things.fetch_by_id(thing_id)
    if optional.is_present(thing):
        ...
    name = optional.get(thing).name   # EmptyValueError when missing
"""

from typing import TypeVar

from ..core.exceptions import EmptyValueError, InvalidValueError

T = TypeVar("T")


def of(value: T | None) -> T:
    """Wrap a value that must be present.

    Raises:
        InvalidValueError: If value is None.
    """
    if value is None:
        raise InvalidValueError("Cannot create a present value from None")
    return value


def empty() -> None:
    """Return the absent value."""
    return None


def is_present(value: object | None) -> bool:
    """Report whether a value is present."""
    return value is not None


def get(value: T | None) -> T:
    """Unwrap a present value.

    Raises:
        EmptyValueError: If value is None.
    """
    if value is None:
        raise EmptyValueError("No value present")
    return value


def or_else(value: T | None, default: T) -> T:
    """Return value if present, otherwise default."""
    return default if value is None else value
