"""Identifier generation for Skygrip entities."""

import re

from ulid import ULID

# Crockford base32: no I, L, O or U
_ID_PATTERN = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")


def new_id() -> str:
    """Generate a new entity identifier.

    Identifiers are ULIDs: 26 uppercase base32 characters whose first 10
    encode the creation time in milliseconds, so they sort by creation time.

    Returns:
        A fresh identifier string.
    """
    return str(ULID())


def is_valid_id(value: str) -> bool:
    """Check that a string has the shape of a generated identifier."""
    return bool(_ID_PATTERN.match(value))
