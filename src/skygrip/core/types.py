"""Type definitions for Skygrip."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SchemaField:
    """A searchable TEXT field of a JSON document.

    Attributes:
        path: JSONPath of the value inside the document (e.g. "$.name").
        alias: Name the field is queried by (e.g. "@name:foo").
        weight: Relative importance of matches in this field.
    """

    path: str
    alias: str
    weight: float = 1.0

    @classmethod
    def text(cls, name: str, weight: float = 1.0) -> "SchemaField":
        """Declare a top-level text attribute searchable under its own name."""
        return cls(path=f"$.{name}", alias=name, weight=weight)


@dataclass
class SearchPage:
    """One window of a paginated search.

    Attributes:
        total: Number of documents matching the query, across all pages.
        documents: Raw documents in this window, in engine order.
    """

    total: int
    documents: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Thing:
    """A named thing with an optional description."""

    id: str
    name: str
    description: str = ""


@dataclass
class File:
    """A file reference with optional notes."""

    id: str
    path: str
    name: str
    notes: str = ""
