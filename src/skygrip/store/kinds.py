"""Entity kinds: how each entity type maps onto keys, documents and an index.

An ``EntityKind`` bundles everything the generic repository needs to know
about one entity type:

- the key prefix (``thing`` stores ``thing:<id>`` and indexes ``thing:index``)
- the searchable fields of its index
- a factory building an entity from raw field values
- a projection of an entity back to raw field values

Example:
    THINGS = EntityKind.for_dataclass(
        Thing,
        schema=(SchemaField.text("name"), SchemaField.text("description")),
    )
    THINGS.key("01HV...")      # "thing:01HV..."
    THINGS.index_name          # "thing:index"
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Sequence, TypeVar

from ..core.exceptions import DuplicatePrefixError
from ..core.types import File, SchemaField, Thing

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class EntityKind(Generic[EntityT]):
    """Storage description of one entity type."""

    prefix: str
    schema: tuple[SchemaField, ...]
    factory: Callable[..., EntityT]
    to_document: Callable[[EntityT], dict[str, Any]]
    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.prefix or self.prefix != self.prefix.lower() or ":" in self.prefix:
            raise ValueError(f"Invalid key prefix {self.prefix!r}: must be lowercase without ':'")
        unknown = [f.alias for f in self.schema if f.path.removeprefix("$.") not in self.fields]
        if unknown:
            raise ValueError(f"Index fields {unknown} are not fields of kind {self.prefix!r}")

    @classmethod
    def for_dataclass(
        cls,
        entity_type: type[EntityT],
        schema: Sequence[SchemaField],
        prefix: str | None = None,
    ) -> "EntityKind[EntityT]":
        """Describe a dataclass entity type.

        Args:
            entity_type: Dataclass with an ``id`` field.
            schema: Searchable fields of the index.
            prefix: Key prefix; defaults to the lowercased class name.

        Returns:
            EntityKind using the dataclass constructor and ``asdict``.
        """
        fields = tuple(f.name for f in dataclasses.fields(entity_type))  # type: ignore[arg-type]
        if "id" not in fields:
            raise ValueError(f"{entity_type.__name__} has no 'id' field")
        return cls(
            prefix=prefix or entity_type.__name__.lower(),
            schema=tuple(schema),
            factory=entity_type,
            to_document=dataclasses.asdict,  # type: ignore[arg-type]
            fields=fields,
        )

    @property
    def key_prefix(self) -> str:
        """Prefix shared by the keys of every entity of this kind."""
        return f"{self.prefix}:"

    @property
    def index_name(self) -> str:
        """Name of this kind's search index."""
        return f"{self.prefix}:index"

    def key(self, entity_id: str) -> str:
        """Build the store key for an entity id."""
        return f"{self.prefix}:{entity_id}"

    def from_document(self, document: dict[str, Any]) -> EntityT:
        """Build an entity from a stored document, ignoring unknown attributes."""
        return self.factory(**{name: document[name] for name in self.fields if name in document})

    def searchable(self, alias: str) -> bool:
        """Check whether a field alias is part of the index."""
        return any(f.alias == alias for f in self.schema)


class KindRegistry:
    """Registered entity kinds, keyed by prefix.

    Keeps prefixes unique so two kinds never write to the same keys.
    """

    def __init__(self, kinds: Sequence[EntityKind[Any]] = ()):
        self._kinds: dict[str, EntityKind[Any]] = {}
        for kind in kinds:
            self.register(kind)

    def register(self, kind: EntityKind[Any]) -> EntityKind[Any]:
        """Add a kind.

        Raises:
            DuplicatePrefixError: If another kind already uses the prefix.
        """
        if kind.prefix in self._kinds:
            raise DuplicatePrefixError(f"Key prefix {kind.prefix!r} is already registered")
        self._kinds[kind.prefix] = kind
        return kind

    def get(self, prefix: str) -> EntityKind[Any] | None:
        return self._kinds.get(prefix)

    def __iter__(self) -> Iterator[EntityKind[Any]]:
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._kinds


THINGS: EntityKind[Thing] = EntityKind.for_dataclass(
    Thing,
    schema=(
        SchemaField.text("name"),
        SchemaField.text("description"),
    ),
)

FILES: EntityKind[File] = EntityKind.for_dataclass(
    File,
    schema=(
        SchemaField.text("path", weight=2.0),
        SchemaField.text("name", weight=2.0),
        SchemaField.text("notes"),
    ),
)


def default_registry() -> KindRegistry:
    """Registry with the built-in entity kinds."""
    return KindRegistry([THINGS, FILES])
