"""Metadata – field descriptors registered once per model type."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from qoptions.kernel.errors import ConfigurationError


class ValueKind(str, Enum):
    """Comparable value kinds.  Nullability is carried on the field."""

    STRING = "string"
    INTEGER = "integer"
    FLOATING = "floating"
    BOOLEAN = "boolean"
    DATETIME = "datetime"


@dataclasses.dataclass(frozen=True, slots=True)
class FieldMetadata:
    """Descriptor for a single model field.

    A field is *comparable* when it has a ``kind``; it is a *child entity*
    field when ``child`` names the referenced model type (``many`` marks a
    collection of children).  ``searchable`` only takes effect on string
    fields that are not ``encrypted``.
    """

    name: str
    kind: ValueKind | None = None
    nullable: bool = False
    searchable: bool = False
    encrypted: bool = False
    child: type | None = None
    many: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("field name is required")
        if self.kind is not None and self.child is not None:
            raise ConfigurationError(f"field '{self.name}' cannot be both comparable and a child entity")

    @property
    def is_comparable(self) -> bool:
        return self.kind is not None

    @property
    def is_searchable(self) -> bool:
        return self.kind is ValueKind.STRING and self.searchable and not self.encrypted

    @property
    def is_child_entity(self) -> bool:
        return self.child is not None


@dataclasses.dataclass(frozen=True)
class ModelMetadata:
    """Descriptor table for one model type."""

    model: type
    fields: tuple[FieldMetadata, ...]
    entity: bool = True
    _by_name: dict[str, FieldMetadata] = dataclasses.field(init=False, repr=False, compare=False)
    _by_folded: dict[str, FieldMetadata] = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, FieldMetadata] = {}
        by_folded: dict[str, FieldMetadata] = {}
        for f in self.fields:
            if f.name in by_name:
                raise ConfigurationError(f"duplicate field '{f.name}' on {self.model.__name__}")
            by_name[f.name] = f
            by_folded.setdefault(f.name.lower(), f)
        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(self, "_by_folded", by_folded)

    @property
    def name(self) -> str:
        return self.model.__name__

    def field(self, name: str) -> FieldMetadata | None:
        """Exact (case-sensitive) lookup."""
        return self._by_name.get(name)

    def match(self, name: Any) -> FieldMetadata | None:
        """Case-insensitive lookup used for free-text names."""
        if not isinstance(name, str):
            return None
        return self._by_name.get(name) or self._by_folded.get(name.lower())

    @property
    def encrypted_names(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields if f.encrypted)


__all__ = ["FieldMetadata", "ModelMetadata", "ValueKind"]
