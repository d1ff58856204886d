"""Query – immutable spec value objects (search, filter, sort, include, pagination)."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from qoptions.kernel.errors import ValidationError


@dataclasses.dataclass(frozen=True)
class SearchSpec:
    """Free-text search over searchable fields."""
    keyword: str
    include_children: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.keyword, str):
            raise ValidationError(
                "Search keyword is required",
                errors=[{"field": "keyword", "value": repr(self.keyword)}],
            )


@dataclasses.dataclass(frozen=True)
class FilterEntry:
    """One ``field == value`` request; ``raw_value`` is unparsed text."""
    field_name: str
    raw_value: str | None

    def __post_init__(self) -> None:
        if not isinstance(self.field_name, str) or not self.field_name:
            raise ValidationError(
                "Filter field name is required",
                errors=[{"field": "field_name", "value": repr(self.field_name)}],
            )
        if self.raw_value is not None and not isinstance(self.raw_value, str):
            raise ValidationError(
                "Filter value must be text or None",
                errors=[{"field": self.field_name, "value": repr(self.raw_value)}],
            )


@dataclasses.dataclass(frozen=True)
class FilterSpec:
    """Ordered filter entries; repeated field names form an OR group."""
    entries: tuple[FilterEntry, ...] = ()

    def with_entry(self, entry: FilterEntry) -> "FilterSpec":
        return FilterSpec(self.entries + (entry,))

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclasses.dataclass(frozen=True)
class SortSpec:
    """Single sort criterion."""
    field_name: str
    ascending: bool = True


@dataclasses.dataclass(frozen=True)
class IncludeSpec:
    """Requested child-entity names, in request order without duplicates."""
    names: tuple[str, ...] = ()

    @classmethod
    def of(cls, names: Iterable[str]) -> "IncludeSpec":
        return cls(tuple(dict.fromkeys(names)))

    def with_name(self, name: str) -> "IncludeSpec":
        return IncludeSpec.of(self.names + (name,))

    def folded(self) -> "IncludeSpec":
        """Return a new spec with names case-folded (the receiver is untouched)."""
        return IncludeSpec.of(n.lower() for n in self.names)


@dataclasses.dataclass(frozen=True)
class PaginationSpec:
    """Offset-based pagination parameters (1-based page index)."""
    page_size: int = 10
    page_index: int = 1

    def __post_init__(self) -> None:
        errors = []
        if not _is_int(self.page_size) or self.page_size < 1:
            errors.append({"field": "page_size", "value": repr(self.page_size), "reason": "must be >= 1"})
        if not _is_int(self.page_index) or self.page_index < 1:
            errors.append({"field": "page_index", "value": repr(self.page_index), "reason": "must be >= 1"})
        if errors:
            raise ValidationError("Invalid pagination", errors=errors)

    @property
    def offset(self) -> int:
        return (self.page_index - 1) * self.page_size


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = [
    "FilterEntry",
    "FilterSpec",
    "IncludeSpec",
    "PaginationSpec",
    "SearchSpec",
    "SortSpec",
]
