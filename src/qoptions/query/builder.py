"""Query – QuerySpec composite and the builder API."""
from __future__ import annotations

import dataclasses
import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from qoptions.config import QuerySettings
from qoptions.kernel.errors import UnsupportedOperationError, ValidationError
from qoptions.metadata import MetadataProvider, ModelMetadata, default_registry
from qoptions.query.selectors import require_declared, select
from qoptions.query.specs import (
    FilterEntry,
    FilterSpec,
    IncludeSpec,
    PaginationSpec,
    SearchSpec,
    SortSpec,
)

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class QuerySpec(Generic[T]):
    """Immutable query description for one model type.

    Every ``add_*`` call returns a new spec; the receiver is never modified,
    so a spec can be shared between concurrent :func:`qoptions.apply` calls.

    Example::

        spec = (
            create_query(Customer)
            .add_search("smith", include_children=True)
            .add_filter(lambda c: c.status, "Active")
            .add_filter(lambda c: c.status, "Pending")
            .add_sort("last_name")
            .add_pagination(page_size=20, page_index=2)
        )
    """

    model: type[T]
    pagination: PaginationSpec
    search: SearchSpec | None = None
    filter: FilterSpec | None = None
    sort: SortSpec | None = None
    include: IncludeSpec | None = None
    provider: MetadataProvider = dataclasses.field(default=default_registry, compare=False, repr=False)
    settings: QuerySettings = dataclasses.field(default_factory=QuerySettings, compare=False, repr=False)

    @property
    def metadata(self) -> ModelMetadata:
        return self.provider.metadata_for(self.model)

    # ------------------------------------------------------------------
    # Builder calls
    # ------------------------------------------------------------------

    def add_search(self, keyword: str, include_children: bool = False) -> "QuerySpec[T]":
        return dataclasses.replace(self, search=SearchSpec(keyword, bool(include_children)))

    def add_filter(self, selector: Any, value: Any) -> "QuerySpec[T]":
        """Add ``field == value``; repeated calls on one field form an OR group."""
        selected = select(selector)
        field = require_declared(self.metadata, selected)
        if field is not None and not field.is_comparable:
            raise UnsupportedOperationError(
                f"Field '{field.name}' of {self.model.__name__} cannot be filtered",
                detail={"field": field.name},
            )
        entry = FilterEntry(selected.name, to_raw(value))
        current = self.filter or FilterSpec()
        return dataclasses.replace(self, filter=current.with_entry(entry))

    def add_sort(self, selector: Any, ascending: bool = True) -> "QuerySpec[T]":
        """Set the single active sort; the last call wins."""
        selected = select(selector)
        field = require_declared(self.metadata, selected)
        if field is not None and not field.is_comparable:
            raise UnsupportedOperationError(
                f"Field '{field.name}' of {self.model.__name__} cannot be sorted",
                detail={"field": field.name},
            )
        return dataclasses.replace(self, sort=SortSpec(selected.name, bool(ascending)))

    def add_pagination(self, page_size: int, page_index: int) -> "QuerySpec[T]":
        pagination = PaginationSpec(page_size, page_index)
        limit = self.settings.max_page_size
        if limit and pagination.page_size > limit:
            raise ValidationError(
                f"page_size must be <= {limit}",
                errors=[{"field": "page_size", "value": page_size, "reason": f"exceeds {limit}"}],
            )
        return dataclasses.replace(self, pagination=pagination)

    def add_include(self, selector: Any) -> "QuerySpec[T]":
        selected = select(selector)
        metadata = self.metadata
        field = require_declared(metadata, selected)
        if field is not None and not (metadata.entity and field.is_child_entity):
            raise UnsupportedOperationError(
                f"Field '{field.name}' of {self.model.__name__} is not an includable child entity",
                detail={"field": field.name, "entity": metadata.entity},
            )
        current = self.include or IncludeSpec()
        return dataclasses.replace(self, include=current.with_name(selected.name))


def create_query(
    model: type[T],
    *,
    registry: MetadataProvider | None = None,
    settings: QuerySettings | None = None,
) -> QuerySpec[T]:
    """Start an empty query for *model* with the default pagination window.

    Raises
    ------
    ValidationError
        When *model* is ``None``.
    ConfigurationError
        When *model* is not registered with *registry*.
    """
    if model is None:
        raise ValidationError("A model type is required", errors=[{"field": "model", "reason": "is None"}])
    provider = registry if registry is not None else default_registry
    settings = settings or QuerySettings()
    provider.metadata_for(model)
    return QuerySpec(
        model=model,
        pagination=PaginationSpec(settings.default_page_size, 1),
        provider=provider,
        settings=settings,
    )


def to_raw(value: Any) -> str | None:
    """Normalise a filter value to the raw text form compilers parse."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return str(value)


__all__ = ["QuerySpec", "create_query", "to_raw"]
