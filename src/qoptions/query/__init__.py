"""Query – spec value objects and builder API."""
from qoptions.query.builder import QuerySpec, create_query, to_raw
from qoptions.query.selectors import SelectedField, select
from qoptions.query.specs import (
    FilterEntry,
    FilterSpec,
    IncludeSpec,
    PaginationSpec,
    SearchSpec,
    SortSpec,
)

__all__ = [
    "FilterEntry",
    "FilterSpec",
    "IncludeSpec",
    "PaginationSpec",
    "QuerySpec",
    "SearchSpec",
    "SelectedField",
    "SortSpec",
    "create_query",
    "select",
    "to_raw",
]
