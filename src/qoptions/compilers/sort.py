"""SortResolver – sort field name to ordering key."""
from __future__ import annotations

import dataclasses
from typing import Any

from qoptions.metadata import MetadataResolver, ValueKind
from qoptions.observability.logging import get_logger
from qoptions.predicate import read_field
from qoptions.query.specs import SortSpec

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class OrderKey:
    """Resolved ordering: field, direction and value kind.

    ``None`` values order before everything else ascending and after
    everything else descending; equal keys keep their input order.
    """
    field: str
    ascending: bool
    kind: ValueKind

    def extract(self, record: Any) -> tuple[bool, Any]:
        """Key extractor usable with :func:`sorted`."""
        value = read_field(record, self.field)
        return (value is not None, value)


class SortResolver:
    def __init__(self, resolver: MetadataResolver) -> None:
        self._resolver = resolver

    def resolve(self, model: type, sort: SortSpec) -> OrderKey | None:
        """Return the :class:`OrderKey`, or ``None`` to keep the source order."""
        field = self._resolver.resolve_comparable(model, sort.field_name)
        if field is None:
            _log.debug("sort.ignored", model=model.__name__, field=sort.field_name)
            return None
        return OrderKey(field=field.name, ascending=sort.ascending, kind=field.kind)  # type: ignore[arg-type]


__all__ = ["OrderKey", "SortResolver"]
