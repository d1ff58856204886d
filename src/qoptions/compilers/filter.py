"""FilterCompiler – AND across fields, OR within a field."""
from __future__ import annotations

from qoptions.metadata import FieldMetadata, MetadataResolver
from qoptions.observability.logging import get_logger
from qoptions.predicate import ExpressionFactory, Operator, Predicate, PredicateBuilder
from qoptions.query.specs import FilterSpec

_log = get_logger(__name__)


class FilterCompiler:
    """Compile a :class:`FilterSpec` for one model.

    Entry names are matched case-insensitively against comparable fields;
    names that match nothing are dropped (they usually come from a free-text
    filter UI).  Entries are grouped by the *resolved* field name, so
    ``status`` and ``Status`` share an OR group.  Every value is coerced here,
    before any record is read, so a bad value fails the whole query.
    """

    def __init__(self, resolver: MetadataResolver, expressions: ExpressionFactory) -> None:
        self._resolver = resolver
        self._expressions = expressions

    def compile(self, model: type, filters: FilterSpec) -> Predicate:
        groups: dict[str, tuple[FieldMetadata, list[str | None]]] = {}
        for entry in filters:
            field = self._resolver.resolve_comparable(model, entry.field_name)
            if field is None:
                _log.debug("filter.dropped", model=model.__name__, field=entry.field_name)
                continue
            groups.setdefault(field.name, (field, []))[1].append(entry.raw_value)

        return PredicateBuilder.all_of(
            PredicateBuilder.any_of(
                self._expressions.build_field_predicate(field, Operator.EQUALS, raw)
                for raw in values
            )
            for field, values in groups.values()
        )


__all__ = ["FilterCompiler"]
