"""SearchCompiler – OR of substring matches over searchable fields."""
from __future__ import annotations

import dataclasses

from qoptions.metadata import MetadataResolver
from qoptions.observability.logging import get_logger
from qoptions.predicate import ExpressionFactory, Operator, Predicate, PredicateBuilder
from qoptions.query.specs import SearchSpec

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class SearchPlan:
    """Compiled search: the predicate plus the child fields it reaches into."""
    predicate: Predicate
    includes: tuple[str, ...] = ()


class SearchCompiler:
    """Compile a :class:`SearchSpec` for one model.

    With no searchable fields the result is ``MATCH_NONE``: an unanswerable
    search matches nothing rather than everything.  ``include_children``
    extends the OR one level into child entities that have searchable fields
    of their own; grandchildren are never visited.
    """

    def __init__(self, resolver: MetadataResolver, expressions: ExpressionFactory) -> None:
        self._resolver = resolver
        self._expressions = expressions

    def compile(self, model: type, search: SearchSpec) -> SearchPlan:
        keyword = search.keyword
        fragments = [
            self._expressions.build_field_predicate(f, Operator.CONTAINS, keyword)
            for f in self._resolver.searchable_fields(model)
        ]

        includes: list[str] = []
        if search.include_children:
            if not self._resolver.is_entity(model):
                _log.debug("search.children_skipped", model=model.__name__, reason="not an entity")
            for parent in self._resolver.child_entity_fields(model):
                child_fields = self._resolver.searchable_fields(parent.child)  # type: ignore[arg-type]
                if not child_fields:
                    continue
                includes.append(parent.name)
                fragments.extend(
                    self._expressions.build_child_predicate(parent, f, Operator.CONTAINS, keyword)
                    for f in child_fields
                )

        predicate = PredicateBuilder.any_of(fragments)
        return SearchPlan(predicate=predicate, includes=tuple(includes))


__all__ = ["SearchCompiler", "SearchPlan"]
