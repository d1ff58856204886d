"""QueryComposer – runs Search → Filter → Include → Sort → Paginate over a source."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from qoptions.adapters.memory import InMemorySource
from qoptions.compilers import (
    FilterCompiler,
    IncludeResolver,
    OrderKey,
    SearchCompiler,
    SortResolver,
    Window,
    window_for,
)
from qoptions.config import QuerySettings
from qoptions.kernel.errors import ValidationError
from qoptions.metadata import MetadataProvider, MetadataResolver
from qoptions.observability.logging import SensitiveFieldsFilter, get_logger
from qoptions.predicate import ExpressionFactory, Predicate
from qoptions.query import QuerySpec

_log = get_logger(__name__)

S = TypeVar("S", bound="QuerySource")


@runtime_checkable
class QuerySource(Protocol):
    """Port implemented by execution adapters.

    Each method returns a *new* source; none of them may perform I/O.
    """

    def where(self: S, predicate: Predicate) -> S: ...

    def include(self: S, names: tuple[str, ...]) -> S: ...

    def order_by(self: S, key: OrderKey) -> S: ...

    def window(self: S, window: Window) -> S: ...


@dataclasses.dataclass(frozen=True)
class QueryPlan:
    """Fully compiled query: everything an adapter needs, nothing it must parse.

    ``search`` and ``filter`` are ``None`` when the query has none.
    """
    model: type
    search: Predicate | None
    filter: Predicate | None
    includes: tuple[str, ...]
    order: OrderKey | None
    window: Window

    def run(self, source: S) -> S:
        if self.search is not None:
            source = source.where(self.search)
        if self.filter is not None:
            source = source.where(self.filter)
        if self.includes:
            source = source.include(self.includes)
        if self.order is not None:
            source = source.order_by(self.order)
        return source.window(self.window)


class QueryComposer:
    """Compile a :class:`QuerySpec` and apply it to a source.

    The composer is stateless apart from its collaborators and can be shared
    freely between threads.  When *provider* or *settings* are omitted, the
    ones carried by each spec are used.
    """

    def __init__(
        self,
        provider: MetadataProvider | None = None,
        settings: QuerySettings | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings

    def plan(self, spec: QuerySpec[Any]) -> QueryPlan:
        """Compile every stage of *spec*.

        All parsing happens here, so :class:`ParseError` and
        :class:`UnsupportedOperationError` surface before any record is read.
        """
        if spec is None:
            raise ValidationError("A query spec is required", errors=[{"field": "spec", "reason": "is None"}])
        settings = self._settings or spec.settings
        resolver = MetadataResolver(self._provider or spec.provider)
        expressions = ExpressionFactory(case_insensitive=settings.case_insensitive_search)
        model = spec.model

        search: Predicate | None = None
        includes: list[str] = []
        if spec.search is not None:
            search_plan = SearchCompiler(resolver, expressions).compile(model, spec.search)
            search = search_plan.predicate
            includes.extend(search_plan.includes)

        filter_: Predicate | None = None
        if spec.filter is not None:
            filter_ = FilterCompiler(resolver, expressions).compile(model, spec.filter)

        if spec.include is not None:
            includes.extend(IncludeResolver(resolver).resolve(model, spec.include))

        order = SortResolver(resolver).resolve(model, spec.sort) if spec.sort is not None else None

        plan = QueryPlan(
            model=model,
            search=search,
            filter=filter_,
            includes=tuple(dict.fromkeys(includes)),
            order=order,
            window=window_for(spec.pagination),
        )
        self._log_plan(spec, resolver, plan)
        return plan

    def apply(self, source: Any, spec: QuerySpec[Any]) -> Any:
        """Apply *spec* to *source* and return the same kind of source.

        A :class:`QuerySource` is transformed and returned unexecuted; any
        other iterable is evaluated eagerly and returned as a ``list``.
        """
        if source is None:
            raise ValidationError("A query source is required", errors=[{"field": "source", "reason": "is None"}])
        plan = self.plan(spec)
        if isinstance(source, QuerySource):
            return plan.run(source)
        if isinstance(source, Iterable) and not isinstance(source, (str, bytes, Mapping)):
            return plan.run(InMemorySource(source)).to_list()
        raise ValidationError(
            f"Unsupported query source {type(source).__name__}",
            errors=[{"field": "source", "type": type(source).__name__}],
        )

    def _log_plan(self, spec: QuerySpec[Any], resolver: MetadataResolver, plan: QueryPlan) -> None:
        redactor = SensitiveFieldsFilter(resolver.metadata(spec.model).encrypted_names)
        filters = (
            redactor.redact_pairs((e.field_name, e.raw_value) for e in spec.filter)
            if spec.filter is not None
            else []
        )
        _log.debug(
            "query.planned",
            model=spec.model.__name__,
            search=spec.search is not None,
            filters=filters,
            includes=list(plan.includes),
            order=(plan.order.field, plan.order.ascending) if plan.order else None,
            skip=plan.window.skip,
            take=plan.window.take,
        )


_default_composer = QueryComposer()


def apply(source: Any, spec: QuerySpec[Any]) -> Any:
    """Apply *spec* to *source* with the default composer."""
    return _default_composer.apply(source, spec)


__all__ = ["QueryComposer", "QueryPlan", "QuerySource", "apply"]
