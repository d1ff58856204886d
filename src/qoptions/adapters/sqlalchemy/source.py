"""SQLAlchemy adapter – deferred query source over a ``Select`` statement."""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qoptions.adapters.sqlalchemy.translator import to_clause
from qoptions.compilers import OrderKey, Window
from qoptions.predicate import MATCH_ALL, Predicate, conjoin

T = TypeVar("T")


class SqlAlchemyQuerySource(Generic[T]):
    """Deferred query source: collects a plan, builds a ``Select`` on demand.

    Nothing touches the database until :meth:`all` is awaited.  Ordering
    puts ``NULL`` first ascending / last descending (as the in-memory
    adapter does) and appends the primary key as a tie-breaker, so equal keys
    keep their natural order and pages are deterministic.

    Usage::

        source = apply(SqlAlchemyQuerySource(Customer), spec)
        async with session_factory() as session:
            customers = await source.all(session)
    """

    def __init__(
        self,
        model: type[T],
        *,
        statement: Select[Any] | None = None,
        _predicate: Predicate = MATCH_ALL,
        _includes: tuple[str, ...] = (),
        _order: tuple[OrderKey, ...] = (),
        _window: Window | None = None,
    ) -> None:
        self._model = model
        self._base = statement if statement is not None else select(model)
        self._predicate = _predicate
        self._includes = _includes
        self._order = _order
        self._window = _window

    def _copy(self, **changes: Any) -> "SqlAlchemyQuerySource[T]":
        state: dict[str, Any] = {
            "statement": self._base,
            "_predicate": self._predicate,
            "_includes": self._includes,
            "_order": self._order,
            "_window": self._window,
        }
        state.update(changes)
        return SqlAlchemyQuerySource(self._model, **state)

    @property
    def model(self) -> type[T]:
        return self._model

    # ------------------------------------------------------------------
    # QuerySource
    # ------------------------------------------------------------------

    def where(self, predicate: Predicate) -> "SqlAlchemyQuerySource[T]":
        return self._copy(_predicate=conjoin(self._predicate, predicate))

    def include(self, names: tuple[str, ...]) -> "SqlAlchemyQuerySource[T]":
        return self._copy(_includes=tuple(dict.fromkeys(self._includes + tuple(names))))

    def order_by(self, key: OrderKey) -> "SqlAlchemyQuerySource[T]":
        # the newest key leads; earlier keys break its ties
        return self._copy(_order=(key,) + self._order)

    def window(self, window: Window) -> "SqlAlchemyQuerySource[T]":
        return self._copy(_window=window)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @property
    def statement(self) -> Select[Any]:
        """The ``Select`` this source would execute."""
        stmt = self._base
        if self._predicate != MATCH_ALL:
            stmt = stmt.where(to_clause(self._model, self._predicate))
        if self._includes:
            stmt = stmt.options(*(selectinload(getattr(self._model, name)) for name in self._includes))
        if self._order or self._window is not None:
            stmt = stmt.order_by(*self._order_clauses())
        if self._window is not None:
            stmt = stmt.offset(self._window.skip).limit(self._window.take)
        return stmt

    def _order_clauses(self) -> list[Any]:
        clauses: list[Any] = []
        for key in self._order:
            column = getattr(self._model, key.field)
            clauses.append(column.asc().nulls_first() if key.ascending else column.desc().nulls_last())
        clauses.extend(column.asc() for column in inspect(self._model).primary_key)
        return clauses

    async def all(self, session: AsyncSession) -> list[T]:
        result = await session.execute(self.statement)
        return list(result.scalars().all())


__all__ = ["SqlAlchemyQuerySource"]
