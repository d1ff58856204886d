"""MongoDB adapter – deferred query source over an async collection."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from qoptions.adapters.mongodb.translator import to_mongo_filter, to_mongo_sort
from qoptions.compilers import OrderKey, Window
from qoptions.predicate import MATCH_ALL, Predicate, conjoin

T = TypeVar("T")


class MongoQuerySource(Generic[T]):
    """Deferred query source for a Motor-style async collection.

    Child entities are embedded documents, so :meth:`include` has nothing to
    load and only records the request.  Documents are returned as-is unless
    a *document_factory* maps them to model instances.

    Usage::

        source = apply(MongoQuerySource(db.customers, Customer.from_document), spec)
        customers = await source.all()
    """

    def __init__(
        self,
        collection: Any,
        document_factory: Callable[[dict[str, Any]], T] | None = None,
        *,
        _predicate: Predicate = MATCH_ALL,
        _includes: tuple[str, ...] = (),
        _order: tuple[OrderKey, ...] = (),
        _window: Window | None = None,
    ) -> None:
        self._col = collection
        self._factory = document_factory
        self._predicate = _predicate
        self._includes = _includes
        self._order = _order
        self._window = _window

    def _copy(self, **changes: Any) -> "MongoQuerySource[T]":
        state: dict[str, Any] = {
            "_predicate": self._predicate,
            "_includes": self._includes,
            "_order": self._order,
            "_window": self._window,
        }
        state.update(changes)
        return MongoQuerySource(self._col, self._factory, **state)

    # ------------------------------------------------------------------
    # QuerySource
    # ------------------------------------------------------------------

    def where(self, predicate: Predicate) -> "MongoQuerySource[T]":
        return self._copy(_predicate=conjoin(self._predicate, predicate))

    def include(self, names: tuple[str, ...]) -> "MongoQuerySource[T]":
        return self._copy(_includes=tuple(dict.fromkeys(self._includes + tuple(names))))

    def order_by(self, key: OrderKey) -> "MongoQuerySource[T]":
        return self._copy(_order=(key,) + self._order)

    def window(self, window: Window) -> "MongoQuerySource[T]":
        return self._copy(_window=window)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @property
    def includes(self) -> tuple[str, ...]:
        return self._includes

    @property
    def filter(self) -> dict[str, Any]:
        return to_mongo_filter(self._predicate)

    def find_kwargs(self) -> dict[str, Any]:
        """Keyword arguments passed to ``collection.find``."""
        kwargs: dict[str, Any] = {"filter": self.filter}
        if self._order or self._window is not None:
            kwargs["sort"] = to_mongo_sort(self._order)
        if self._window is not None:
            kwargs["skip"] = self._window.skip
            kwargs["limit"] = self._window.take
        return kwargs

    async def all(self) -> list[T]:
        cursor = self._col.find(**self.find_kwargs())
        docs = [doc async for doc in cursor]
        if self._factory is None:
            return docs
        return [self._factory(doc) for doc in docs]


__all__ = ["MongoQuerySource"]
