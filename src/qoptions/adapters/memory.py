"""In-memory adapter – evaluates a query plan eagerly over a sequence."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

from qoptions.compilers import OrderKey, Window
from qoptions.predicate import Predicate

T = TypeVar("T")

__all__ = ["InMemorySource"]


class InMemorySource(Generic[T]):
    """Query source over objects or mappings that are already resident.

    Predicates are evaluated with :meth:`Predicate.is_satisfied_by`; ordering
    uses Python's stable sort, so equal keys keep their input order in both
    directions.  Including children is a no-op (every field is loaded).
    """

    def __init__(self, items: Iterable[T]) -> None:
        self._items: tuple[T, ...] = tuple(items)

    def where(self, predicate: Predicate) -> "InMemorySource[T]":
        return InMemorySource(item for item in self._items if predicate.is_satisfied_by(item))

    def include(self, names: tuple[str, ...]) -> "InMemorySource[T]":  # noqa: ARG002
        return self

    def order_by(self, key: OrderKey) -> "InMemorySource[T]":
        return InMemorySource(sorted(self._items, key=key.extract, reverse=not key.ascending))

    def window(self, window: Window) -> "InMemorySource[T]":
        return InMemorySource(window.slice(self._items))

    def to_list(self) -> list[T]:
        return list(self._items)

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
