"""PaginationApplier – page size / index to a skip/take window."""
from __future__ import annotations

import dataclasses
from typing import Sequence, TypeVar

from qoptions.query.specs import PaginationSpec

T = TypeVar("T")


@dataclasses.dataclass(frozen=True, slots=True)
class Window:
    """``(skip, take)`` pair applied after filtering and sorting."""
    skip: int
    take: int

    def slice(self, items: Sequence[T]) -> list[T]:
        return list(items[self.skip: self.skip + self.take])


def window_for(pagination: PaginationSpec) -> Window:
    return Window(skip=pagination.offset, take=pagination.page_size)


__all__ = ["Window", "window_for"]
