"""Predicate nodes – composable boolean conditions over records.

A predicate is a small tree of immutable nodes::

    Compare      field-level EQUALS / CONTAINS test
    And / Or     n-ary conjunction / disjunction
    Not          negation
    Constant     MATCH_ALL / MATCH_NONE

Nodes are evaluated directly with :meth:`Predicate.is_satisfied_by` or walked
by a backing-store translator (see ``qoptions.adapters``).  Both paths must
agree on every input, so evaluation never relies on anything a translator
cannot express.
"""

from __future__ import annotations

import abc
import dataclasses
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


class Operator(str, Enum):
    EQUALS = "eq"
    CONTAINS = "contains"


def read_field(record: Any, name: str) -> Any:
    """Read *name* from an object or mapping; missing reads as ``None``."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


class Predicate(abc.ABC):
    """Abstract base for predicate nodes; provides operator overloads.

    Example::

        active = Compare("status", Operator.EQUALS, "Active")
        east = Compare("region", Operator.EQUALS, "East")
        spec = active & east
        spec.is_satisfied_by({"status": "Active", "region": "East"})
    """

    __slots__ = ()

    @abc.abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool: ...

    # Named combinators ------------------------------------------------
    def and_(self, other: Predicate) -> Predicate:
        return conjoin(self, other)

    def or_(self, other: Predicate) -> Predicate:
        return disjoin(self, other)

    def not_(self) -> Predicate:
        return negate(self)

    # Operator overloads -----------------------------------------------
    def __and__(self, other: Predicate) -> Predicate:
        return conjoin(self, other)

    def __or__(self, other: Predicate) -> Predicate:
        return disjoin(self, other)

    def __invert__(self) -> Predicate:
        return negate(self)

    def __call__(self, candidate: Any) -> bool:
        return self.is_satisfied_by(candidate)


@dataclasses.dataclass(frozen=True)
class Constant(Predicate):
    """Neutral predicate: always ``value``."""

    value: bool

    def is_satisfied_by(self, candidate: Any) -> bool:  # noqa: ARG002
        return self.value

    def __str__(self) -> str:
        return "TRUE" if self.value else "FALSE"


MATCH_ALL = Constant(True)
MATCH_NONE = Constant(False)


@dataclasses.dataclass(frozen=True)
class Compare(Predicate):
    """Field-level comparison.

    ``via`` names a child-entity field the comparison is reached through
    (one level); ``via_many`` marks that child as a collection, in which case
    the comparison holds when any child satisfies it.  ``ignore_case`` only
    applies to CONTAINS.
    """

    field: str
    operator: Operator
    value: Any
    ignore_case: bool = False
    via: str | None = None
    via_many: bool = False

    @property
    def path(self) -> tuple[str, ...]:
        return (self.via, self.field) if self.via else (self.field,)

    def is_satisfied_by(self, candidate: Any) -> bool:
        if self.via is None:
            return self.test(read_field(candidate, self.field))
        child = read_field(candidate, self.via)
        if child is None:
            return False
        if self.via_many:
            return any(self.test(read_field(c, self.field)) for c in child)
        return self.test(read_field(child, self.field))

    def test(self, actual: Any) -> bool:
        """Apply the comparison to an already-read field value."""
        if self.operator is Operator.EQUALS:
            if self.value is None:
                return actual is None
            return actual is not None and actual == self.value
        if not isinstance(actual, str):
            return False
        if self.ignore_case:
            return self.value.lower() in actual.lower()
        return self.value in actual

    def __str__(self) -> str:
        op = "==" if self.operator is Operator.EQUALS else ("icontains" if self.ignore_case else "contains")
        return f"{'.'.join(self.path)} {op} {self.value!r}"


@dataclasses.dataclass(frozen=True)
class And(Predicate):
    operands: tuple[Predicate, ...]

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(p.is_satisfied_by(candidate) for p in self.operands)

    def __str__(self) -> str:
        return "(" + " AND ".join(str(p) for p in self.operands) + ")"


@dataclasses.dataclass(frozen=True)
class Or(Predicate):
    operands: tuple[Predicate, ...]

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(p.is_satisfied_by(candidate) for p in self.operands)

    def __str__(self) -> str:
        return "(" + " OR ".join(str(p) for p in self.operands) + ")"


@dataclasses.dataclass(frozen=True)
class Not(Predicate):
    operand: Predicate

    def is_satisfied_by(self, candidate: Any) -> bool:
        return not self.operand.is_satisfied_by(candidate)

    def __str__(self) -> str:
        return f"NOT {self.operand}"


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def _operands(node: Predicate, kind: type[And] | type[Or]) -> tuple[Predicate, ...]:
    return node.operands if isinstance(node, kind) else (node,)


def conjoin(left: Predicate, right: Predicate) -> Predicate:
    """``left AND right`` with neutral/absorbing constants folded away."""
    _check(left, right)
    if left == MATCH_NONE or right == MATCH_NONE:
        return MATCH_NONE
    if left == MATCH_ALL:
        return right
    if right == MATCH_ALL:
        return left
    return And(_operands(left, And) + _operands(right, And))


def disjoin(left: Predicate, right: Predicate) -> Predicate:
    """``left OR right`` with neutral/absorbing constants folded away."""
    _check(left, right)
    if left == MATCH_ALL or right == MATCH_ALL:
        return MATCH_ALL
    if left == MATCH_NONE:
        return right
    if right == MATCH_NONE:
        return left
    return Or(_operands(left, Or) + _operands(right, Or))


def negate(node: Predicate) -> Predicate:
    _check(node)
    if isinstance(node, Constant):
        return Constant(not node.value)
    if isinstance(node, Not):
        return node.operand
    return Not(node)


def _check(*nodes: Any) -> None:
    for node in nodes:
        if not isinstance(node, Predicate):
            raise TypeError(f"expected a Predicate, got {type(node).__name__}")


def iter_compares(node: Predicate) -> Iterable[Compare]:
    """Yield every :class:`Compare` leaf of *node*, depth first."""
    if isinstance(node, Compare):
        yield node
    elif isinstance(node, (And, Or)):
        for operand in node.operands:
            yield from iter_compares(operand)
    elif isinstance(node, Not):
        yield from iter_compares(node.operand)


__all__ = [
    "MATCH_ALL",
    "MATCH_NONE",
    "And",
    "Compare",
    "Constant",
    "Not",
    "Operator",
    "Or",
    "Predicate",
    "conjoin",
    "disjoin",
    "iter_compares",
    "negate",
    "read_field",
]
