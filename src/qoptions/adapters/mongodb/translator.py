"""MongoDB adapter – translate predicate nodes into a filter document."""

from __future__ import annotations

import re
from typing import Any

from qoptions.compilers import OrderKey
from qoptions.predicate import And, Compare, Constant, Not, Operator, Or, Predicate

_MATCH_NOTHING: dict[str, Any] = {"_id": {"$in": []}}


def to_mongo_filter(predicate: Predicate) -> dict[str, Any]:
    """Return the ``find()`` filter equivalent to *predicate*.

    A scalar child is reached with a dotted path (``"address.city"``); an
    array of embedded children with ``$elemMatch``, which holds when any
    element matches, the rule the in-memory adapter applies.
    """
    match predicate:
        case Constant(value=True):
            return {}
        case Constant(value=False):
            return dict(_MATCH_NOTHING)
        case And(operands=operands):
            return {"$and": [to_mongo_filter(p) for p in operands]}
        case Or(operands=operands):
            return {"$or": [to_mongo_filter(p) for p in operands]}
        case Not(operand=operand):
            return {"$nor": [to_mongo_filter(operand)]}
        case Compare(via=None):
            return {predicate.field: _condition(predicate)}
        case Compare(via_many=True):
            return {predicate.via: {"$elemMatch": {predicate.field: _condition(predicate)}}}
        case Compare():
            condition = {".".join(predicate.path): _condition(predicate)}
            if predicate.value is None:
                # a missing child must not satisfy "child.field is null"
                return {"$and": [{predicate.via: {"$ne": None}}, condition]}
            return condition
    raise TypeError(f"Cannot translate {type(predicate).__name__}")


def _condition(node: Compare) -> Any:
    if node.operator is Operator.EQUALS:
        return node.value
    condition: dict[str, Any] = {"$regex": re.escape(node.value)}
    if node.ignore_case:
        condition["$options"] = "i"
    return condition


def to_mongo_sort(keys: tuple[OrderKey, ...]) -> list[tuple[str, int]]:
    """Sort list with ``_id`` appended as the tie-breaker.

    MongoDB orders ``null``/missing values first ascending and last
    descending, matching the other adapters.
    """
    spec = [(key.field, 1 if key.ascending else -1) for key in keys]
    if not any(name == "_id" for name, _ in spec):
        spec.append(("_id", 1))
    return spec


__all__ = ["to_mongo_filter", "to_mongo_sort"]
