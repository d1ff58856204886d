"""SQLAlchemy adapter – translate predicate nodes into SQL expressions."""
from __future__ import annotations

import re
from typing import Any

from sqlalchemy import and_, false, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from qoptions.kernel.errors import ConfigurationError
from qoptions.predicate import And, Compare, Constant, Not, Operator, Or, Predicate


def to_clause(model: type, predicate: Predicate) -> ColumnElement[bool]:
    """Return the WHERE expression equivalent to *predicate* on *model*.

    Child comparisons become ``EXISTS`` subqueries through the relationship
    (``has()`` for a scalar child, ``any()`` for a collection), so no join is
    added to the outer statement.
    """
    match predicate:
        case Constant(value=value):
            return true() if value else false()
        case And(operands=operands):
            return and_(*(to_clause(model, p) for p in operands))
        case Or(operands=operands):
            return or_(*(to_clause(model, p) for p in operands))
        case Not(operand=operand):
            return not_(to_clause(model, operand))
        case Compare(via=None):
            return _compare(_attribute(model, predicate.field), predicate)
        case Compare(via=via):
            relationship = _attribute(model, via)
            target = relationship.property.mapper.class_
            inner = _compare(_attribute(target, predicate.field), predicate)
            return relationship.any(inner) if predicate.via_many else relationship.has(inner)
    raise TypeError(f"Cannot translate {type(predicate).__name__}")


def _compare(column: Any, node: Compare) -> ColumnElement[bool]:
    # NULL never matches, so NOT over the result stays two-valued.
    if node.operator is Operator.EQUALS:
        if node.value is None:
            return column.is_(None)
        return and_(column.is_not(None), column == node.value)
    if node.ignore_case:
        matched = column.icontains(node.value, autoescape=True)
    else:
        # LIKE folds ASCII case on some backends.
        matched = column.regexp_match(re.escape(node.value))
    return and_(column.is_not(None), matched)


def _attribute(model: type, name: str) -> Any:
    try:
        return getattr(model, name)
    except AttributeError:
        raise ConfigurationError(
            f"Mapped class {model.__name__} has no attribute '{name}'",
            detail={"model": model.__name__, "field": name},
        ) from None


__all__ = ["to_clause"]
