"""ExpressionFactory – builds single field-level predicate fragments."""

from __future__ import annotations

import datetime
import re
from typing import Any

from qoptions.kernel.errors import ParseError, UnsupportedOperationError, ValidationError
from qoptions.metadata import FieldMetadata, ValueKind
from qoptions.predicate.nodes import MATCH_NONE, Compare, Operator, Predicate

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def coerce(raw_value: str | None, kind: ValueKind, *, field: str | None = None) -> Any:
    """Parse *raw_value* into the native representation of *kind*.

    ``None`` passes through unchanged, as does any value for
    :attr:`ValueKind.STRING`.  Surrounding whitespace is ignored for the other
    kinds.

    Raises
    ------
    ParseError
        When the text is not a valid literal for *kind*.
    """
    if raw_value is None:
        return None
    if not isinstance(raw_value, str):
        raise ValidationError(
            f"raw value must be a string, got {type(raw_value).__name__}",
            errors=[{"field": field, "value": repr(raw_value)}],
        )
    if kind is ValueKind.STRING:
        return raw_value

    text = raw_value.strip()
    match kind:
        case ValueKind.INTEGER:
            if _INTEGER_RE.fullmatch(text):
                return int(text)
        case ValueKind.FLOATING:
            if _FLOAT_RE.fullmatch(text):
                return float(text)
        case ValueKind.BOOLEAN:
            lowered = text.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
        case ValueKind.DATETIME:
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                return datetime.datetime.fromisoformat(text)
            except ValueError as exc:
                raise ParseError(field, raw_value, kind.value, cause=exc) from exc
    raise ParseError(field, raw_value, kind.value)


class ExpressionFactory:
    """Builds :class:`Compare` fragments with value coercion.

    ``case_insensitive`` fixes the substring-matching policy for every
    fragment this factory produces; adapters read it back from the node.
    """

    def __init__(self, *, case_insensitive: bool = True) -> None:
        self.case_insensitive = case_insensitive

    def build_field_predicate(
        self,
        field: FieldMetadata,
        operator: Operator,
        raw_value: str | None,
    ) -> Predicate:
        return self._compare(field, operator, raw_value)

    def build_child_predicate(
        self,
        parent: FieldMetadata,
        field: FieldMetadata,
        operator: Operator,
        raw_value: str | None,
    ) -> Predicate:
        """Same as :meth:`build_field_predicate`, reached through *parent*."""
        if not parent.is_child_entity:
            raise UnsupportedOperationError(
                f"Field '{parent.name}' is not a child entity and cannot be traversed",
                detail={"field": parent.name},
            )
        return self._compare(field, operator, raw_value, via=parent.name, via_many=parent.many)

    def _compare(
        self,
        field: FieldMetadata,
        operator: Operator,
        raw_value: str | None,
        *,
        via: str | None = None,
        via_many: bool = False,
    ) -> Predicate:
        if field.kind is None:
            raise UnsupportedOperationError(
                f"Field '{field.name}' is not comparable",
                detail={"field": field.name},
            )
        operator = Operator(operator)

        if operator is Operator.CONTAINS:
            if field.kind is not ValueKind.STRING:
                raise UnsupportedOperationError(
                    f"Substring match is not supported on {field.kind.value} field '{field.name}'",
                    detail={"field": field.name, "kind": field.kind.value},
                )
            if raw_value is None:
                raise ValidationError(
                    "A substring match requires a keyword",
                    errors=[{"field": field.name, "reason": "keyword is None"}],
                )
            return Compare(
                field.name,
                Operator.CONTAINS,
                raw_value,
                ignore_case=self.case_insensitive,
                via=via,
                via_many=via_many,
            )

        if raw_value is None:
            if not field.nullable:
                return MATCH_NONE
            return Compare(field.name, Operator.EQUALS, None, via=via, via_many=via_many)
        value = coerce(raw_value, field.kind, field=field.name)
        return Compare(field.name, Operator.EQUALS, value, via=via, via_many=via_many)


__all__ = ["ExpressionFactory", "coerce"]
