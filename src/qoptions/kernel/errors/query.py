"""Query errors raised while building specs and compiling predicates."""

from __future__ import annotations

from typing import Any

from qoptions.kernel.errors.base import BaseError


class ValidationError(BaseError):
    """A required argument is missing or a spec value is out of range.

    ``errors`` is a list of field-level failures, one dict per argument.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def extra(self) -> dict[str, Any]:
        return {"errors": self.errors}


class ConfigurationError(BaseError):
    """Programmer error: unknown model, unknown static field selector, bad settings."""

    default_code = "configuration_error"


class ParseError(BaseError):
    """A raw filter value cannot be coerced into the field's value kind."""

    default_code = "parse_error"

    def __init__(
        self,
        field: str | None,
        raw_value: str,
        kind: str,
        **kwargs: Any,
    ) -> None:
        target = f"field '{field}'" if field else "value"
        super().__init__(
            f"Cannot parse {raw_value!r} as {kind} for {target}",
            detail={"field": field, "value": raw_value, "kind": kind},
            **kwargs,
        )
        self.field = field
        self.raw_value = raw_value
        self.kind = kind


class UnsupportedOperationError(BaseError):
    """The requested comparison or traversal is not defined for the field."""

    default_code = "unsupported_operation"


__all__ = [
    "ConfigurationError",
    "ParseError",
    "UnsupportedOperationError",
    "ValidationError",
]
