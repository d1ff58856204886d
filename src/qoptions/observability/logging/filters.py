"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any, Iterable


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``.

    Keys are compared case-insensitively.  The composer builds one per model
    from the fields flagged ``encrypted`` so raw filter values for those
    fields never reach a log line.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: Iterable[str] = ()) -> None:
        self._fields = frozenset(f.lower() for f in sensitive_fields)

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if self.is_sensitive(k) else v) for k, v in data.items()}

    def redact_pairs(self, pairs: Iterable[tuple[str, Any]]) -> list[tuple[str, Any]]:
        """Redact ``(key, value)`` pairs, keeping order and duplicates."""
        return [(k, self.REDACTED if self.is_sensitive(k) else v) for k, v in pairs]


__all__ = ["SensitiveFieldsFilter"]
