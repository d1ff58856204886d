"""Root error class for the qoptions error hierarchy."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, ClassVar


class BaseError(Exception):
    """Root of every error qoptions raises.

    Each error carries a ``code`` slug and a ``detail`` mapping, and renders
    to a JSON-friendly dict through :meth:`to_dict`.  Subclasses with
    structured payloads override :meth:`extra` rather than ``to_dict``.

    The originating exception is read from ``__cause__``, so both
    ``cause=exc`` and ``raise ... from exc`` report it.
    """

    default_code: ClassVar[str] = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or type(self).default_code
        self.detail: dict[str, Any] = dict(detail or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def extra(self) -> dict[str, Any]:
        """Subclass-specific keys merged into :meth:`to_dict`."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        payload.update(self.extra())
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code}: {self.message}>"


__all__ = ["BaseError"]
