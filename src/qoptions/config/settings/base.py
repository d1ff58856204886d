"""Config settings – Settings base class and QuerySettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from qoptions.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass(frozen=True)
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass(frozen=True)
class QuerySettings(Settings):
    """Defaults applied by the query composer.

    ``max_page_size`` of ``0`` disables the upper bound on page sizes.
    ``case_insensitive_search`` controls substring matching for every adapter.
    """

    _prefix: ClassVar[str] = "QOPTIONS"

    default_page_size: int = 10
    max_page_size: int = 0
    case_insensitive_search: bool = True

    def _validate(self) -> None:
        if self.default_page_size < 1:
            raise InvalidSettingValueError(
                "default_page_size", self.default_page_size, "must be >= 1"
            )
        if self.max_page_size < 0:
            raise InvalidSettingValueError(
                "max_page_size", self.max_page_size, "must be >= 0"
            )
        if self.max_page_size and self.default_page_size > self.max_page_size:
            raise InvalidSettingValueError(
                "default_page_size",
                self.default_page_size,
                f"exceeds max_page_size ({self.max_page_size})",
            )


__all__ = ["QuerySettings", "Settings"]
