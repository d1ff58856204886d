"""Kernel – framework-agnostic building blocks shared by every layer."""

from qoptions.kernel.errors import (
    BaseError,
    ConfigurationError,
    ParseError,
    UnsupportedOperationError,
    ValidationError,
)

__all__ = [
    "BaseError",
    "ConfigurationError",
    "ParseError",
    "UnsupportedOperationError",
    "ValidationError",
]
