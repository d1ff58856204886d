"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ValidationError
    ├── ConfigurationError
    ├── ParseError
    └── UnsupportedOperationError
"""

from qoptions.kernel.errors.base import BaseError
from qoptions.kernel.errors.query import (
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
