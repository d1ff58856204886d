"""Observability – structured logging helpers."""
from qoptions.observability.logging.filters import SensitiveFieldsFilter
from qoptions.observability.logging.factory import JsonLoggerFactory
from qoptions.observability.logging.processors import get_logger

__all__ = [
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
