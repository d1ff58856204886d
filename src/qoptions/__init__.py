"""
qoptions – declarative search / filter / sort / paginate / include queries.

Import path convention::

    from qoptions import create_query, apply
    from qoptions.metadata import ModelRegistry, FieldMetadata, ValueKind
    from qoptions.adapters.sqlalchemy import SqlAlchemyQuerySource, register_mapped
    from qoptions.adapters.mongodb import MongoQuerySource
"""

from qoptions.composer import QueryComposer, QueryPlan, QuerySource, apply
from qoptions.config import QuerySettings
from qoptions.kernel.errors import (
    BaseError,
    ConfigurationError,
    ParseError,
    UnsupportedOperationError,
    ValidationError,
)
from qoptions.metadata import FieldMetadata, ModelRegistry, ValueKind, default_registry
from qoptions.query import QuerySpec, create_query

__version__ = "0.1.0"
__all__ = [
    "BaseError",
    "ConfigurationError",
    "FieldMetadata",
    "ModelRegistry",
    "ParseError",
    "QueryComposer",
    "QueryPlan",
    "QuerySettings",
    "QuerySource",
    "QuerySpec",
    "UnsupportedOperationError",
    "ValidationError",
    "ValueKind",
    "__version__",
    "apply",
    "create_query",
    "default_registry",
]
