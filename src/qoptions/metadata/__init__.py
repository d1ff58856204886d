"""Metadata – field descriptors, registry and resolver."""
from qoptions.metadata.fields import FieldMetadata, ModelMetadata, ValueKind
from qoptions.metadata.registry import MetadataProvider, ModelRegistry, default_registry, kind_for
from qoptions.metadata.resolver import MetadataResolver

__all__ = [
    "FieldMetadata",
    "MetadataProvider",
    "MetadataResolver",
    "ModelMetadata",
    "ModelRegistry",
    "ValueKind",
    "default_registry",
    "kind_for",
]
