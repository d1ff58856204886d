"""Metadata – MetadataResolver: comparable / searchable / child-entity views."""
from __future__ import annotations

from qoptions.metadata.fields import FieldMetadata, ModelMetadata
from qoptions.metadata.registry import MetadataProvider, default_registry


class MetadataResolver:
    """Read-only views over the descriptors a :class:`MetadataProvider` returns.

    Child-entity lookups are one level deep: a child's own children are never
    visited.  A model registered with ``entity=False`` has no child-entity
    fields (an empty tuple, not an error).
    """

    def __init__(self, provider: MetadataProvider | None = None) -> None:
        self._provider = provider if provider is not None else default_registry

    @property
    def provider(self) -> MetadataProvider:
        return self._provider

    def metadata(self, model: type) -> ModelMetadata:
        return self._provider.metadata_for(model)

    def is_entity(self, model: type) -> bool:
        return self.metadata(model).entity

    def comparable_fields(self, model: type) -> tuple[FieldMetadata, ...]:
        return tuple(f for f in self.metadata(model).fields if f.is_comparable)

    def searchable_fields(self, model: type) -> tuple[FieldMetadata, ...]:
        return tuple(f for f in self.metadata(model).fields if f.is_searchable)

    def child_entity_fields(self, model: type) -> tuple[FieldMetadata, ...]:
        metadata = self.metadata(model)
        if not metadata.entity:
            return ()
        return tuple(f for f in metadata.fields if f.is_child_entity)

    def resolve_comparable(self, model: type, name: str) -> FieldMetadata | None:
        """Case-insensitive lookup restricted to comparable fields."""
        f = self.metadata(model).match(name)
        return f if f is not None and f.is_comparable else None

    def resolve_child(self, model: type, name: str) -> FieldMetadata | None:
        """Case-insensitive lookup restricted to child-entity fields."""
        folded = name.lower() if isinstance(name, str) else None
        for f in self.child_entity_fields(model):
            if f.name == name or f.name.lower() == folded:
                return f
        return None


__all__ = ["MetadataResolver"]
