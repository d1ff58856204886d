"""Metadata – ModelRegistry: one-time descriptor registration per model type."""
from __future__ import annotations

import dataclasses
import datetime
import types
import typing
from typing import Any, Iterable, Protocol, Union, runtime_checkable

from qoptions.kernel.errors import ConfigurationError
from qoptions.metadata.fields import FieldMetadata, ModelMetadata, ValueKind


def kind_for(python_type: Any) -> ValueKind | None:
    """Map a Python type to its :class:`ValueKind` (``None`` if not comparable)."""
    if not isinstance(python_type, type):
        return None
    # bool before int: bool is an int subclass
    if issubclass(python_type, bool):
        return ValueKind.BOOLEAN
    if issubclass(python_type, datetime.datetime):
        return ValueKind.DATETIME
    if issubclass(python_type, str):
        return ValueKind.STRING
    if issubclass(python_type, int):
        return ValueKind.INTEGER
    if issubclass(python_type, float):
        return ValueKind.FLOATING
    return None


@runtime_checkable
class MetadataProvider(Protocol):
    """Port: returns the descriptor table registered for *model*."""

    def metadata_for(self, model: type) -> ModelMetadata: ...


class ModelRegistry:
    """In-process :class:`MetadataProvider` backed by explicit registrations.

    Usage::

        registry = ModelRegistry()
        registry.register_dataclass(Address, searchable=("city",))
        registry.register_dataclass(Customer, searchable=("first_name", "last_name"))
    """

    def __init__(self) -> None:
        self._models: dict[type, ModelMetadata] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        model: type,
        fields: Iterable[FieldMetadata],
        *,
        entity: bool = True,
    ) -> ModelMetadata:
        """Register an explicit descriptor table for *model*.

        Registering the same model again replaces its previous table.
        """
        if not isinstance(model, type):
            raise ConfigurationError(f"model must be a class, got {model!r}")
        metadata = ModelMetadata(model=model, fields=tuple(fields), entity=entity)
        self._models[model] = metadata
        return metadata

    def register_dataclass(
        self,
        cls: type,
        *,
        searchable: Iterable[str] = (),
        encrypted: Iterable[str] = (),
        entity: bool = True,
    ) -> ModelMetadata:
        """Derive descriptors from a dataclass's annotations and register them.

        ``str``/``int``/``float``/``bool``/``datetime`` (optionally ``| None``)
        become comparable fields.  A nested dataclass or registered model
        becomes a child-entity field; ``list[Child]`` a to-many child.
        """
        if not dataclasses.is_dataclass(cls) or not isinstance(cls, type):
            raise ConfigurationError(f"{cls!r} is not a dataclass type")

        searchable_names = frozenset(searchable)
        encrypted_names = frozenset(encrypted)
        declared = {f.name for f in dataclasses.fields(cls)}
        unknown = (searchable_names | encrypted_names) - declared
        if unknown:
            raise ConfigurationError(
                f"{cls.__name__} has no field(s) {sorted(unknown)}",
                detail={"model": cls.__name__, "fields": sorted(unknown)},
            )

        try:
            hints = typing.get_type_hints(cls)
        except NameError as exc:
            raise ConfigurationError(
                f"Cannot resolve annotations of {cls.__name__}: {exc}", cause=exc
            ) from exc

        descriptors = [
            self._describe(
                f.name,
                hints.get(f.name, Any),
                searchable=f.name in searchable_names,
                encrypted=f.name in encrypted_names,
            )
            for f in dataclasses.fields(cls)
        ]
        return self.register(cls, descriptors, entity=entity)

    def _describe(self, name: str, hint: Any, *, searchable: bool, encrypted: bool) -> FieldMetadata:
        inner, nullable = _unwrap_optional(hint)
        kind = kind_for(inner)
        if kind is not None:
            return FieldMetadata(
                name=name,
                kind=kind,
                nullable=nullable,
                searchable=searchable,
                encrypted=encrypted,
            )

        many = False
        origin = typing.get_origin(inner)
        if origin in (list, tuple, set, frozenset):
            args = [a for a in typing.get_args(inner) if a is not Ellipsis]
            if len(args) == 1:
                inner, many = args[0], True
        if self._is_entity_type(inner):
            return FieldMetadata(name=name, nullable=nullable, child=inner, many=many)
        return FieldMetadata(name=name, nullable=nullable)

    def _is_entity_type(self, tp: Any) -> bool:
        if not isinstance(tp, type):
            return False
        if tp in self._models:
            return self._models[tp].entity
        return dataclasses.is_dataclass(tp)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def metadata_for(self, model: type) -> ModelMetadata:
        try:
            return self._models[model]
        except (KeyError, TypeError):
            name = getattr(model, "__name__", repr(model))
            raise ConfigurationError(
                f"Model {name} is not registered",
                detail={"model": name},
            ) from None

    get = metadata_for

    def __contains__(self, model: object) -> bool:
        return model in self._models

    def unregister(self, model: type) -> None:
        self._models.pop(model, None)

    def clear(self) -> None:
        self._models.clear()


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    origin = typing.get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(hint)
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(non_none) != len(args):
            return non_none[0], True
    return hint, False


default_registry = ModelRegistry()
"""Process-wide registry used by :func:`qoptions.create_query` when none is given."""


__all__ = ["MetadataProvider", "ModelRegistry", "default_registry", "kind_for"]
