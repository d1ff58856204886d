"""Query – field selector resolution.

A selector is one of:

* ``str`` – a free-text field name (typically from request input).  It is
  resolved case-insensitively at compile time and silently ignored when it
  matches nothing.
* a callable such as ``lambda c: c.status`` or ``lambda c: c["status"]`` –
  a static selector, resolved here by recording the attribute it reads.
* an attribute object exposing ``.key`` (e.g. a SQLAlchemy
  ``InstrumentedAttribute`` such as ``Customer.status``) – also static.
  Its owning class (``.class_``) must be the model or one of its bases.

Static selectors must name a field the model declares; anything else is a
programmer error and raises :class:`ConfigurationError` immediately.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from qoptions.kernel.errors import ConfigurationError, ValidationError
from qoptions.metadata import FieldMetadata, ModelMetadata


@dataclasses.dataclass(frozen=True)
class SelectedField:
    name: str
    static: bool
    owner: type | None = dataclasses.field(default=None, compare=False)


class _AccessRecorder:
    """Records the attribute/key accesses a selector lambda performs."""

    __slots__ = ("_qo_path",)

    def __init__(self) -> None:
        object.__setattr__(self, "_qo_path", [])

    def __getattr__(self, name: str) -> "_AccessRecorder":
        if name.startswith("__"):
            raise AttributeError(name)
        self._qo_path.append(name)
        return self

    def __getitem__(self, name: Any) -> "_AccessRecorder":
        self._qo_path.append(name)
        return self


def select(selector: Any) -> SelectedField:
    """Reduce *selector* to a field name and whether it was static."""
    if selector is None:
        raise ValidationError(
            "A field selector is required",
            errors=[{"field": "selector", "reason": "is None"}],
        )
    if isinstance(selector, str):
        if not selector:
            raise ValidationError(
                "A field selector is required",
                errors=[{"field": "selector", "reason": "is empty"}],
            )
        return SelectedField(selector, static=False)

    key = getattr(selector, "key", None)
    if isinstance(key, str) and not isinstance(selector, type):
        owner = getattr(selector, "class_", None)
        return SelectedField(key, static=True, owner=owner if isinstance(owner, type) else None)

    if callable(selector):
        recorder = _AccessRecorder()
        try:
            selector(recorder)
        except Exception as exc:
            raise ConfigurationError(
                f"Selector {selector!r} must read exactly one field: {exc}", cause=exc
            ) from exc
        path = recorder._qo_path
        if len(path) != 1 or not isinstance(path[0], str):
            raise ConfigurationError(
                f"Selector {selector!r} must read exactly one field, read {path!r}",
                detail={"path": [str(p) for p in path]},
            )
        return SelectedField(path[0], static=True)

    raise ConfigurationError(f"Unsupported field selector {selector!r}")


def require_declared(metadata: ModelMetadata, selected: SelectedField) -> FieldMetadata | None:
    """Return the declared field for a static selector, ``None`` for free text.

    Raises
    ------
    ConfigurationError
        When a static selector names a field *metadata* does not declare,
        or an attribute of another mapped class.
    """
    if not selected.static:
        return None
    owner = selected.owner
    if owner is not None and not issubclass(metadata.model, owner):
        raise ConfigurationError(
            f"Selector {owner.__name__}.{selected.name} does not belong to {metadata.name}",
            detail={"model": metadata.name, "owner": owner.__name__, "field": selected.name},
        )
    field = metadata.field(selected.name)
    if field is None:
        raise ConfigurationError(
            f"{metadata.name} has no field '{selected.name}'",
            detail={"model": metadata.name, "field": selected.name},
        )
    return field


__all__ = ["SelectedField", "require_declared", "select"]
