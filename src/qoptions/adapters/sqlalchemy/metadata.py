"""SQLAlchemy adapter – derive field descriptors from a mapped class."""
from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from qoptions.kernel.errors import ConfigurationError
from qoptions.metadata import FieldMetadata, ModelMetadata, ModelRegistry, kind_for


def register_mapped(registry: ModelRegistry, model: type, *, entity: bool = True) -> ModelMetadata:
    """Register *model*'s columns and relationships with *registry*.

    Column flags are read from ``Column.info``::

        first_name: Mapped[str] = mapped_column(info={"searchable": True})
        ssn: Mapped[str] = mapped_column(info={"encrypted": True})

    Relationships become child-entity fields (``uselist`` marks collections).
    Referenced models must be registered too before a child search reaches
    into them.
    """
    try:
        mapper = inspect(model)
    except NoInspectionAvailable as exc:
        raise ConfigurationError(f"{model!r} is not a mapped class", cause=exc) from exc

    fields: list[FieldMetadata] = []
    for attr in mapper.column_attrs:
        column = attr.columns[0]
        info: dict[str, Any] = {**column.info, **attr.info}
        fields.append(
            FieldMetadata(
                name=attr.key,
                kind=kind_for(_python_type(column.type)),
                nullable=bool(column.nullable),
                searchable=bool(info.get("searchable", False)),
                encrypted=bool(info.get("encrypted", False)),
            )
        )
    for rel in mapper.relationships:
        fields.append(
            FieldMetadata(
                name=rel.key,
                nullable=True,
                child=rel.mapper.class_,
                many=bool(rel.uselist),
            )
        )
    return registry.register(model, fields, entity=entity)


def _python_type(column_type: Any) -> Any:
    try:
        return column_type.python_type
    except NotImplementedError:
        return None


__all__ = ["register_mapped"]
