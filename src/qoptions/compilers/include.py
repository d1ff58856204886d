"""IncludeResolver – requested child names to canonical child-entity fields."""
from __future__ import annotations

from qoptions.metadata import MetadataResolver
from qoptions.observability.logging import get_logger
from qoptions.query.specs import IncludeSpec

_log = get_logger(__name__)


class IncludeResolver:
    def __init__(self, resolver: MetadataResolver) -> None:
        self._resolver = resolver

    def resolve(self, model: type, include: IncludeSpec) -> tuple[str, ...]:
        """Canonical child-entity names to materialise, in declaration order.

        The caller's spec is not modified; folding produces a new value.
        """
        requested = frozenset(include.folded().names)
        children = self._resolver.child_entity_fields(model)
        resolved = tuple(f.name for f in children if f.name.lower() in requested)
        unknown = requested - {name.lower() for name in resolved}
        if unknown:
            _log.debug("include.ignored", model=model.__name__, names=sorted(unknown))
        return resolved


__all__ = ["IncludeResolver"]
