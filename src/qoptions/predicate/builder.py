"""PredicateBuilder – neutral elements and boolean folds over predicate nodes."""

from __future__ import annotations

from collections.abc import Iterable

from qoptions.predicate.nodes import (
    MATCH_ALL,
    MATCH_NONE,
    Predicate,
    conjoin,
    disjoin,
    negate,
)


class PredicateBuilder:
    """Static helpers for combining predicate fragments.

    Folding is associative: ``any_of([a, b, c])`` equals
    ``or_(or_(a, b), c)`` and ``or_(a, or_(b, c))`` node for node, because
    nested nodes of the same kind are flattened.
    """

    MATCH_ALL = MATCH_ALL
    MATCH_NONE = MATCH_NONE

    @staticmethod
    def and_(left: Predicate, right: Predicate) -> Predicate:
        return conjoin(left, right)

    @staticmethod
    def or_(left: Predicate, right: Predicate) -> Predicate:
        return disjoin(left, right)

    @staticmethod
    def not_(operand: Predicate) -> Predicate:
        return negate(operand)

    @staticmethod
    def all_of(predicates: Iterable[Predicate]) -> Predicate:
        """AND-fold starting from ``MATCH_ALL`` (empty input matches everything)."""
        result: Predicate = MATCH_ALL
        for p in predicates:
            result = conjoin(result, p)
        return result

    @staticmethod
    def any_of(predicates: Iterable[Predicate]) -> Predicate:
        """OR-fold starting from ``MATCH_NONE`` (empty input matches nothing)."""
        result: Predicate = MATCH_NONE
        for p in predicates:
            result = disjoin(result, p)
        return result


__all__ = ["PredicateBuilder"]
