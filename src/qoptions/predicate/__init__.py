"""Predicate – composable predicate nodes, builder and expression factory."""
from qoptions.predicate.builder import PredicateBuilder
from qoptions.predicate.expressions import ExpressionFactory, coerce
from qoptions.predicate.nodes import (
    MATCH_ALL,
    MATCH_NONE,
    And,
    Compare,
    Constant,
    Not,
    Operator,
    Or,
    Predicate,
    conjoin,
    disjoin,
    iter_compares,
    negate,
    read_field,
)

__all__ = [
    "MATCH_ALL",
    "MATCH_NONE",
    "And",
    "Compare",
    "Constant",
    "ExpressionFactory",
    "Not",
    "Operator",
    "Or",
    "Predicate",
    "PredicateBuilder",
    "coerce",
    "conjoin",
    "disjoin",
    "iter_compares",
    "negate",
    "read_field",
]
