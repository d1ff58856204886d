"""Unit tests for the search, filter, sort, include and pagination compilers."""

from __future__ import annotations

import pytest

from sample_models import Address, Customer, Order, Tag
from qoptions.compilers import (
    FilterCompiler,
    IncludeResolver,
    OrderKey,
    SearchCompiler,
    SortResolver,
    Window,
    window_for,
)
from qoptions.kernel.errors import ConfigurationError, ParseError
from qoptions.metadata import MetadataResolver, ModelRegistry, ValueKind
from qoptions.predicate import MATCH_ALL, MATCH_NONE, Compare, ExpressionFactory, Operator, iter_compares
from qoptions.query import FilterEntry, FilterSpec, IncludeSpec, PaginationSpec, SearchSpec, SortSpec


@pytest.fixture
def resolver(registry: ModelRegistry) -> MetadataResolver:
    return MetadataResolver(registry)


@pytest.fixture
def expressions() -> ExpressionFactory:
    return ExpressionFactory(case_insensitive=True)


def _filters(*pairs: tuple[str, str | None]) -> FilterSpec:
    return FilterSpec(tuple(FilterEntry(name, raw) for name, raw in pairs))


# ---------------------------------------------------------------------------
# SearchCompiler
# ---------------------------------------------------------------------------


class TestSearchCompiler:
    def test_own_fields_only(self, resolver, expressions) -> None:
        plan = SearchCompiler(resolver, expressions).compile(Customer, SearchSpec("smith"))
        assert [c.path for c in iter_compares(plan.predicate)] == [("first_name",), ("last_name",)]
        assert plan.includes == ()

    def test_encrypted_field_not_searched(self, resolver, expressions) -> None:
        plan = SearchCompiler(resolver, expressions).compile(Customer, SearchSpec("123"))
        assert "ssn" not in {c.field for c in iter_compares(plan.predicate)}

    def test_include_children_one_level(self, resolver, expressions) -> None:
        plan = SearchCompiler(resolver, expressions).compile(Customer, SearchSpec("smith", True))
        paths = [c.path for c in iter_compares(plan.predicate)]
        assert paths == [
            ("first_name",),
            ("last_name",),
            ("address", "city"),
            ("orders", "reference"),
        ]
        assert plan.includes == ("address", "orders")

    def test_to_many_child_marked(self, resolver, expressions) -> None:
        plan = SearchCompiler(resolver, expressions).compile(Customer, SearchSpec("x", True))
        orders = [c for c in iter_compares(plan.predicate) if c.via == "orders"]
        assert orders and all(c.via_many for c in orders)

    def test_non_entity_skips_children(self, resolver, expressions) -> None:
        plan = SearchCompiler(resolver, expressions).compile(Tag, SearchSpec("x", True))
        assert plan.predicate == Compare("label", Operator.CONTAINS, "x", ignore_case=True)
        assert plan.includes == ()

    def test_no_searchable_fields_matches_nothing(self, resolver, expressions) -> None:
        registry = ModelRegistry()
        registry.register_dataclass(Order)
        plan = SearchCompiler(MetadataResolver(registry), expressions).compile(Order, SearchSpec("x"))
        assert plan.predicate == MATCH_NONE

    def test_unregistered_child(self, expressions) -> None:
        registry = ModelRegistry()
        registry.register_dataclass(Customer, searchable=("last_name",))
        with pytest.raises(ConfigurationError):
            SearchCompiler(MetadataResolver(registry), expressions).compile(Customer, SearchSpec("x", True))

    def test_case_sensitive_policy(self, resolver) -> None:
        plan = SearchCompiler(resolver, ExpressionFactory(case_insensitive=False)).compile(
            Customer, SearchSpec("x")
        )
        assert not any(c.ignore_case for c in iter_compares(plan.predicate))


# ---------------------------------------------------------------------------
# FilterCompiler
# ---------------------------------------------------------------------------


class TestFilterCompiler:
    def test_or_within_and_across(self, resolver, expressions) -> None:
        predicate = FilterCompiler(resolver, expressions).compile(
            Customer, _filters(("status", "Active"), ("region", "East"), ("status", "Pending"))
        )
        assert predicate.is_satisfied_by(Customer(1, "a", "b", status="Pending", region="East"))
        assert not predicate.is_satisfied_by(Customer(1, "a", "b", status="Pending", region="West"))
        assert not predicate.is_satisfied_by(Customer(1, "a", "b", status="Closed", region="East"))

    def test_group_by_resolved_name(self, resolver, expressions) -> None:
        predicate = FilterCompiler(resolver, expressions).compile(
            Customer, _filters(("Status", "Active"), ("status", "Pending"))
        )
        assert predicate.is_satisfied_by(Customer(1, "a", "b", status="Pending"))

    def test_unknown_names_dropped(self, resolver, expressions) -> None:
        predicate = FilterCompiler(resolver, expressions).compile(Customer, _filters(("shoe_size", "9")))
        assert predicate == MATCH_ALL

    def test_child_names_dropped(self, resolver, expressions) -> None:
        predicate = FilterCompiler(resolver, expressions).compile(Customer, _filters(("address", "x")))
        assert predicate == MATCH_ALL

    def test_value_coerced(self, resolver, expressions) -> None:
        predicate = FilterCompiler(resolver, expressions).compile(Customer, _filters(("age", "10")))
        assert predicate == Compare("age", Operator.EQUALS, 10)

    def test_bad_value_raises(self, resolver, expressions) -> None:
        with pytest.raises(ParseError) as info:
            FilterCompiler(resolver, expressions).compile(Customer, _filters(("age", "ten")))
        assert info.value.field == "age"

    def test_equality_is_exact(self, resolver, expressions) -> None:
        predicate = FilterCompiler(resolver, expressions).compile(Customer, _filters(("status", "active")))
        assert not predicate.is_satisfied_by(Customer(1, "a", "b", status="Active"))


# ---------------------------------------------------------------------------
# SortResolver
# ---------------------------------------------------------------------------


class TestSortResolver:
    def test_resolves_case_insensitively(self, resolver) -> None:
        key = SortResolver(resolver).resolve(Customer, SortSpec("LAST_NAME", False))
        assert key == OrderKey("last_name", False, ValueKind.STRING)

    def test_unknown_field(self, resolver) -> None:
        assert SortResolver(resolver).resolve(Customer, SortSpec("shoe_size")) is None

    def test_child_field_is_not_sortable(self, resolver) -> None:
        assert SortResolver(resolver).resolve(Customer, SortSpec("address")) is None

    def test_none_orders_first(self) -> None:
        key = OrderKey("score", True, ValueKind.FLOATING)
        items = [{"score": 2.0}, {"score": None}, {"score": 1.0}]
        assert [i["score"] for i in sorted(items, key=key.extract)] == [None, 1.0, 2.0]


# ---------------------------------------------------------------------------
# IncludeResolver
# ---------------------------------------------------------------------------


class TestIncludeResolver:
    def test_canonical_names_in_declaration_order(self, resolver) -> None:
        include = IncludeSpec(("ORDERS", "Address"))
        assert IncludeResolver(resolver).resolve(Customer, include) == ("address", "orders")

    def test_request_is_not_modified(self, resolver) -> None:
        include = IncludeSpec(("ORDERS",))
        IncludeResolver(resolver).resolve(Customer, include)
        assert include.names == ("ORDERS",)

    def test_unknown_names_ignored(self, resolver) -> None:
        assert IncludeResolver(resolver).resolve(Customer, IncludeSpec(("friends",))) == ()

    def test_non_entity(self, resolver) -> None:
        assert IncludeResolver(resolver).resolve(Tag, IncludeSpec(("owner",))) == ()

    def test_comparable_names_ignored(self, resolver) -> None:
        assert IncludeResolver(resolver).resolve(Address, IncludeSpec(("city",))) == ()


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


class TestWindow:
    def test_first_page(self) -> None:
        assert window_for(PaginationSpec()) == Window(0, 10)

    def test_later_page(self) -> None:
        assert window_for(PaginationSpec(10, 3)) == Window(20, 10)

    def test_slice_short_last_page(self) -> None:
        assert Window(20, 10).slice(list(range(25))) == [20, 21, 22, 23, 24]

    def test_slice_past_end(self) -> None:
        assert Window(30, 10).slice(list(range(25))) == []
