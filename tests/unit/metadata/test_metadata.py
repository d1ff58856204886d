"""Unit tests for field descriptors, ModelRegistry and MetadataResolver."""

from __future__ import annotations

import dataclasses
import datetime

import pytest

from sample_models import Address, Customer, Order, Tag
from qoptions.kernel.errors import ConfigurationError
from qoptions.metadata import (
    FieldMetadata,
    MetadataProvider,
    MetadataResolver,
    ModelRegistry,
    ValueKind,
    kind_for,
)


# ---------------------------------------------------------------------------
# FieldMetadata / ModelMetadata
# ---------------------------------------------------------------------------


class TestFieldMetadata:
    def test_comparable(self) -> None:
        assert FieldMetadata("age", ValueKind.INTEGER).is_comparable
        assert not FieldMetadata("address", child=Address).is_comparable

    def test_searchable_requires_string_kind(self) -> None:
        assert FieldMetadata("name", ValueKind.STRING, searchable=True).is_searchable
        assert not FieldMetadata("age", ValueKind.INTEGER, searchable=True).is_searchable

    def test_encrypted_is_never_searchable(self) -> None:
        f = FieldMetadata("ssn", ValueKind.STRING, searchable=True, encrypted=True)
        assert not f.is_searchable

    def test_child_entity(self) -> None:
        assert FieldMetadata("address", child=Address).is_child_entity

    def test_comparable_child_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            FieldMetadata("address", ValueKind.STRING, child=Address)

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            FieldMetadata("")


class TestModelMetadata:
    def test_match_is_case_insensitive(self, registry: ModelRegistry) -> None:
        meta = registry.get(Customer)
        assert meta.match("FIRST_NAME") is meta.field("first_name")
        assert meta.match("missing") is None

    def test_exact_lookup_is_case_sensitive(self, registry: ModelRegistry) -> None:
        assert registry.get(Customer).field("First_Name") is None

    def test_duplicate_field_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ModelRegistry().register(Order, [FieldMetadata("a"), FieldMetadata("a")])

    def test_encrypted_names(self, registry: ModelRegistry) -> None:
        assert registry.get(Customer).encrypted_names == frozenset({"ssn"})


# ---------------------------------------------------------------------------
# ModelRegistry
# ---------------------------------------------------------------------------


class TestKindFor:
    @pytest.mark.parametrize(
        ("tp", "kind"),
        [
            (str, ValueKind.STRING),
            (int, ValueKind.INTEGER),
            (float, ValueKind.FLOATING),
            (bool, ValueKind.BOOLEAN),
            (datetime.datetime, ValueKind.DATETIME),
        ],
    )
    def test_primitive_kinds(self, tp: type, kind: ValueKind) -> None:
        assert kind_for(tp) is kind

    def test_non_comparable(self) -> None:
        assert kind_for(dict) is None
        assert kind_for(datetime.date) is None
        assert kind_for("str") is None


class TestRegisterDataclass:
    def test_kinds_and_nullability(self, registry: ModelRegistry) -> None:
        meta = registry.get(Customer)
        assert meta.field("age").kind is ValueKind.INTEGER
        assert meta.field("score").kind is ValueKind.FLOATING
        assert meta.field("score").nullable
        assert meta.field("vip").kind is ValueKind.BOOLEAN
        assert meta.field("joined").kind is ValueKind.DATETIME
        assert not meta.field("first_name").nullable

    def test_child_entities(self, registry: ModelRegistry) -> None:
        meta = registry.get(Customer)
        address = meta.field("address")
        orders = meta.field("orders")
        assert address.child is Address and not address.many
        assert orders.child is Order and orders.many

    def test_flags(self, registry: ModelRegistry) -> None:
        meta = registry.get(Customer)
        assert meta.field("first_name").searchable
        assert meta.field("ssn").encrypted
        assert not meta.field("status").searchable

    def test_unknown_flagged_field(self) -> None:
        with pytest.raises(ConfigurationError):
            ModelRegistry().register_dataclass(Order, searchable=("nope",))

    def test_not_a_dataclass(self) -> None:
        class Plain:
            pass

        with pytest.raises(ConfigurationError):
            ModelRegistry().register_dataclass(Plain)

    def test_re_register_replaces(self) -> None:
        registry = ModelRegistry()
        registry.register_dataclass(Order)
        registry.register_dataclass(Order, searchable=("reference",))
        assert registry.get(Order).field("reference").searchable

    def test_unregistered_model(self) -> None:
        with pytest.raises(ConfigurationError):
            ModelRegistry().get(Order)

    def test_unregister(self, registry: ModelRegistry) -> None:
        registry.unregister(Order)
        assert Order not in registry

    def test_is_metadata_provider(self, registry: ModelRegistry) -> None:
        assert isinstance(registry, MetadataProvider)

    def test_explicit_register(self) -> None:
        @dataclasses.dataclass
        class Row:
            code: str

        registry = ModelRegistry()
        meta = registry.register(Row, [FieldMetadata("code", ValueKind.STRING, searchable=True)])
        assert registry.get(Row) is meta
        assert meta.entity


# ---------------------------------------------------------------------------
# MetadataResolver
# ---------------------------------------------------------------------------


class TestMetadataResolver:
    def test_comparable_fields(self, registry: ModelRegistry) -> None:
        names = {f.name for f in MetadataResolver(registry).comparable_fields(Customer)}
        assert {"id", "first_name", "status", "age", "joined", "nickname"} <= names
        assert "address" not in names
        assert "orders" not in names

    def test_searchable_fields_excludes_encrypted(self, registry: ModelRegistry) -> None:
        names = [f.name for f in MetadataResolver(registry).searchable_fields(Customer)]
        assert names == ["first_name", "last_name"]

    def test_child_entity_fields(self, registry: ModelRegistry) -> None:
        names = [f.name for f in MetadataResolver(registry).child_entity_fields(Customer)]
        assert names == ["address", "orders"]

    def test_child_entity_fields_of_non_entity_is_empty(self, registry: ModelRegistry) -> None:
        assert MetadataResolver(registry).child_entity_fields(Tag) == ()

    def test_resolve_comparable_ignores_children(self, registry: ModelRegistry) -> None:
        resolver = MetadataResolver(registry)
        assert resolver.resolve_comparable(Customer, "Status").name == "status"
        assert resolver.resolve_comparable(Customer, "address") is None

    def test_resolve_child(self, registry: ModelRegistry) -> None:
        resolver = MetadataResolver(registry)
        assert resolver.resolve_child(Customer, "ADDRESS").name == "address"
        assert resolver.resolve_child(Customer, "status") is None
