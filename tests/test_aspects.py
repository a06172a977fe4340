"""Tests for the aspect schema registry."""

from __future__ import annotations

import logging

import pytest

from odg_metamodel.aspects import AspectSchemaRegistry, validate_aspect
from odg_metamodel.exceptions import DuplicateAspectError, InvalidFieldError, NotFoundError
from odg_metamodel.models import ArrayType, EnumType, RecordType, ReferenceType
from odg_metamodel.snapshot import SchemaStore

from conftest import make_aspect, make_field

AUDIT_STAMP = RecordType(
    name="AuditStamp",
    namespace="com.example",
    fields=(make_field("actor"), make_field("time")),
)


@pytest.fixture
def registry() -> AspectSchemaRegistry:
    return AspectSchemaRegistry(SchemaStore())


class TestRegisterAspect:
    def test_register_and_get(self, registry: AspectSchemaRegistry) -> None:
        owner = RecordType(
            name="Owner",
            namespace="com.example",
            fields=(make_field("owner", relationship="OwnedBy", targets=("corpuser", "corpGroup")),),
        )
        ownership = make_aspect("ownership", make_field("owners", ArrayType(items=owner)))
        registry.register_aspect(ownership)
        fetched = registry.get_aspect("ownership")
        assert fetched == ownership
        assert fetched.model_dump() == ownership.model_dump()

    def test_duplicate_name(self, registry: AspectSchemaRegistry) -> None:
        registry.register_aspect(make_aspect("status", make_field("removed")))
        with pytest.raises(DuplicateAspectError, match="status"):
            registry.register_aspect(make_aspect("status", make_field("other")))
        assert registry.get_aspect("status").fields[0].name == "removed"

    def test_duplicate_field_name(self, registry: AspectSchemaRegistry) -> None:
        with pytest.raises(InvalidFieldError) as exc_info:
            registry.register_aspect(make_aspect("status", make_field("removed"), make_field("removed")))
        assert exc_info.value.aspect == "status"
        assert exc_info.value.field_path == "removed"
        assert not registry.has_aspect("status")

    def test_duplicate_field_name_in_nested_record(self, registry: AspectSchemaRegistry) -> None:
        nested = RecordType(name="Owner", namespace="com.example", fields=(make_field("owner"), make_field("owner")))
        with pytest.raises(InvalidFieldError) as exc_info:
            registry.register_aspect(make_aspect("ownership", make_field("owners", ArrayType(items=nested))))
        assert exc_info.value.field_path == "owners.owner"

    def test_relationship_without_targets(self, registry: AspectSchemaRegistry) -> None:
        with pytest.raises(InvalidFieldError, match="no target entity types"):
            registry.register_aspect(make_aspect("domains", make_field("domains", relationship="AssociatedWith")))

    def test_unresolved_reference(self, registry: AspectSchemaRegistry) -> None:
        aspect = make_aspect("ownership", make_field("lastModified", ReferenceType(name="com.example.AuditStamp")))
        with pytest.raises(InvalidFieldError, match="unresolved type reference com.example.AuditStamp"):
            registry.register_aspect(aspect)

    def test_reference_to_type_defined_by_earlier_aspect(self, registry: AspectSchemaRegistry) -> None:
        registry.register_aspect(make_aspect("ownership", make_field("lastModified", AUDIT_STAMP)))
        registry.register_aspect(
            make_aspect("deprecation", make_field("lastModified", ReferenceType(name="com.example.AuditStamp")))
        )
        assert registry.has_aspect("deprecation")

    def test_reference_to_aspect_record(self, registry: AspectSchemaRegistry) -> None:
        registry.register_aspect(make_aspect("status", make_field("removed")))
        registry.register_aspect(make_aspect("history", make_field("previous", ReferenceType(name="com.example.Status"))))
        assert registry.has_aspect("history")

    def test_reference_within_same_aspect(self, registry: AspectSchemaRegistry) -> None:
        aspect = make_aspect(
            "ownership",
            make_field("created", AUDIT_STAMP),
            make_field("lastModified", ReferenceType(name="com.example.AuditStamp")),
        )
        registry.register_aspect(aspect)
        assert registry.has_aspect("ownership")

    def test_conflicting_named_types_in_one_aspect(self, registry: AspectSchemaRegistry) -> None:
        aspect = make_aspect(
            "origin",
            make_field("fabric", EnumType(name="FabricType", namespace="com.example", symbols=("DEV",))),
            make_field("backup", EnumType(name="FabricType", namespace="com.example", symbols=("PROD",))),
        )
        with pytest.raises(InvalidFieldError, match="conflicting definitions"):
            registry.register_aspect(aspect)

    def test_cross_aspect_redefinition_keeps_first(self, caplog: pytest.LogCaptureFixture) -> None:
        first = EnumType(name="FabricType", namespace="com.example", symbols=("DEV",))
        second = EnumType(name="FabricType", namespace="com.example", symbols=("DEV", "PROD"))
        store = SchemaStore()
        registry = AspectSchemaRegistry(store)
        registry.register_aspect(make_aspect("a", make_field("origin", first)))
        with caplog.at_level(logging.WARNING, logger="odg_metamodel.aspects"):
            registry.register_aspect(make_aspect("b", make_field("origin", second)))
        assert "redefines com.example.FabricType" in caplog.text
        assert store.current.named_types["com.example.FabricType"] == first


class TestGetAspect:
    def test_not_found(self, registry: AspectSchemaRegistry) -> None:
        with pytest.raises(NotFoundError, match="Aspect not found: ownership") as exc_info:
            registry.get_aspect("ownership")
        assert exc_info.value.kind == "Aspect"

    def test_names_are_case_sensitive(self, registry: AspectSchemaRegistry) -> None:
        registry.register_aspect(make_aspect("status", make_field("removed")))
        with pytest.raises(NotFoundError):
            registry.get_aspect("Status")


class TestListAspects:
    def test_empty(self, registry: AspectSchemaRegistry) -> None:
        assert list(registry.list_aspects()) == []
        assert len(registry.list_aspects()) == 0

    def test_registration_order_and_restartable(self, registry: AspectSchemaRegistry) -> None:
        for name in ("status", "ownership", "domains"):
            registry.register_aspect(make_aspect(name, make_field("value")))
        view = registry.list_aspects()
        assert [a.name for a in view] == ["status", "ownership", "domains"]
        assert [a.name for a in view] == ["status", "ownership", "domains"]
        assert len(view) == 3

    def test_view_is_stable_across_registrations(self, registry: AspectSchemaRegistry) -> None:
        registry.register_aspect(make_aspect("status", make_field("removed")))
        view = registry.list_aspects()
        registry.register_aspect(make_aspect("ownership", make_field("owners")))
        assert [a.name for a in view] == ["status"]
        assert len(registry.list_aspects()) == 2


class TestValidateAspect:
    def test_returns_inline_named_types(self) -> None:
        aspect = make_aspect(
            "ownership",
            make_field("lastModified", AUDIT_STAMP),
            make_field("source", EnumType(name="SourceType", namespace="com.example", symbols=("AUDIT",))),
        )
        defined = validate_aspect(aspect, {})
        assert {n.full_name for n in defined} == {
            "com.example.Ownership",
            "com.example.AuditStamp",
            "com.example.SourceType",
        }
