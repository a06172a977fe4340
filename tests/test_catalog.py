"""Tests for the metadata catalog facade."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from odg_metamodel.catalog import MetadataCatalog, build_snapshot
from odg_metamodel.exceptions import InvalidFieldError, MissingKeyAspectError
from odg_metamodel.models import EntityDefinition, ReferenceType
from odg_metamodel.protocols import MetadataQuery
from odg_metamodel.settings import SchemaSourceSettings

from conftest import ASPECTS_DIR, ENTITY_REGISTRY, make_aspect, make_field

if TYPE_CHECKING:
    from odg_metamodel.models import AspectSchema


class TestBuildSnapshot:
    def test_fixture_sources(
        self, fixture_aspects: list[AspectSchema], fixture_entities: list[EntityDefinition]
    ) -> None:
        snapshot = build_snapshot(fixture_aspects, fixture_entities)
        assert len(snapshot.aspects) == 13
        assert len(snapshot.entities) == 2
        assert "com.linkedin.common.FabricType" in snapshot.named_types
        assert "com.linkedin.common.Owner" in snapshot.named_types

    def test_reference_before_definition_fails(self) -> None:
        referencing = make_aspect("b", make_field("stamp", ReferenceType(name="com.example.A")))
        with pytest.raises(InvalidFieldError):
            build_snapshot([referencing, make_aspect("a", make_field("x"))], [])


class TestMetadataCatalog:
    def test_satisfies_query_protocol(self, catalog: MetadataCatalog) -> None:
        assert isinstance(catalog, MetadataQuery)

    def test_from_settings(self) -> None:
        catalog = MetadataCatalog.from_settings(
            SchemaSourceSettings(aspects_dir=ASPECTS_DIR, entity_registry=ENTITY_REGISTRY)
        )
        assert catalog.get_entity("mlModel").key_aspect == "mlModelKey"

    def test_from_settings_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ODG_SCHEMA_ASPECTS_DIR", str(ASPECTS_DIR))
        monkeypatch.setenv("ODG_SCHEMA_ENTITY_REGISTRY", str(ENTITY_REGISTRY))
        catalog = MetadataCatalog.from_settings()
        assert len(catalog.list_aspects()) == 13

    def test_from_settings_missing_sources(self) -> None:
        with pytest.raises(FileNotFoundError):
            MetadataCatalog.from_settings(SchemaSourceSettings(aspects_dir="/nonexistent/aspects"))

    def test_readers_keep_their_snapshot(self, catalog: MetadataCatalog) -> None:
        before = catalog.snapshot
        catalog.register_aspect(make_aspect("experimentKey", make_field("id")))
        assert "experimentKey" not in before.aspects
        assert "experimentKey" in catalog.snapshot.aspects
        assert catalog.snapshot.version == before.version + 1


class TestReload:
    def test_reload_replaces_schema_set(self, catalog: MetadataCatalog) -> None:
        old_version = catalog.snapshot.version
        key = make_aspect("tagKey", make_field("name"))
        published = catalog.reload([key], [EntityDefinition(name="tag", key_aspect="tagKey")])
        assert published.version > old_version
        assert [a.name for a in catalog.list_aspects()] == ["tagKey"]
        assert catalog.compute_outgoing("tag") == ()

    def test_failed_reload_keeps_current(self, catalog: MetadataCatalog) -> None:
        before = catalog.snapshot
        with pytest.raises(MissingKeyAspectError):
            catalog.reload([], [EntityDefinition(name="tag", key_aspect="tagKey")])
        assert catalog.snapshot is before
        assert catalog.get_entity("mlModelGroup").name == "mlModelGroup"


class TestSnapshotValuesAreReadOnly:
    def test_list_default_cannot_leak_into_older_snapshot(self, empty_catalog: MetadataCatalog) -> None:
        empty_catalog.register_aspect(make_aspect("tagKey", make_field("names", default=[], has_default=True)))
        before = empty_catalog.snapshot
        fetched = empty_catalog.get_aspect("tagKey").fields[0].default
        with pytest.raises(AttributeError):
            fetched.append("leak")
        empty_catalog.register_aspect(make_aspect("status", make_field("removed")))
        assert before.aspects["tagKey"].fields[0].default == ()

    def test_mapping_default_is_read_only(self, empty_catalog: MetadataCatalog) -> None:
        source = {"actor": "urn:li:corpuser:unknown", "tags": ["a"]}
        empty_catalog.register_aspect(make_aspect("audit", make_field("created", default=source, has_default=True)))
        source["actor"] = "changed"
        default = empty_catalog.get_aspect("audit").fields[0].default
        with pytest.raises(TypeError):
            default["actor"] = "leak"
        with pytest.raises(TypeError):
            default.update(actor="leak")
        assert default == {"actor": "urn:li:corpuser:unknown", "tags": ("a",)}

    def test_searchable_weights_are_read_only(self, catalog: MetadataCatalog) -> None:
        spec = next(s for s in catalog.compute_searchable("mlModelGroup") if s.index_field_name == "deprecated")
        with pytest.raises(TypeError):
            spec.weights_per_field_value["true"] = 10.0
        annotation = catalog.get_aspect("deprecation").field("deprecated").searchable[0]  # type: ignore[union-attr]
        assert annotation.weights_per_field_value == {"true": 0.5}
