"""Shared fixtures: the ML model group schema set and small schema builders."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from odg_metamodel.catalog import MetadataCatalog
from odg_metamodel.enums import PrimitiveKind
from odg_metamodel.loader import load_aspects_from_dir, load_entity_registry
from odg_metamodel.models import (
    AspectField,
    AspectSchema,
    EntityDefinition,
    FieldType,
    PrimitiveType,
    RelationshipAnnotation,
)

FIXTURES = Path(__file__).parent / "fixtures"
ASPECTS_DIR = FIXTURES / "aspects"
ENTITY_REGISTRY = FIXTURES / "entity-registry.yaml"

STRING = PrimitiveType(primitive=PrimitiveKind.STRING)


def make_field(
    name: str,
    field_type: FieldType = STRING,
    *,
    relationship: str | None = None,
    targets: tuple[str, ...] = (),
    path: str = "",
    **kwargs: Any,
) -> AspectField:
    relationships = ()
    if relationship is not None:
        relationships = (RelationshipAnnotation(name=relationship, entity_types=targets, path=path),)
    return AspectField(name=name, type=field_type, relationships=relationships, **kwargs)


def make_aspect(name: str, *fields: AspectField, namespace: str = "com.example") -> AspectSchema:
    return AspectSchema(
        name=name,
        record_name=name[0].upper() + name[1:],
        namespace=namespace,
        fields=fields,
        doc=f"{name} aspect",
    )


@pytest.fixture(scope="session")
def fixture_aspects() -> list[AspectSchema]:
    return load_aspects_from_dir(ASPECTS_DIR)


@pytest.fixture(scope="session")
def fixture_entities() -> list[EntityDefinition]:
    return load_entity_registry(ENTITY_REGISTRY)


@pytest.fixture
def catalog(fixture_aspects: list[AspectSchema], fixture_entities: list[EntityDefinition]) -> MetadataCatalog:
    return MetadataCatalog.from_sources(fixture_aspects, fixture_entities)


@pytest.fixture
def empty_catalog() -> MetadataCatalog:
    return MetadataCatalog()
