"""Metadata catalog: the registries and indexes over one schema store.

Example:
    catalog = MetadataCatalog.from_settings()
    catalog.get_entity("mlModelGroup")
    catalog.compute_outgoing("mlModelGroup")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from odg_metamodel.aspects import AspectSchemaRegistry
from odg_metamodel.entities import EntityDefinitionRegistry
from odg_metamodel.loader import load_aspects_from_dir, load_entity_registry
from odg_metamodel.relationships import RelationshipIndex
from odg_metamodel.search import SearchableFieldIndex
from odg_metamodel.settings import SchemaSourceSettings
from odg_metamodel.snapshot import SchemaStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from odg_metamodel.models import (
        AspectSchema,
        EntityDefinition,
        RelationshipDeclaration,
        RelationshipEdge,
        SearchableFieldSpec,
    )
    from odg_metamodel.snapshot import SchemaSnapshot, SnapshotView

logger = logging.getLogger(__name__)


def build_snapshot(aspects: Iterable[AspectSchema], entities: Iterable[EntityDefinition]) -> SchemaSnapshot:
    """Register a complete schema set into a fresh store and return its snapshot.

    Aspects are registered in the given order, so a named type must be
    defined by an earlier aspect than the one referencing it.
    """
    staging = MetadataCatalog()
    for aspect in aspects:
        staging.register_aspect(aspect)
    for entity in entities:
        staging.entities.add_entity(entity)
    return staging.snapshot


class MetadataCatalog:
    """Aspect registry, entity registry, relationship and search indexes sharing one store.

    Implements :class:`~odg_metamodel.protocols.MetadataQuery`.
    """

    def __init__(self, store: SchemaStore | None = None):
        self.store = store or SchemaStore()
        self.aspects = AspectSchemaRegistry(self.store)
        self.entities = EntityDefinitionRegistry(self.store)
        self.relationships = RelationshipIndex(self.store)
        self.search = SearchableFieldIndex(self.store)

    @classmethod
    def from_sources(
        cls,
        aspects: Iterable[AspectSchema],
        entities: Iterable[EntityDefinition],
    ) -> MetadataCatalog:
        """Build a catalog from already-parsed schema sources."""
        return cls(SchemaStore(build_snapshot(aspects, entities)))

    @classmethod
    def from_settings(cls, settings: SchemaSourceSettings | None = None) -> MetadataCatalog:
        """Build a catalog from the schema files named in ``settings``."""
        settings = settings or SchemaSourceSettings()
        catalog = cls.from_sources(
            load_aspects_from_dir(settings.aspects_dir),
            load_entity_registry(settings.entity_registry),
        )
        logger.info("Metadata catalog ready: %r", catalog.snapshot)
        return catalog

    @property
    def snapshot(self) -> SchemaSnapshot:
        return self.store.current

    def reload(self, aspects: Iterable[AspectSchema], entities: Iterable[EntityDefinition]) -> SchemaSnapshot:
        """Replace the whole schema set.

        The new set is validated in isolation first; if that fails the
        current snapshot stays published and the error propagates.
        """
        staged = build_snapshot(aspects, entities)
        published = self.store.replace(staged)
        logger.info("Reloaded metadata catalog: %r", published)
        return published

    # ─── Aspects ────────────────────────────────────────

    def register_aspect(self, schema: AspectSchema) -> AspectSchema:
        return self.aspects.register_aspect(schema)

    def get_aspect(self, name: str) -> AspectSchema:
        return self.aspects.get_aspect(name)

    def list_aspects(self) -> SnapshotView[AspectSchema]:
        return self.aspects.list_aspects()

    # ─── Entities ───────────────────────────────────────

    def define_entity(
        self,
        name: str,
        key_aspect: str,
        aspects: Sequence[str] = (),
        *,
        doc: str = "",
        category: str = "core",
    ) -> EntityDefinition:
        return self.entities.define_entity(name, key_aspect, aspects, doc=doc, category=category)

    def get_entity(self, name: str) -> EntityDefinition:
        return self.entities.get_entity(name)

    def list_entities(self) -> SnapshotView[EntityDefinition]:
        return self.entities.list_entities()

    # ─── Relationships & search ─────────────────────────

    def compute_outgoing(self, entity_name: str) -> tuple[RelationshipEdge, ...]:
        return self.relationships.compute_outgoing(entity_name)

    def compute_incoming(self, entity_name: str) -> tuple[RelationshipEdge, ...]:
        return self.relationships.compute_incoming(entity_name)

    def declared_relationships(self, entity_name: str) -> list[RelationshipDeclaration]:
        return self.relationships.declared_relationships(entity_name)

    def compute_searchable(self, entity_name: str) -> list[SearchableFieldSpec]:
        return self.search.compute_searchable(entity_name)
