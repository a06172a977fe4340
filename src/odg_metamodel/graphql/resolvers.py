"""Resolvers mapping catalog queries onto GraphQL types.

Unknown names resolve to ``None`` rather than a GraphQL error so a
client can render a "not found" page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from odg_metamodel.exceptions import NotFoundError
from odg_metamodel.graphql.types import (
    AspectFieldGQL,
    AspectGQL,
    EntityGQL,
    RelationshipGQL,
    SearchableFieldGQL,
)
from odg_metamodel.models import type_label

if TYPE_CHECKING:
    from odg_metamodel.catalog import MetadataCatalog
    from odg_metamodel.models import AspectSchema, EntityDefinition, RelationshipEdge

logger = logging.getLogger(__name__)


def aspect_to_gql(aspect: AspectSchema) -> AspectGQL:
    return AspectGQL(
        name=aspect.name,
        record_name=aspect.record_name,
        namespace=aspect.namespace,
        version=aspect.version,
        doc=aspect.doc,
        fields=[
            AspectFieldGQL(
                name=f.name,
                type_label=type_label(f.type),
                doc=f.doc,
                has_default=f.has_default,
                default=f.default,
                searchable=bool(f.searchable),
                relationship_names=[r.name for r in f.relationships],
            )
            for f in aspect.fields
        ],
    )


def entity_to_gql(entity: EntityDefinition) -> EntityGQL:
    return EntityGQL(
        name=entity.name,
        key_aspect=entity.key_aspect,
        aspects=list(entity.all_aspects),
        doc=entity.doc,
        category=entity.category,
    )


def edge_to_gql(edge: RelationshipEdge) -> RelationshipGQL:
    return RelationshipGQL(
        name=edge.name,
        source_entity=edge.source_entity,
        target_entity_type=edge.target_entity_type,
        source_field_path=edge.source_field_path,
        is_lineage=edge.is_lineage,
    )


def resolve_aspect(catalog: MetadataCatalog, name: str) -> AspectGQL | None:
    try:
        return aspect_to_gql(catalog.get_aspect(name))
    except NotFoundError:
        logger.debug("Aspect not found: %s", name)
        return None


def resolve_aspects(catalog: MetadataCatalog) -> list[AspectGQL]:
    return [aspect_to_gql(a) for a in catalog.list_aspects()]


def resolve_entity(catalog: MetadataCatalog, name: str) -> EntityGQL | None:
    try:
        return entity_to_gql(catalog.get_entity(name))
    except NotFoundError:
        logger.debug("Entity not found: %s", name)
        return None


def resolve_entities(catalog: MetadataCatalog, category: str | None = None) -> list[EntityGQL]:
    return [entity_to_gql(e) for e in catalog.list_entities() if category is None or e.category == category]


def resolve_outgoing(catalog: MetadataCatalog, entity: str) -> list[RelationshipGQL] | None:
    try:
        return [edge_to_gql(e) for e in catalog.compute_outgoing(entity)]
    except NotFoundError:
        return None


def resolve_incoming(catalog: MetadataCatalog, entity: str) -> list[RelationshipGQL] | None:
    try:
        return [edge_to_gql(e) for e in catalog.compute_incoming(entity)]
    except NotFoundError:
        return None


def resolve_searchable_fields(catalog: MetadataCatalog, entity: str) -> list[SearchableFieldGQL] | None:
    try:
        specs = catalog.compute_searchable(entity)
    except NotFoundError:
        return None
    return [
        SearchableFieldGQL(
            aspect=s.aspect,
            source_field_path=s.source_field_path,
            index_field_name=s.index_field_name,
            field_type=s.field_type.value,
            query_by_default=s.query_by_default,
            enable_autocomplete=s.enable_autocomplete,
            add_to_filters=s.add_to_filters,
            filter_name=s.filter_name,
            boost_score=s.boost_score,
        )
        for s in specs
    ]
