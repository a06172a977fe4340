"""Root GraphQL schema for metadata model queries.

The execution context must carry the catalog under ``"catalog"``.
"""

import strawberry
from strawberry.types import Info

from odg_metamodel.catalog import MetadataCatalog
from odg_metamodel.graphql import resolvers
from odg_metamodel.graphql.types import AspectGQL, EntityGQL, RelationshipGQL, SearchableFieldGQL


def _catalog(info: Info) -> MetadataCatalog:
    return info.context["catalog"]


@strawberry.type
class Query:
    """Root query type for the metadata model."""

    @strawberry.field
    def aspect(self, info: Info, name: str) -> AspectGQL | None:
        """Get an aspect schema by name."""
        return resolvers.resolve_aspect(_catalog(info), name)

    @strawberry.field
    def aspects(self, info: Info) -> list[AspectGQL]:
        """List aspect schemas in registration order."""
        return resolvers.resolve_aspects(_catalog(info))

    @strawberry.field
    def entity(self, info: Info, name: str) -> EntityGQL | None:
        """Get an entity definition by name (case-insensitive)."""
        return resolvers.resolve_entity(_catalog(info), name)

    @strawberry.field
    def entities(self, info: Info, category: str | None = None) -> list[EntityGQL]:
        """List entity definitions, optionally filtered by category."""
        return resolvers.resolve_entities(_catalog(info), category)

    @strawberry.field
    def outgoing_relationships(self, info: Info, entity: str) -> list[RelationshipGQL] | None:
        """Relationships stored in the entity's aspects.

        Example:
            query {
              outgoingRelationships(entity: "mlModelGroup") {
                name
                targetEntityType
                sourceFieldPath
              }
            }
        """
        return resolvers.resolve_outgoing(_catalog(info), entity)

    @strawberry.field
    def incoming_relationships(self, info: Info, entity: str) -> list[RelationshipGQL] | None:
        """Relationships stored in other entities' aspects that target this entity."""
        return resolvers.resolve_incoming(_catalog(info), entity)

    @strawberry.field
    def searchable_fields(self, info: Info, entity: str) -> list[SearchableFieldGQL] | None:
        """Search-indexing hints declared on the entity's aspect fields."""
        return resolvers.resolve_searchable_fields(_catalog(info), entity)


schema = strawberry.Schema(query=Query)
