"""GraphQL types for aspects, entities and relationships."""

import strawberry
from strawberry.scalars import JSON


@strawberry.type
class AspectFieldGQL:
    """A top-level field of an aspect."""

    name: str
    type_label: str
    doc: str
    has_default: bool
    default: JSON | None = None
    searchable: bool = False
    relationship_names: list[str] = strawberry.field(default_factory=list)


@strawberry.type
class AspectGQL:
    """An aspect schema."""

    name: str
    record_name: str
    namespace: str
    version: int
    doc: str
    fields: list[AspectFieldGQL]

    @strawberry.field
    def full_name(self) -> str:
        """Avro full name of the aspect record."""
        return f"{self.namespace}.{self.record_name}" if self.namespace else self.record_name


@strawberry.type
class EntityGQL:
    """An entity type definition."""

    name: str
    key_aspect: str
    aspects: list[str]
    doc: str
    category: str


@strawberry.type
class RelationshipGQL:
    """A relationship edge between two entity types."""

    name: str
    source_entity: str
    target_entity_type: str
    source_field_path: str
    is_lineage: bool


@strawberry.type
class SearchableFieldGQL:
    """Search-indexing hints for one field."""

    aspect: str
    source_field_path: str
    index_field_name: str
    field_type: str
    query_by_default: bool
    enable_autocomplete: bool
    add_to_filters: bool
    filter_name: str | None
    boost_score: float
