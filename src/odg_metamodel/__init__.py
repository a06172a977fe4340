"""OpenDataGov metadata model.

A typed registry of aspect schemas and entity definitions, with the
relationships between entity types derived from annotated aspect fields:

- Aspect schema registry (register, look up, list aspects)
- Entity definition registry (key aspect plus carried aspects)
- Relationship index (outgoing and incoming edges per entity type)
- Searchable field index (search-indexing hints per entity type)
"""

from odg_metamodel.catalog import MetadataCatalog, build_snapshot
from odg_metamodel.exceptions import (
    DuplicateAspectError,
    DuplicateEntityError,
    InvalidFieldError,
    MetamodelError,
    MissingKeyAspectError,
    NotFoundError,
    SchemaParseError,
    UnknownAspectError,
)
from odg_metamodel.models import (
    AspectField,
    AspectSchema,
    EntityDefinition,
    RelationshipDeclaration,
    RelationshipEdge,
    SearchableFieldSpec,
)
from odg_metamodel.snapshot import SchemaSnapshot, SchemaStore

__all__ = [
    "AspectField",
    "AspectSchema",
    "DuplicateAspectError",
    "DuplicateEntityError",
    "EntityDefinition",
    "InvalidFieldError",
    "MetadataCatalog",
    "MetamodelError",
    "MissingKeyAspectError",
    "NotFoundError",
    "RelationshipDeclaration",
    "RelationshipEdge",
    "SchemaParseError",
    "SchemaSnapshot",
    "SchemaStore",
    "SearchableFieldSpec",
    "UnknownAspectError",
    "build_snapshot",
]
