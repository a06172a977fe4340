"""Protocol interface for metadata model queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from odg_metamodel.models import AspectSchema, EntityDefinition, RelationshipEdge


@runtime_checkable
class MetadataQuery(Protocol):
    """Read-only query surface consumed by documentation and API layers."""

    def get_entity(self, name: str) -> EntityDefinition:
        """Retrieve an entity definition by name."""
        ...

    def get_aspect(self, name: str) -> AspectSchema:
        """Retrieve an aspect schema by name."""
        ...

    def compute_outgoing(self, entity_name: str) -> tuple[RelationshipEdge, ...]:
        """Relationships declared by the entity's own aspects."""
        ...

    def compute_incoming(self, entity_name: str) -> tuple[RelationshipEdge, ...]:
        """Relationships declared by any entity that target this one."""
        ...
