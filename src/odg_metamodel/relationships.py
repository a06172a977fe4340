"""Relationship index: outgoing and incoming edges between entity types.

Outgoing relationships come from ``Relationship`` annotations on the
fields of an entity's own aspects. Incoming relationships of an entity
type are the outgoing edges of every registered entity that target it.
Both views are built together for a snapshot and cached until the store
publishes a new one.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from odg_metamodel.exceptions import NotFoundError
from odg_metamodel.models import RelationshipDeclaration, RelationshipEdge
from odg_metamodel.snapshot import entity_key
from odg_metamodel.traversal import annotation_path, iter_fields

if TYPE_CHECKING:
    from odg_metamodel.models import EntityDefinition
    from odg_metamodel.snapshot import SchemaSnapshot, SchemaStore

logger = logging.getLogger(__name__)


def declared_relationships(entity: EntityDefinition, snapshot: SchemaSnapshot) -> list[RelationshipDeclaration]:
    """Relationship annotations on the aspects of ``entity``.

    Order follows the entity's aspect order (key aspect first), then field
    declaration order, depth first, then annotation order on a field.
    """
    declarations: list[RelationshipDeclaration] = []
    for aspect_name in entity.all_aspects:
        aspect = snapshot.aspects[aspect_name]
        for path, f in iter_fields(aspect, snapshot.named_types):
            for rel in f.relationships:
                declarations.append(
                    RelationshipDeclaration(
                        aspect=aspect.name,
                        source_field_path=annotation_path(path, rel.path),
                        name=rel.name,
                        entity_types=rel.entity_types,
                        is_lineage=rel.is_lineage,
                    )
                )
    return declarations


def outgoing_edges(entity: EntityDefinition, snapshot: SchemaSnapshot) -> tuple[RelationshipEdge, ...]:
    """One edge per declaration and target entity type, in declaration order."""
    return tuple(
        RelationshipEdge(
            source_entity=entity.name,
            name=decl.name,
            target_entity_type=target,
            source_field_path=decl.source_field_path,
            is_lineage=decl.is_lineage,
        )
        for decl in declared_relationships(entity, snapshot)
        for target in decl.entity_types
    )


class _IndexData:
    __slots__ = ("incoming", "outgoing", "version")

    def __init__(
        self,
        version: int,
        outgoing: dict[str, tuple[RelationshipEdge, ...]],
        incoming: dict[str, tuple[RelationshipEdge, ...]],
    ):
        self.version = version
        self.outgoing = outgoing
        self.incoming = incoming


def build_index(snapshot: SchemaSnapshot) -> _IndexData:
    outgoing: dict[str, tuple[RelationshipEdge, ...]] = {}
    incoming: dict[str, list[RelationshipEdge]] = defaultdict(list)
    for key, entity in snapshot.entities.items():
        edges = outgoing_edges(entity, snapshot)
        outgoing[key] = edges
        for edge in edges:
            incoming[entity_key(edge.target_entity_type)].append(edge)
    return _IndexData(
        snapshot.version,
        outgoing,
        {target: tuple(edges) for target, edges in incoming.items()},
    )


class RelationshipIndex:
    """Outgoing/incoming relationship queries over a :class:`SchemaStore`.

    The index for a snapshot is computed on first use and reused until
    the store's snapshot version changes.
    """

    def __init__(self, store: SchemaStore):
        self._store = store
        self._data: _IndexData | None = None

    def _index_for(self, entity_name: str) -> tuple[_IndexData, str]:
        snapshot = self._store.current
        if snapshot.entity(entity_name) is None:
            raise NotFoundError("Entity", entity_name)
        data = self._data
        if data is None or data.version != snapshot.version:
            data = build_index(snapshot)
            self._data = data
            logger.debug(
                "Built relationship index for snapshot %d: %d entities",
                snapshot.version,
                len(data.outgoing),
            )
        return data, entity_key(entity_name)

    def compute_outgoing(self, entity_name: str) -> tuple[RelationshipEdge, ...]:
        """Edges declared by the aspects of ``entity_name``.

        Raises:
            NotFoundError: If the entity is not defined.
        """
        data, key = self._index_for(entity_name)
        return data.outgoing.get(key, ())

    def compute_incoming(self, entity_name: str) -> tuple[RelationshipEdge, ...]:
        """Edges of any defined entity whose target type is ``entity_name``.

        Raises:
            NotFoundError: If the entity is not defined.
        """
        data, key = self._index_for(entity_name)
        return data.incoming.get(key, ())

    def declared_relationships(self, entity_name: str) -> list[RelationshipDeclaration]:
        """Grouped declarations (all target types per annotation) of ``entity_name``."""
        snapshot = self._store.current
        entity = snapshot.entity(entity_name)
        if entity is None:
            raise NotFoundError("Entity", entity_name)
        return declared_relationships(entity, snapshot)
