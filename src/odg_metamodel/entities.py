"""Entity definition registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from odg_metamodel.exceptions import DuplicateEntityError, MissingKeyAspectError, NotFoundError, UnknownAspectError
from odg_metamodel.models import EntityDefinition
from odg_metamodel.snapshot import SnapshotView

if TYPE_CHECKING:
    from collections.abc import Sequence

    from odg_metamodel.snapshot import SchemaSnapshot, SchemaStore

logger = logging.getLogger(__name__)


def validate_entity(entity: EntityDefinition, snapshot: SchemaSnapshot) -> None:
    """Check an entity definition against the aspects of ``snapshot``.

    Raises:
        DuplicateEntityError: If an entity with the same name exists.
        MissingKeyAspectError: If the key aspect is not registered.
        UnknownAspectError: If any other listed aspect is not registered.
    """
    if snapshot.entity(entity.name) is not None:
        raise DuplicateEntityError(entity.name)
    if entity.key_aspect not in snapshot.aspects:
        raise MissingKeyAspectError(entity.name, entity.key_aspect)
    unknown = [name for name in entity.aspects if name not in snapshot.aspects]
    if unknown:
        raise UnknownAspectError(entity.name, unknown)


class EntityDefinitionRegistry:
    """Defines entity types over the aspects registered in a :class:`SchemaStore`."""

    def __init__(self, store: SchemaStore):
        self._store = store

    def define_entity(
        self,
        name: str,
        key_aspect: str,
        aspects: Sequence[str] = (),
        *,
        doc: str = "",
        category: str = "core",
    ) -> EntityDefinition:
        """Define a new entity type.

        Args:
            name: Entity type name, unique ignoring case
            key_aspect: Aspect whose fields identify an instance
            aspects: Other aspects the entity may carry, in display order
            doc: Entity documentation
            category: Registry category (core, internal, ...)
        """
        entity = EntityDefinition(
            name=name,
            key_aspect=key_aspect,
            aspects=tuple(aspects),
            doc=doc,
            category=category,
        )
        return self.add_entity(entity)

    def add_entity(self, entity: EntityDefinition) -> EntityDefinition:
        """Register an already-built :class:`EntityDefinition`."""

        def _add(snapshot: SchemaSnapshot) -> SchemaSnapshot:
            validate_entity(entity, snapshot)
            return snapshot.with_entity(entity)

        self._store.update(_add)
        logger.info(
            "Defined entity: %s (key aspect %s, %d aspects)", entity.name, entity.key_aspect, len(entity.all_aspects)
        )
        return entity

    def get_entity(self, name: str) -> EntityDefinition:
        """Get an entity definition by name, ignoring case.

        Raises:
            NotFoundError: If no entity has that name.
        """
        entity = self._store.current.entity(name)
        if entity is None:
            raise NotFoundError("Entity", name)
        return entity

    def list_entities(self) -> SnapshotView[EntityDefinition]:
        """All defined entities in definition order."""
        return SnapshotView(self._store.current.entities)
