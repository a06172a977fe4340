"""Aspect schema registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from odg_metamodel.exceptions import DuplicateAspectError, InvalidFieldError, NotFoundError
from odg_metamodel.snapshot import SnapshotView
from odg_metamodel.traversal import collect_named_types, collect_references, field_groups

if TYPE_CHECKING:
    from collections.abc import Mapping

    from odg_metamodel.models import AspectSchema, NamedType
    from odg_metamodel.snapshot import SchemaSnapshot, SchemaStore

logger = logging.getLogger(__name__)


def _relative(path: str) -> str:
    """Drop the leading aspect name from a field path."""
    return path.partition(".")[2]


def validate_aspect(schema: AspectSchema, known_types: Mapping[str, NamedType]) -> list[NamedType]:
    """Check the integrity rules of an aspect against the named types already known.

    Returns the named types the aspect defines inline.

    Raises:
        InvalidFieldError: On a repeated field name, a relationship without
            target entity types, an inconsistent redefinition of a named
            type, or a reference to a type that is defined nowhere.
    """
    for path, fields in field_groups(schema):
        names: set[str] = set()
        for f in fields:
            if f.name in names:
                raise InvalidFieldError(schema.name, _relative(f"{path}.{f.name}"), "duplicate field name")
            names.add(f.name)
            for rel in f.relationships:
                if not rel.entity_types:
                    raise InvalidFieldError(
                        schema.name,
                        _relative(f"{path}.{f.name}"),
                        f"relationship {rel.name} declares no target entity types",
                    )

    local: dict[str, NamedType] = {}
    for named in collect_named_types(schema):
        existing = local.get(named.full_name)
        if existing is not None and existing != named:
            raise InvalidFieldError(schema.name, named.full_name, "conflicting definitions of named type")
        local[named.full_name] = named

    for path, ref in collect_references(schema):
        if ref not in local and ref not in known_types:
            raise InvalidFieldError(schema.name, _relative(path), f"unresolved type reference {ref}")

    return list(local.values())


class AspectSchemaRegistry:
    """Registers aspect schemas into a :class:`SchemaStore`.

    Example:
        registry = AspectSchemaRegistry(store)
        registry.register_aspect(ownership)
        registry.get_aspect("ownership")
    """

    def __init__(self, store: SchemaStore):
        self._store = store

    def register_aspect(self, schema: AspectSchema) -> AspectSchema:
        """Register an aspect schema.

        Raises:
            DuplicateAspectError: If an aspect with the same name exists.
            InvalidFieldError: If the schema fails :func:`validate_aspect`.
        """

        def _add(snapshot: SchemaSnapshot) -> SchemaSnapshot:
            if schema.name in snapshot.aspects:
                raise DuplicateAspectError(schema.name)
            defined = validate_aspect(schema, snapshot.named_types)
            for named in defined:
                previous = snapshot.named_types.get(named.full_name)
                if previous is not None and previous != named:
                    logger.warning(
                        "Aspect %s redefines %s differently; other aspects keep the first definition",
                        schema.name,
                        named.full_name,
                    )
            return snapshot.with_aspect(schema, defined)

        self._store.update(_add)
        logger.info("Registered aspect: %s (%s)", schema.name, schema.full_name)
        return schema

    def get_aspect(self, name: str) -> AspectSchema:
        """Get an aspect schema by name.

        Raises:
            NotFoundError: If no aspect has that name.
        """
        aspect = self._store.current.aspects.get(name)
        if aspect is None:
            raise NotFoundError("Aspect", name)
        return aspect

    def has_aspect(self, name: str) -> bool:
        return name in self._store.current.aspects

    def list_aspects(self) -> SnapshotView[AspectSchema]:
        """All registered aspects in registration order."""
        return SnapshotView(self._store.current.aspects)
