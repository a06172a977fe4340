"""Searchable field specs derived from ``Searchable`` field annotations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from odg_metamodel.enums import PrimitiveKind, SearchableFieldType
from odg_metamodel.exceptions import NotFoundError
from odg_metamodel.models import ArrayType, MapType, NullableType, PrimitiveType, SearchableFieldSpec
from odg_metamodel.traversal import annotation_path, iter_fields

if TYPE_CHECKING:
    from odg_metamodel.models import EntityDefinition, FieldType
    from odg_metamodel.snapshot import SchemaSnapshot, SchemaStore

logger = logging.getLogger(__name__)

_QUERY_BY_DEFAULT_TYPES = frozenset(
    {
        SearchableFieldType.TEXT,
        SearchableFieldType.TEXT_PARTIAL,
        SearchableFieldType.WORD_GRAM,
        SearchableFieldType.URN,
        SearchableFieldType.URN_PARTIAL,
    }
)


def default_field_type(field_type: FieldType) -> SearchableFieldType:
    """Index type implied by a value type when the annotation names none."""
    while isinstance(field_type, ArrayType | MapType | NullableType):
        if isinstance(field_type, ArrayType):
            field_type = field_type.items
        elif isinstance(field_type, MapType):
            field_type = field_type.values
        else:
            field_type = field_type.inner
    if isinstance(field_type, PrimitiveType):
        if field_type.primitive == PrimitiveKind.BOOLEAN:
            return SearchableFieldType.BOOLEAN
        if field_type.primitive in (PrimitiveKind.INT, PrimitiveKind.LONG):
            return SearchableFieldType.COUNT
        if field_type.primitive in (PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE):
            return SearchableFieldType.DOUBLE
    return SearchableFieldType.KEYWORD


def searchable_fields(entity: EntityDefinition, snapshot: SchemaSnapshot) -> list[SearchableFieldSpec]:
    """One spec per ``Searchable`` annotation, in relationship traversal order."""
    specs: list[SearchableFieldSpec] = []
    for aspect_name in entity.all_aspects:
        aspect = snapshot.aspects[aspect_name]
        for path, f in iter_fields(aspect, snapshot.named_types):
            for ann in f.searchable:
                source_path = annotation_path(path, ann.path)
                index_name = ann.field_name or source_path.rsplit(".", 1)[-1]
                field_type = ann.field_type or default_field_type(f.type)
                query_by_default = (
                    ann.query_by_default if ann.query_by_default is not None else field_type in _QUERY_BY_DEFAULT_TYPES
                )
                specs.append(
                    SearchableFieldSpec(
                        entity=entity.name,
                        aspect=aspect.name,
                        source_field_path=source_path,
                        index_field_name=index_name,
                        field_type=field_type,
                        query_by_default=query_by_default,
                        enable_autocomplete=ann.enable_autocomplete,
                        add_to_filters=ann.add_to_filters,
                        filter_name=(ann.filter_name_override or index_name) if ann.add_to_filters else None,
                        has_values_field_name=ann.has_values_field_name,
                        boost_score=ann.boost_score,
                        weights_per_field_value=ann.weights_per_field_value,
                    )
                )
    return specs


class SearchableFieldIndex:
    """Searchable field queries over a :class:`SchemaStore`."""

    def __init__(self, store: SchemaStore):
        self._store = store

    def compute_searchable(self, entity_name: str) -> list[SearchableFieldSpec]:
        """Search-indexing hints for the fields of ``entity_name``.

        Raises:
            NotFoundError: If the entity is not defined.
        """
        snapshot = self._store.current
        entity = snapshot.entity(entity_name)
        if entity is None:
            raise NotFoundError("Entity", entity_name)
        specs = searchable_fields(entity, snapshot)
        logger.debug("Entity %s has %d searchable fields", entity.name, len(specs))
        return specs
