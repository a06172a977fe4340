"""Pydantic V2 models for aspect schemas, entity definitions and relationships.

Field types form a tagged union discriminated by ``kind``. Sequences are
tuples and every model is frozen, so a registered schema can be shared
between snapshots without copying.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, NoReturn

from pydantic import BaseModel, ConfigDict, Field, field_validator

from odg_metamodel.enums import PrimitiveKind, SearchableFieldType


def qualify(name: str, namespace: str = "") -> str:
    """Return the Avro full name of ``name`` relative to ``namespace``."""
    if "." in name or not namespace:
        return name
    return f"{namespace}.{name}"


class FrozenDict(dict):
    """Read-only ``dict``; still serializes and compares as a plain dict."""

    __slots__ = ()

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        msg = f"{type(self).__name__} is read-only"
        raise TypeError(msg)

    __setitem__ = __delitem__ = __ior__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __hash__(self) -> int:  # type: ignore[override]
        return hash(frozenset(self.items()))

    def __reduce__(self) -> tuple[type[FrozenDict], tuple[dict[Any, Any]]]:
        return (type(self), (dict(self),))


def freeze(value: Any) -> Any:
    """Deep read-only copy of a JSON-like value.

    Lists become tuples and dicts become :class:`FrozenDict`, so values
    held by a snapshot can be handed out without copying.
    """
    if isinstance(value, dict):
        return FrozenDict({key: freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(freeze(item) for item in value)
    if isinstance(value, set | frozenset):
        return frozenset(freeze(item) for item in value)
    return value


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ─── Field types ─────────────────────────────────────────


class PrimitiveType(_FrozenModel):
    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class EnumType(_FrozenModel):
    kind: Literal["enum"] = "enum"
    name: str = Field(min_length=1)
    namespace: str = ""
    symbols: tuple[str, ...] = ()
    symbol_docs: dict[str, str] = Field(default_factory=FrozenDict)
    deprecated_symbols: tuple[str, ...] = ()
    doc: str = ""

    @field_validator("symbol_docs")
    @classmethod
    def freeze_symbol_docs(cls, v: dict[str, str]) -> dict[str, str]:
        return freeze(v)

    @property
    def full_name(self) -> str:
        return qualify(self.name, self.namespace)


class RecordType(_FrozenModel):
    kind: Literal["record"] = "record"
    name: str = Field(min_length=1)
    namespace: str = ""
    fields: tuple[AspectField, ...] = ()
    doc: str = ""

    @property
    def full_name(self) -> str:
        return qualify(self.name, self.namespace)


class ArrayType(_FrozenModel):
    kind: Literal["array"] = "array"
    items: FieldType


class MapType(_FrozenModel):
    """String-keyed map, as in Avro."""

    kind: Literal["map"] = "map"
    values: FieldType


class NullableType(_FrozenModel):
    """Two-branch ``["null", X]`` union."""

    kind: Literal["nullable"] = "nullable"
    inner: FieldType


class ReferenceType(_FrozenModel):
    """Reference by full name to an enum or record defined elsewhere."""

    kind: Literal["reference"] = "reference"
    name: str = Field(min_length=1)


FieldType = Annotated[
    PrimitiveType | EnumType | RecordType | ArrayType | MapType | NullableType | ReferenceType,
    Field(discriminator="kind"),
]

NamedType = EnumType | RecordType


def type_label(field_type: FieldType) -> str:
    """Short human-readable description of a field type."""
    if isinstance(field_type, PrimitiveType):
        return field_type.primitive.value
    if isinstance(field_type, EnumType | RecordType):
        return field_type.name
    if isinstance(field_type, ArrayType):
        return f"array<{type_label(field_type.items)}>"
    if isinstance(field_type, MapType):
        return f"map<string, {type_label(field_type.values)}>"
    if isinstance(field_type, NullableType):
        return f"{type_label(field_type.inner)}?"
    if isinstance(field_type, ReferenceType):
        return field_type.name.rsplit(".", 1)[-1]
    msg = f"Unhandled field type: {field_type!r}"
    raise TypeError(msg)


# ─── Annotations ─────────────────────────────────────────


class RelationshipAnnotation(_FrozenModel):
    """``Relationship`` block on a field.

    ``path`` is the sub-path the annotation was keyed by in the source
    (``""`` for a direct annotation, ``/*`` for array items, ``/*/owner``
    for a field of array items).
    """

    name: str = Field(min_length=1)
    entity_types: tuple[str, ...] = ()
    path: str = ""
    is_lineage: bool = False


class SearchableAnnotation(_FrozenModel):
    """``Searchable`` block on a field."""

    field_name: str | None = None
    field_type: SearchableFieldType | None = None
    query_by_default: bool | None = None
    enable_autocomplete: bool = False
    add_to_filters: bool = False
    filter_name_override: str | None = None
    has_values_field_name: str | None = None
    boost_score: float = 1.0
    weights_per_field_value: dict[str, float] = Field(default_factory=FrozenDict)
    path: str = ""

    @field_validator("weights_per_field_value")
    @classmethod
    def freeze_weights(cls, v: dict[str, float]) -> dict[str, float]:
        return freeze(v)


# ─── Schemas ─────────────────────────────────────────────


class AspectField(_FrozenModel):
    """A field of an aspect or of a record nested inside one."""

    name: str = Field(min_length=1)
    type: FieldType
    doc: str = ""
    default: Any = None
    has_default: bool = False
    searchable: tuple[SearchableAnnotation, ...] = ()
    relationships: tuple[RelationshipAnnotation, ...] = ()
    java_class: str | None = None

    @field_validator("default")
    @classmethod
    def freeze_default(cls, v: Any) -> Any:
        """Store the default read-only; lists come back as tuples."""
        return freeze(v)


class AspectSchema(_FrozenModel):
    """A named, versioned record type attachable to entities."""

    name: str = Field(min_length=1)
    record_name: str = Field(min_length=1)
    namespace: str = ""
    version: int = Field(default=1, ge=1)
    fields: tuple[AspectField, ...] = ()
    doc: str = ""

    @property
    def full_name(self) -> str:
        return qualify(self.record_name, self.namespace)

    def field(self, name: str) -> AspectField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def as_record(self) -> RecordType:
        return RecordType(name=self.record_name, namespace=self.namespace, fields=self.fields, doc=self.doc)


class EntityDefinition(_FrozenModel):
    """A named entity type: one key aspect plus the aspects it may carry."""

    name: str = Field(min_length=1)
    key_aspect: str = Field(min_length=1)
    aspects: tuple[str, ...] = ()
    doc: str = ""
    category: str = "core"

    @property
    def all_aspects(self) -> tuple[str, ...]:
        """Key aspect first, then the declared aspects without repeats."""
        ordered = [self.key_aspect]
        for name in self.aspects:
            if name not in ordered:
                ordered.append(name)
        return tuple(ordered)


# ─── Derived views ───────────────────────────────────────


class RelationshipDeclaration(_FrozenModel):
    """One relationship annotation found on an entity's aspect field."""

    aspect: str
    source_field_path: str
    name: str
    entity_types: tuple[str, ...]
    is_lineage: bool = False


class RelationshipEdge(_FrozenModel):
    """A directional edge from an entity type to one target entity type."""

    source_entity: str
    name: str
    target_entity_type: str
    source_field_path: str
    is_lineage: bool = False


class SearchableFieldSpec(_FrozenModel):
    """Search-indexing hints resolved for one annotated field."""

    entity: str
    aspect: str
    source_field_path: str
    index_field_name: str
    field_type: SearchableFieldType
    query_by_default: bool
    enable_autocomplete: bool = False
    add_to_filters: bool = False
    filter_name: str | None = None
    has_values_field_name: str | None = None
    boost_score: float = 1.0
    weights_per_field_value: dict[str, float] = Field(default_factory=FrozenDict)

    @field_validator("weights_per_field_value")
    @classmethod
    def freeze_weights(cls, v: dict[str, float]) -> dict[str, float]:
        return freeze(v)


RecordType.model_rebuild()
ArrayType.model_rebuild()
MapType.model_rebuild()
NullableType.model_rebuild()
AspectField.model_rebuild()
AspectSchema.model_rebuild()
