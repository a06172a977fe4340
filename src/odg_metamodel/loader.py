"""Load aspect schemas and entity registries from schema source files.

Aspect schemas use the Avro record format with annotation blocks, one
record per aspect::

    {
      "type": "record",
      "Aspect": {"name": "domains"},
      "name": "Domains",
      "namespace": "com.linkedin.domain",
      "fields": [
        {
          "Relationship": {"/*": {"entityTypes": ["domain"], "name": "AssociatedWith"}},
          "type": {"type": "array", "items": "string"},
          "name": "domains"
        }
      ]
    }

The entity registry is a YAML mapping with an ``entities`` list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from odg_metamodel.enums import PrimitiveKind, SearchableFieldType
from odg_metamodel.exceptions import SchemaParseError
from odg_metamodel.models import (
    ArrayType,
    AspectField,
    AspectSchema,
    EntityDefinition,
    EnumType,
    FieldType,
    MapType,
    NullableType,
    PrimitiveType,
    RecordType,
    ReferenceType,
    RelationshipAnnotation,
    SearchableAnnotation,
    qualify,
)

logger = logging.getLogger(__name__)

ASPECT_SUFFIXES = (".json", ".avsc", ".yaml", ".yml")

_PRIMITIVES = frozenset(k.value for k in PrimitiveKind)


# ─── Field types ─────────────────────────────────────────


def _namespace_of(raw: dict[str, Any], enclosing: str) -> str:
    name = raw.get("name", "")
    if isinstance(name, str) and "." in name:
        return name.rsplit(".", 1)[0]
    return raw.get("namespace", enclosing) or ""


def _short_name(raw: dict[str, Any]) -> str:
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        msg = f"Named type without a name: {raw!r}"
        raise SchemaParseError(msg)
    return name.rsplit(".", 1)[-1]


def parse_field_type(raw: Any, namespace: str = "") -> FieldType:
    """Parse an Avro type expression.

    Unqualified type names are resolved against ``namespace``. Unions are
    only accepted in the ``["null", X]`` form.
    """
    if isinstance(raw, str):
        if raw in _PRIMITIVES:
            return PrimitiveType(primitive=PrimitiveKind(raw))
        return ReferenceType(name=qualify(raw, namespace))

    if isinstance(raw, list):
        branches = [b for b in raw if b != "null"]
        if len(raw) == 2 and len(branches) == 1:
            return NullableType(inner=parse_field_type(branches[0], namespace))
        if len(raw) == 1:
            return parse_field_type(raw[0], namespace)
        msg = f"Unsupported union {raw!r}: only [\"null\", X] unions are allowed"
        raise SchemaParseError(msg)

    if isinstance(raw, dict):
        kind = raw.get("type")
        if kind == "record":
            return _parse_record(raw, namespace)
        if kind == "enum":
            ns = _namespace_of(raw, namespace)
            symbols = _string_list(raw.get("symbols"), "Enum symbols")
            deprecated = _mapping(raw.get("deprecatedSymbols"), "deprecatedSymbols")
            return EnumType(
                name=_short_name(raw),
                namespace=ns,
                symbols=symbols,
                symbol_docs=_mapping(raw.get("symbolDocs"), "symbolDocs"),
                deprecated_symbols=tuple(s for s in symbols if deprecated.get(s)),
                doc=raw.get("doc", ""),
            )
        if kind == "array":
            return ArrayType(items=parse_field_type(_required(raw, "items"), namespace))
        if kind == "map":
            return MapType(values=parse_field_type(_required(raw, "values"), namespace))
        if kind is not None:
            # {"type": "string", ...} wraps a primitive or a nested type expression
            return parse_field_type(kind, namespace)

    msg = f"Unrecognized type expression: {raw!r}"
    raise SchemaParseError(msg)


def _required(raw: dict[str, Any], key: str) -> Any:
    if key not in raw:
        msg = f"Missing '{key}' in {raw!r}"
        raise SchemaParseError(msg)
    return raw[key]


def _mapping(raw: Any, what: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        msg = f"{what} must be a mapping: {raw!r}"
        raise SchemaParseError(msg)
    return raw


def _string_list(raw: Any, what: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        msg = f"{what} must be a list of strings: {raw!r}"
        raise SchemaParseError(msg)
    return tuple(raw)


def _field_list(raw: dict[str, Any]) -> list[Any]:
    fields = raw.get("fields", [])
    if not isinstance(fields, list):
        msg = f"Fields of {raw.get('name')} must be a list: {fields!r}"
        raise SchemaParseError(msg)
    return fields


def _parse_record(raw: dict[str, Any], enclosing: str) -> RecordType:
    ns = _namespace_of(raw, enclosing)
    return RecordType(
        name=_short_name(raw),
        namespace=ns,
        fields=tuple(_parse_field(f, ns) for f in _field_list(raw)),
        doc=raw.get("doc", ""),
    )


# ─── Annotations ─────────────────────────────────────────


def _split_by_path(block: dict[str, Any], prefix: str = "") -> list[tuple[str, dict[str, Any]]]:
    """Flatten an annotation block into ``(sub_path, properties)`` pairs.

    A block whose keys all start with ``/`` is keyed by sub-path; anything
    else is a direct annotation on the field itself.
    """
    if block and all(key.startswith("/") for key in block):
        pairs: list[tuple[str, dict[str, Any]]] = []
        for key, value in block.items():
            if not isinstance(value, dict):
                msg = f"Annotation at path {prefix}{key} must be a mapping"
                raise SchemaParseError(msg)
            pairs.extend(_split_by_path(value, prefix + key))
        return pairs
    return [(prefix, block)]


def _parse_relationships(block: Any) -> tuple[RelationshipAnnotation, ...]:
    if block is None:
        return ()
    if not isinstance(block, dict):
        msg = f"Relationship annotation must be a mapping: {block!r}"
        raise SchemaParseError(msg)
    annotations = []
    for path, props in _split_by_path(block):
        if "name" not in props:
            msg = f"Relationship annotation without a name: {props!r}"
            raise SchemaParseError(msg)
        annotations.append(
            RelationshipAnnotation(
                name=props["name"],
                entity_types=_string_list(props.get("entityTypes"), "Relationship entityTypes"),
                path=path,
                is_lineage=bool(props.get("isLineage", False)),
            )
        )
    return tuple(annotations)


def _parse_searchable(block: Any) -> tuple[SearchableAnnotation, ...]:
    if block is None:
        return ()
    if not isinstance(block, dict):
        msg = f"Searchable annotation must be a mapping: {block!r}"
        raise SchemaParseError(msg)
    annotations = []
    for path, props in _split_by_path(block):
        field_type = props.get("fieldType")
        try:
            parsed_type = SearchableFieldType(field_type) if field_type is not None else None
        except ValueError as e:
            msg = f"Unknown searchable field type: {field_type}"
            raise SchemaParseError(msg) from e
        annotations.append(
            SearchableAnnotation(
                field_name=props.get("fieldName"),
                field_type=parsed_type,
                query_by_default=props.get("queryByDefault"),
                enable_autocomplete=props.get("enableAutocomplete", False),
                add_to_filters=props.get("addToFilters", False),
                filter_name_override=props.get("filterNameOverride"),
                has_values_field_name=props.get("hasValuesFieldName"),
                boost_score=props.get("boostScore", 1.0),
                weights_per_field_value={
                    str(k): v for k, v in _mapping(props.get("weightsPerFieldValue"), "weightsPerFieldValue").items()
                },
                path=path,
            )
        )
    return tuple(annotations)


def _parse_field(raw: Any, namespace: str) -> AspectField:
    if not isinstance(raw, dict):
        msg = f"Field must be a mapping: {raw!r}"
        raise SchemaParseError(msg)
    java = _mapping(raw.get("java"), "java annotation")
    return AspectField(
        name=_required(raw, "name"),
        type=parse_field_type(_required(raw, "type"), namespace),
        doc=raw.get("doc", ""),
        default=raw.get("default"),
        has_default="default" in raw,
        searchable=_parse_searchable(raw.get("Searchable")),
        relationships=_parse_relationships(raw.get("Relationship")),
        java_class=java.get("class"),
    )


# ─── Aspects ─────────────────────────────────────────────


def parse_aspect(raw: Any) -> AspectSchema:
    """Parse one Avro record carrying an ``Aspect`` annotation.

    Raises:
        SchemaParseError: If the record is malformed or not an aspect.
    """
    if not isinstance(raw, dict) or raw.get("type") != "record":
        msg = f"Aspect schema must be an Avro record: {str(raw)[:80]}"
        raise SchemaParseError(msg)
    aspect_block = raw.get("Aspect")
    if not isinstance(aspect_block, dict) or not aspect_block.get("name"):
        msg = f"Record {raw.get('name')} has no Aspect annotation"
        raise SchemaParseError(msg)

    ns = _namespace_of(raw, "")
    try:
        return AspectSchema(
            name=aspect_block["name"],
            record_name=_short_name(raw),
            namespace=ns,
            version=aspect_block.get("version", 1),
            fields=tuple(_parse_field(f, ns) for f in _field_list(raw)),
            doc=raw.get("doc", ""),
        )
    except ValidationError as e:
        msg = f"Invalid aspect {aspect_block['name']}: {e}"
        raise SchemaParseError(msg) from e


def _read_text(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"{file_path} is not valid UTF-8: {e}"
        raise SchemaParseError(msg) from e


def _parse_yaml(text: str, file_path: Path) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {file_path}: {e}"
        raise SchemaParseError(msg) from e


def _read_document(file_path: Path) -> Any:
    text = _read_text(file_path)
    if file_path.suffix in (".yaml", ".yml"):
        return _parse_yaml(text, file_path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {file_path}: {e}"
        raise SchemaParseError(msg) from e


def load_aspect_file(path: str | Path) -> list[AspectSchema]:
    """Load the aspect schemas in a JSON, AVSC or YAML file.

    The file holds either one record or a list of records.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaParseError: If the content is not a valid aspect schema.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"Schema file not found: {file_path}"
        raise FileNotFoundError(msg)

    raw = _read_document(file_path)
    records = raw if isinstance(raw, list) else [raw]
    aspects = [parse_aspect(record) for record in records]
    logger.debug("Loaded %d aspect(s) from %s", len(aspects), file_path)
    return aspects


def load_aspects_from_dir(directory: str | Path) -> list[AspectSchema]:
    """Load all aspect schema files in a directory, ordered by file name."""
    dir_path = Path(directory)
    if not dir_path.is_dir():
        msg = f"Schema directory not found: {dir_path}"
        raise FileNotFoundError(msg)
    aspects: list[AspectSchema] = []
    for file_path in sorted(p for p in dir_path.iterdir() if p.suffix in ASPECT_SUFFIXES):
        aspects.extend(load_aspect_file(file_path))
    logger.info("Loaded %d aspect schemas from %s", len(aspects), dir_path)
    return aspects


# ─── Entity registry ─────────────────────────────────────


def parse_entity(raw: Any) -> EntityDefinition:
    """Parse one entry of the ``entities`` list."""
    if not isinstance(raw, dict):
        msg = f"Entity entry must be a mapping: {raw!r}"
        raise SchemaParseError(msg)
    try:
        return EntityDefinition(
            name=raw["name"],
            key_aspect=raw["keyAspect"],
            aspects=_string_list(raw.get("aspects"), f"Aspects of entity {raw.get('name')}"),
            doc=raw.get("doc", ""),
            category=raw.get("category", "core"),
        )
    except KeyError as e:
        msg = f"Entity entry missing {e.args[0]}: {raw!r}"
        raise SchemaParseError(msg) from e
    except ValidationError as e:
        msg = f"Invalid entity entry {raw.get('name')}: {e}"
        raise SchemaParseError(msg) from e


def load_entity_registry(path: str | Path) -> list[EntityDefinition]:
    """Load entity definitions from a YAML entity registry file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaParseError: If the file is not a mapping with an ``entities`` list.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"Entity registry not found: {file_path}"
        raise FileNotFoundError(msg)

    raw = _parse_yaml(_read_text(file_path), file_path)

    if not isinstance(raw, dict) or not isinstance(raw.get("entities"), list):
        msg = f"Entity registry must be a YAML mapping with an 'entities' list: {file_path}"
        raise SchemaParseError(msg)

    entities = [parse_entity(entry) for entry in raw["entities"]]
    logger.info("Loaded %d entity definitions from %s", len(entities), file_path)
    return entities
