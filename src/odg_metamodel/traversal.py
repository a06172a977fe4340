"""Depth-first traversal of aspect fields.

Shared by the relationship and search indexes, which both need every
field reachable from an aspect together with its dotted path
(``ownership.owners.owner``). Arrays, maps and nullable unions are
transparent: they never add a path segment.
"""

from __future__ import annotations

from collections import ChainMap
from typing import TYPE_CHECKING

from odg_metamodel.models import (
    ArrayType,
    EnumType,
    MapType,
    NullableType,
    PrimitiveType,
    RecordType,
    ReferenceType,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from odg_metamodel.models import AspectField, AspectSchema, FieldType, NamedType


def nested_records(
    field_type: FieldType,
    named_types: Mapping[str, NamedType],
    seen: frozenset[str] = frozenset(),
) -> Iterator[RecordType]:
    """Yield the records directly reachable from ``field_type``.

    References are resolved through ``named_types``; records already in
    ``seen`` are skipped so recursive types terminate.
    """
    if isinstance(field_type, RecordType):
        if field_type.full_name not in seen:
            yield field_type
    elif isinstance(field_type, ArrayType):
        yield from nested_records(field_type.items, named_types, seen)
    elif isinstance(field_type, MapType):
        yield from nested_records(field_type.values, named_types, seen)
    elif isinstance(field_type, NullableType):
        yield from nested_records(field_type.inner, named_types, seen)
    elif isinstance(field_type, ReferenceType):
        target = named_types.get(field_type.name)
        if isinstance(target, RecordType) and target.full_name not in seen:
            yield target
    elif isinstance(field_type, PrimitiveType | EnumType):
        return
    else:
        msg = f"Unhandled field type: {field_type!r}"
        raise TypeError(msg)


def iter_fields(
    aspect: AspectSchema,
    named_types: Mapping[str, NamedType],
) -> Iterator[tuple[str, AspectField]]:
    """Yield ``(field_path, field)`` for every field reachable from ``aspect``.

    Order is declaration order, depth first: a field is yielded before
    the fields of the records nested in its type. References resolve to
    the aspect's own definitions first, then to ``named_types``.
    """
    local = {named.full_name: named for named in collect_named_types(aspect)}
    resolved = ChainMap(local, named_types)  # type: ignore[arg-type]
    yield from _walk(aspect.name, aspect.fields, resolved, frozenset({aspect.full_name}))


def _walk(
    prefix: str,
    fields: tuple[AspectField, ...],
    named_types: Mapping[str, NamedType],
    seen: frozenset[str],
) -> Iterator[tuple[str, AspectField]]:
    for f in fields:
        path = f"{prefix}.{f.name}"
        yield path, f
        for record in nested_records(f.type, named_types, seen):
            yield from _walk(path, record.fields, named_types, seen | {record.full_name})


def annotation_path(field_path: str, sub_path: str) -> str:
    """Append the named segments of an annotation sub-path to ``field_path``.

    ``/*`` (array items) and ``/$key`` (map keys) do not name a field and
    leave the path unchanged: ``annotation_path("a.b", "/*/c") == "a.b.c"``.
    """
    segments = [s for s in sub_path.split("/") if s and s not in ("*", "$key")]
    return ".".join([field_path, *segments])


def collect_named_types(aspect: AspectSchema) -> list[NamedType]:
    """All enums and records defined inline by ``aspect``, itself included."""
    found: list[NamedType] = [aspect.as_record()]
    for f in _all_inline_fields(aspect.fields):
        found.extend(_inline_named(f.type))
    return found


def collect_references(aspect: AspectSchema) -> list[tuple[str, str]]:
    """``(field_path, referenced_name)`` for every name reference in ``aspect``."""
    refs: list[tuple[str, str]] = []
    for path, f in _inline_paths(aspect.name, aspect.fields):
        refs.extend((path, name) for name in _references(f.type))
    return refs


def field_groups(aspect: AspectSchema) -> Iterator[tuple[str, tuple[AspectField, ...]]]:
    """Yield ``(path, fields)`` for the aspect record and each record defined inline."""
    yield aspect.name, aspect.fields
    for path, f in _inline_paths(aspect.name, aspect.fields):
        for record in _inline_records(f.type):
            yield path, record.fields


def _all_inline_fields(fields: tuple[AspectField, ...]) -> Iterator[AspectField]:
    for _, f in _inline_paths("", fields):
        yield f


def _inline_paths(prefix: str, fields: tuple[AspectField, ...]) -> Iterator[tuple[str, AspectField]]:
    for f in fields:
        path = f"{prefix}.{f.name}" if prefix else f.name
        yield path, f
        for record in _inline_records(f.type):
            yield from _inline_paths(path, record.fields)


def _inline_records(field_type: FieldType) -> Iterator[RecordType]:
    for named in _inline_named(field_type):
        if isinstance(named, RecordType):
            yield named


def _inline_named(field_type: FieldType) -> Iterator[NamedType]:
    if isinstance(field_type, EnumType | RecordType):
        yield field_type
    elif isinstance(field_type, ArrayType):
        yield from _inline_named(field_type.items)
    elif isinstance(field_type, MapType):
        yield from _inline_named(field_type.values)
    elif isinstance(field_type, NullableType):
        yield from _inline_named(field_type.inner)


def _references(field_type: FieldType) -> Iterator[str]:
    if isinstance(field_type, ReferenceType):
        yield field_type.name
    elif isinstance(field_type, ArrayType):
        yield from _references(field_type.items)
    elif isinstance(field_type, MapType):
        yield from _references(field_type.values)
    elif isinstance(field_type, NullableType):
        yield from _references(field_type.inner)
