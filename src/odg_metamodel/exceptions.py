"""Metadata model exceptions."""

from __future__ import annotations


class MetamodelError(Exception):
    """Base exception for all metadata model errors."""


class NotFoundError(MetamodelError):
    """Lookup of an unknown aspect or entity."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} not found: {name}")
        self.kind = kind
        self.name = name


class DuplicateAspectError(MetamodelError):
    """An aspect with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Aspect already registered: {name}")
        self.name = name


class DuplicateEntityError(MetamodelError):
    """An entity with the same name is already defined."""

    def __init__(self, name: str):
        super().__init__(f"Entity already defined: {name}")
        self.name = name


class UnknownAspectError(MetamodelError):
    """An entity lists aspects that are not registered."""

    def __init__(self, entity: str, aspects: list[str]):
        super().__init__(f"Entity {entity} references unregistered aspects: {', '.join(aspects)}")
        self.entity = entity
        self.aspects = aspects


class MissingKeyAspectError(MetamodelError):
    """The key aspect of an entity is not registered."""

    def __init__(self, entity: str, key_aspect: str):
        super().__init__(f"Key aspect {key_aspect} of entity {entity} is not registered")
        self.entity = entity
        self.key_aspect = key_aspect


class InvalidFieldError(MetamodelError):
    """A field in an aspect schema violates a schema integrity rule."""

    def __init__(self, aspect: str, field_path: str, reason: str):
        super().__init__(f"Invalid field {aspect}.{field_path}: {reason}")
        self.aspect = aspect
        self.field_path = field_path
        self.reason = reason


class SchemaParseError(MetamodelError, ValueError):
    """A schema source document could not be parsed."""
