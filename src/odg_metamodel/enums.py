"""Domain enums for the OpenDataGov metadata model."""

from enum import StrEnum


class PrimitiveKind(StrEnum):
    """Avro primitive types accepted in aspect schemas."""

    NULL = "null"
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BYTES = "bytes"
    STRING = "string"


class SearchableFieldType(StrEnum):
    """Index field types declared by ``Searchable`` annotations."""

    KEYWORD = "KEYWORD"
    TEXT = "TEXT"
    TEXT_PARTIAL = "TEXT_PARTIAL"
    BROWSE_PATH = "BROWSE_PATH"
    BROWSE_PATH_V2 = "BROWSE_PATH_V2"
    URN = "URN"
    URN_PARTIAL = "URN_PARTIAL"
    BOOLEAN = "BOOLEAN"
    COUNT = "COUNT"
    DATETIME = "DATETIME"
    OBJECT = "OBJECT"
    DOUBLE = "DOUBLE"
    WORD_GRAM = "WORD_GRAM"
    MAP_ARRAY = "MAP_ARRAY"


class RelationshipDirection(StrEnum):
    """Which side of a relationship to report."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"
    BOTH = "both"
