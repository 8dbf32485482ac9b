"""
Centralized constants for OpenAPI DB Generator.

This module contains the schema annotation names, type mappings and default
values used while converting an OpenAPI document into a relational model.
Keeping them in one place makes it easier for contributors to adjust the
conventions without hunting through the resolver code.
"""

from typing import Dict, Tuple


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    JUNCTION_PREFIX = "junction_"
    PRIMARY_KEY_NAME = "id"
    UNDERSCORE_PREFIX = "_"

    # Local component references look like '#/components/schemas/Post'
    SCHEMA_REF_PREFIX = "#/components/schemas/"


class SchemaExtensions:
    """Vendor extensions (x-*) recognised on schemas and properties."""

    TABLE = "x-table"
    PRIMARY_KEY = "x-pk"
    INDEXES = "x-indexes"
    DB_TYPE = "x-db-type"


# Composition keywords that make a schema a composite (non-table) schema
COMPOSITE_KEYWORDS: Tuple[str, ...] = ("allOf", "oneOf", "anyOf")


# =============================================================================
# TYPE MAPPINGS
# =============================================================================

class OpenApiTypes:
    """Property types allowed by the OpenAPI data type enumeration."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class DbTypes:
    """Abstract database column types handed to the migration renderers."""

    PK = "pk"
    BIG_PK = "bigpk"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    STRING = "string"
    TEXT = "text"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    UUID = "uuid"
    JSON = "json"


STRING_FORMAT_DB_TYPE_MAP: Dict[str, str] = {
    "date": DbTypes.DATE,
    "time": DbTypes.TIME,
    "date-time": DbTypes.TIMESTAMP,
    "uuid": DbTypes.UUID,
}

NUMBER_FORMAT_DB_TYPE_MAP: Dict[str, str] = {
    "double": DbTypes.DOUBLE,
    "decimal": DbTypes.DECIMAL,
}

# OpenAPI type to the scalar type used by generated language bindings
SCALAR_TYPE_MAP: Dict[str, str] = {
    OpenApiTypes.INTEGER: "int",
    OpenApiTypes.NUMBER: "float",
    OpenApiTypes.BOOLEAN: "bool",
    OpenApiTypes.STRING: "str",
    OpenApiTypes.ARRAY: "list",
    OpenApiTypes.OBJECT: "dict",
}


# =============================================================================
# INDEXES
# =============================================================================

class IndexDefaults:
    """Index specification grammar: 'a,b', 'gin:a', 'unique:a,b'."""

    TAG_SEPARATOR = ":"
    COLUMN_SEPARATOR = ","
    UNIQUE_TAG = "unique"

    UNIQUE_SUFFIX = "key"
    INDEX_SUFFIX = "index"
