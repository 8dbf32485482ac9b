"""
Field mapping domain logic for OpenAPI DB Generator.

This module maps OpenAPI property definitions (type, format, x-db-type) to
abstract database column types and to the scalar types used by generated
language bindings.
"""

from typing import TYPE_CHECKING

from ..constants import (
    DbTypes,
    OpenApiTypes,
    NUMBER_FORMAT_DB_TYPE_MAP,
    SCALAR_TYPE_MAP,
    STRING_FORMAT_DB_TYPE_MAP,
)

if TYPE_CHECKING:
    from .schemas import PropertySchema


class FieldTypeMapper:
    """
    Guesses column types for schema properties.

    Explicit ``x-db-type`` annotations always win over inferred types.
    """

    def guess_db_type(self, prop: "PropertySchema", for_reference: bool = False) -> str:
        """
        Guess the database type of a property.

        Args:
            prop: Property to map
            for_reference: True when the type is needed for a foreign key
                column pointing at this property (primary keys then map to
                plain integers instead of auto-increment keys)

        Returns:
            Abstract database type string
        """
        if prop.custom_db_type:
            return str(prop.custom_db_type)

        if prop.is_reference() or prop.has_ref_items():
            return DbTypes.JSON

        is_big = prop.format == "int64"

        if prop.is_pk and prop.type == OpenApiTypes.INTEGER:
            if for_reference:
                return DbTypes.BIGINT if is_big else DbTypes.INTEGER
            return DbTypes.BIG_PK if is_big else DbTypes.PK

        if prop.type == OpenApiTypes.BOOLEAN:
            return DbTypes.BOOLEAN
        if prop.type == OpenApiTypes.INTEGER:
            return DbTypes.BIGINT if is_big else DbTypes.INTEGER
        if prop.type == OpenApiTypes.NUMBER:
            return NUMBER_FORMAT_DB_TYPE_MAP.get(prop.format, DbTypes.FLOAT)
        if prop.type == OpenApiTypes.STRING:
            if prop.format in STRING_FORMAT_DB_TYPE_MAP:
                return STRING_FORMAT_DB_TYPE_MAP[prop.format]
            if prop.max_length is not None or prop.enum:
                return DbTypes.STRING
            return DbTypes.TEXT

        # array, object and untyped properties are stored as documents
        return DbTypes.JSON

    def guess_python_type(self, prop: "PropertySchema") -> str:
        """Guess the scalar type for generated bindings."""
        return SCALAR_TYPE_MAP.get(prop.type, "str")


default_mapper = FieldTypeMapper()
