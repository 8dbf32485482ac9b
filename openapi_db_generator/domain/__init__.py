"""
Domain module for OpenAPI DB Generator.

This module contains the schema wrappers, the junction detector, the
attribute resolver and the relational models they produce. None of it reads
files or depends on how the schema document was parsed.
"""

from .models import (
    ColumnInfo,
    ForeignKeyInfo,
    IndexInfo,
    ManyToManyRelation,
    RelationInfo,
    RelationType,
    TableModel,
)

from .schemas import (
    ComponentSchema,
    PropertySchema,
)

from .field_mapping import FieldTypeMapper

from .eligibility import EligibilityFilter

from .junctions import (
    JunctionDescriptor,
    JunctionSchemaDetector,
    JunctionSchemas,
)

from .attributes import AttributeResolver

from .constraints import (
    IndexResolver,
    IndexSpec,
    parse_index_spec,
)

from .naming import (
    to_snake_case,
    pluralize,
    generate_table_name,
    generate_foreign_key_column,
    generate_relationship_name,
    generate_index_name,
    generate_via_names,
)

__all__ = [
    # Core models
    'ColumnInfo',
    'ForeignKeyInfo',
    'IndexInfo',
    'ManyToManyRelation',
    'RelationInfo',
    'RelationType',
    'TableModel',

    # Schema wrappers
    'ComponentSchema',
    'PropertySchema',
    'FieldTypeMapper',

    # Resolution
    'EligibilityFilter',
    'JunctionDescriptor',
    'JunctionSchemaDetector',
    'JunctionSchemas',
    'AttributeResolver',

    # Indexes
    'IndexResolver',
    'IndexSpec',
    'parse_index_spec',

    # Naming
    'to_snake_case',
    'pluralize',
    'generate_table_name',
    'generate_foreign_key_column',
    'generate_relationship_name',
    'generate_index_name',
    'generate_via_names',
]
