"""
Core domain models for OpenAPI DB Generator.

These models describe the relational data model derived from an OpenAPI
document: tables, columns, keys, indexes and relations. They are produced by
the resolver and consumed read-only by downstream renderers (model classes,
migrations, fake data generators).
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple
from enum import Enum


class RelationType(Enum):
    """Types of relations between table models."""

    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    MANY_TO_MANY = "many_to_many"


@dataclass
class ColumnInfo:
    """
    Represents a database column derived from one schema property.

    Column order inside a table follows the property order of the schema.
    """

    # Basic properties
    name: str
    property_name: str
    db_type: str
    python_type: str
    nullable: bool = True
    default: Optional[Any] = None

    # Constraints
    size: Optional[int] = None  # maxLength
    min_length: Optional[int] = None
    minimum: Optional[Any] = None
    maximum: Optional[Any] = None
    enum_values: Optional[List[Any]] = None

    # Keys
    is_pk: bool = False
    is_foreign_key: bool = False
    foreign_key_to: Optional[Tuple[str, str]] = None  # (table_name, column_name)

    # Metadata
    description: str = ""
    read_only: bool = False

    def __post_init__(self):
        if self.is_pk:
            self.nullable = False

    @property
    def is_required(self) -> bool:
        """Check if this column is required (not nullable and no default)."""
        return not self.nullable and self.default is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'property_name': self.property_name,
            'db_type': self.db_type,
            'python_type': self.python_type,
            'nullable': self.nullable,
            'default': self.default,
            'size': self.size,
            'min_length': self.min_length,
            'minimum': self.minimum,
            'maximum': self.maximum,
            'enum_values': self.enum_values,
            'is_pk': self.is_pk,
            'is_foreign_key': self.is_foreign_key,
            'foreign_key_to': self.foreign_key_to,
            'description': self.description,
            'read_only': self.read_only,
        }


@dataclass
class ForeignKeyInfo:
    """A foreign key constraint from one column to another table's key."""

    name: str
    column: str
    referenced_table: str
    referenced_column: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'column': self.column,
            'referenced_table': self.referenced_table,
            'referenced_column': self.referenced_column,
        }


@dataclass
class RelationInfo:
    """
    A has-one or has-many relation.

    ``link`` maps the column on the related table to the column on the
    owning table, e.g. ``{'id': 'author_id'}`` for a post's author.
    """

    name: str
    relation_type: RelationType
    related_schema_name: str
    related_table_name: str
    link: Dict[str, str] = field(default_factory=dict)

    @property
    def is_has_many(self) -> bool:
        return self.relation_type == RelationType.HAS_MANY

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'relation_type': self.relation_type.value,
            'related_schema_name': self.related_schema_name,
            'related_table_name': self.related_table_name,
            'link': dict(self.link),
        }


@dataclass
class ManyToManyRelation:
    """
    A many-to-many relation through a link table.

    ``has_via_model``, ``pk_attribute`` and ``related_pk_attribute`` stay
    unset (None) until every table model of the document exists; the
    orchestrator fills them with :meth:`resolve`.
    """

    name: str
    schema_name: str
    table_name: str
    related_schema_name: str
    related_table_name: str
    via_table_name: str
    via_model_name: str
    via_column: str  # link table column pointing at the owning table
    via_related_column: str  # link table column pointing at the related table
    from_junction: bool = False

    has_via_model: Optional[bool] = None
    pk_attribute: Optional[str] = None
    related_pk_attribute: Optional[str] = None

    @property
    def relation_type(self) -> RelationType:
        return RelationType.MANY_TO_MANY

    @property
    def is_resolved(self) -> bool:
        """Check if the cross-table fields have been filled in."""
        return (
            self.has_via_model is not None
            and self.pk_attribute is not None
            and self.related_pk_attribute is not None
        )

    def resolve(self, has_via_model: bool, pk_attribute: str, related_pk_attribute: str):
        """Fill in the fields that depend on the complete table set."""
        self.has_via_model = has_via_model
        self.pk_attribute = pk_attribute
        self.related_pk_attribute = related_pk_attribute

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'relation_type': self.relation_type.value,
            'schema_name': self.schema_name,
            'table_name': self.table_name,
            'related_schema_name': self.related_schema_name,
            'related_table_name': self.related_table_name,
            'via_table_name': self.via_table_name,
            'via_model_name': self.via_model_name,
            'via_column': self.via_column,
            'via_related_column': self.via_related_column,
            'from_junction': self.from_junction,
            'has_via_model': self.has_via_model,
            'pk_attribute': self.pk_attribute,
            'related_pk_attribute': self.related_pk_attribute,
        }


@dataclass
class IndexInfo:
    """Information about a database index."""

    name: str
    columns: List[str]
    is_unique: bool = False
    method: Optional[str] = None  # btree, hash, gin, gist, etc.

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'columns': list(self.columns),
            'is_unique': self.is_unique,
            'method': self.method,
        }


@dataclass
class TableModel:
    """
    Represents one database table resolved from a component schema.

    This is the aggregate handed to the renderers: columns in property order,
    foreign keys, indexes and relations.
    """

    name: str  # model name (junction prefix trimmed)
    table_name: str
    pk_name: str
    schema_name: Optional[str] = None  # schema name as written in the document
    description: str = ""
    is_junction: bool = False

    columns: List[ColumnInfo] = field(default_factory=list)
    foreign_keys: List[ForeignKeyInfo] = field(default_factory=list)
    indexes: List[IndexInfo] = field(default_factory=list)
    relations: List[RelationInfo] = field(default_factory=list)
    many_to_many: List[ManyToManyRelation] = field(default_factory=list)

    def __post_init__(self):
        if self.schema_name is None:
            self.schema_name = self.name

    @property
    def one_to_many(self) -> List[RelationInfo]:
        """Has-many relations owned by this table."""
        return [rel for rel in self.relations if rel.is_has_many]

    @property
    def has_one(self) -> List[RelationInfo]:
        return [rel for rel in self.relations if not rel.is_has_many]

    @property
    def foreign_key_columns(self) -> List[ColumnInfo]:
        return [col for col in self.columns if col.is_foreign_key]

    def get_pk_attribute(self) -> str:
        """Name of the primary key column."""
        return self.pk_name

    def get_column(self, name: str) -> Optional[ColumnInfo]:
        """Get a column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def get_column_by_property(self, property_name: str) -> Optional[ColumnInfo]:
        for col in self.columns:
            if col.property_name == property_name:
                return col
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'schema_name': self.schema_name,
            'table_name': self.table_name,
            'pk_name': self.pk_name,
            'description': self.description,
            'is_junction': self.is_junction,
            'columns': [col.to_dict() for col in self.columns],
            'foreign_keys': [fk.to_dict() for fk in self.foreign_keys],
            'indexes': [index.to_dict() for index in self.indexes],
            'relations': [rel.to_dict() for rel in self.relations],
            'one_to_many': [rel.to_dict() for rel in self.one_to_many],
            'many_to_many': [rel.to_dict() for rel in self.many_to_many],
        }
