"""
Attribute resolution for OpenAPI DB Generator.

Turns the properties of one component schema into the columns, foreign keys,
indexes and relations of its table model. Other schemas are only looked up
by name through the document, never resolved into models here.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..constants import DbTypes
from .constraints import IndexResolver
from .eligibility import EligibilityFilter
from .junctions import JunctionDescriptor, JunctionSchemas
from .models import (
    ColumnInfo,
    ForeignKeyInfo,
    ManyToManyRelation,
    RelationInfo,
    RelationType,
    TableModel,
)
from .naming import (
    generate_foreign_key_column,
    generate_foreign_key_name,
    generate_relationship_name,
    generate_via_names,
    to_snake_case,
)
from .schemas import ComponentSchema, PropertySchema


logger = logging.getLogger(__name__)


class AttributeResolver:
    """
    Resolves one eligible schema into a TableModel.

    Many-to-many relations come out with their cross-table fields unset;
    they can only be filled once every table of the document is known.
    Inverse relations (``B has many A`` for a reference ``A -> B``) are not
    generated here.
    """

    def __init__(
        self,
        schema_name: str,
        schema: ComponentSchema,
        junctions: JunctionSchemas,
        eligibility: EligibilityFilter,
        model_name: Optional[str] = None,
    ):
        """
        Args:
            schema_name: Schema name as written in the document
            schema: The schema to resolve
            junctions: Junction descriptors of the whole document
            eligibility: Filter deciding which referenced schemas are tables
            model_name: Key of the model in the result (junction prefix trimmed)
        """
        self.schema_name = schema_name
        self.model_name = model_name or schema_name
        self.schema = schema
        self.junctions = junctions
        self.eligibility = eligibility
        self.table_name = schema.resolve_table_name(self.model_name)

        self.columns: List[ColumnInfo] = []
        self.foreign_keys: List[ForeignKeyInfo] = []
        self.relations: List[RelationInfo] = []
        self.many_to_many: List[ManyToManyRelation] = []
        self.property_columns: Dict[str, str] = {}

    def resolve(self) -> TableModel:
        """Resolve all properties, in declaration order."""
        logger.debug(f"Resolving attributes of '{self.schema_name}' into table '{self.table_name}'")

        for prop in self.schema.get_properties():
            if prop.has_ref_items():
                self._resolve_array_reference(prop)
            elif prop.is_reference():
                self._resolve_reference(prop)
            else:
                self._add_column(self._scalar_column(prop), prop)

        indexes = IndexResolver(self.table_name, self.property_columns).resolve(self.schema.index_specs)

        return TableModel(
            name=self.model_name,
            schema_name=self.schema_name,
            table_name=self.table_name,
            pk_name=self.schema.pk_name,
            description=self.schema.description,
            is_junction=self.junctions.is_junction_schema(self.schema_name),
            columns=self.columns,
            foreign_keys=self.foreign_keys,
            indexes=indexes,
            relations=self.relations,
            many_to_many=self.many_to_many,
        )

    # --- columns ---

    def _add_column(self, column: ColumnInfo, prop: PropertySchema):
        self.columns.append(column)
        self.property_columns[prop.name] = column.name

    def _scalar_column(self, prop: PropertySchema, db_type: Optional[str] = None) -> ColumnInfo:
        return ColumnInfo(
            name=prop.name,
            property_name=prop.name,
            db_type=db_type or prop.guess_db_type(),
            python_type=prop.guess_python_type(),
            nullable=not self.schema.is_required(prop.name),
            default=prop.default,
            size=prop.max_length,
            min_length=prop.min_length,
            minimum=prop.minimum,
            maximum=prop.maximum,
            enum_values=prop.enum,
            is_pk=prop.is_pk,
            description=prop.description,
            read_only=prop.read_only,
        )

    def _table_target(self, prop: PropertySchema) -> Optional[Tuple[str, ComponentSchema, PropertySchema]]:
        """
        (schema name, schema, primary key property) of a referenced schema
        that is stored in its own table, or None.
        """
        related_name = prop.ref_schema_name
        related_schema = prop.get_ref_schema()
        if not self.eligibility.can_generate_model(related_name, related_schema):
            return None
        target_pk = prop.get_target_property()
        if target_pk is None:
            return None
        return related_name, related_schema, target_pk

    def _model_key(self, schema_name: str) -> str:
        """Key of a schema in the result mapping (junction prefix trimmed)."""
        if self.junctions.is_junction_schema(schema_name):
            return self.junctions.trim_prefix(schema_name)
        return schema_name

    # --- references ---

    def _resolve_reference(self, prop: PropertySchema):
        target = self._table_target(prop)
        if target is None:
            logger.debug(f"'{self.schema_name}.{prop.name}' references a non-table schema, stored as json")
            self._add_column(self._scalar_column(prop, db_type=DbTypes.JSON), prop)
            return

        related_name, related_schema, target_pk = target
        related_key = self._model_key(related_name)
        related_table = related_schema.resolve_table_name(related_key)
        column_name = generate_foreign_key_column(prop.name)

        column = ColumnInfo(
            name=column_name,
            property_name=prop.name,
            db_type=target_pk.guess_db_type(for_reference=True),
            python_type=target_pk.guess_python_type(),
            nullable=not self.schema.is_required(prop.name),
            default=prop.default,
            is_foreign_key=True,
            foreign_key_to=(related_table, target_pk.name),
            description=prop.description,
            read_only=prop.read_only,
        )
        self._add_column(column, prop)

        self.foreign_keys.append(ForeignKeyInfo(
            name=generate_foreign_key_name(self.table_name, column_name, related_table, target_pk.name),
            column=column_name,
            referenced_table=related_table,
            referenced_column=target_pk.name,
        ))
        self.relations.append(RelationInfo(
            name=generate_relationship_name(column_name),
            relation_type=RelationType.HAS_ONE,
            related_schema_name=related_key,
            related_table_name=related_table,
            link={target_pk.name: column_name},
        ))

    def _resolve_array_reference(self, prop: PropertySchema):
        descriptor = self.junctions.by_junction_ref(self.schema_name, prop.name)
        if descriptor is not None:
            self.many_to_many.append(self._junction_relation(prop, descriptor))
            return

        target = self._table_target(prop)
        if target is None:
            logger.debug(f"'{self.schema_name}.{prop.name}' lists a non-table schema, stored as json")
            self._add_column(self._scalar_column(prop, db_type=DbTypes.JSON), prop)
            return

        related_name, related_schema, _ = target
        related_key = self._model_key(related_name)
        related_table = related_schema.resolve_table_name(related_key)

        for candidate in related_schema.get_properties():
            if related_name == self.schema_name and candidate.name == prop.name:
                continue
            if candidate.ref_schema_name != self.schema_name:
                continue
            if candidate.is_reference():
                self.relations.append(RelationInfo(
                    name=prop.name,
                    relation_type=RelationType.HAS_MANY,
                    related_schema_name=related_key,
                    related_table_name=related_table,
                    link={generate_foreign_key_column(candidate.name): self.schema.pk_name},
                ))
                return
            if candidate.has_ref_items():
                self.many_to_many.append(
                    self._link_table_relation(prop, related_name, related_key, related_table)
                )
                return

        logger.debug(
            f"'{self.schema_name}.{prop.name}': '{related_name}' has no reference back, relation not generated"
        )

    def _junction_relation(self, prop: PropertySchema, descriptor: JunctionDescriptor) -> ManyToManyRelation:
        return ManyToManyRelation(
            name=prop.name,
            schema_name=self.model_name,
            table_name=self.table_name,
            related_schema_name=self._model_key(descriptor.target_class_name),
            related_table_name=descriptor.related_table_name,
            via_table_name=descriptor.junction_table_name,
            via_model_name=self.junctions.trim_prefix(descriptor.junction_schema_name),
            via_column=descriptor.pair_column,
            via_related_column=descriptor.owner_column,
            from_junction=True,
        )

    def _link_table_relation(
        self, prop: PropertySchema, related_name: str, related_key: str, related_table: str
    ) -> ManyToManyRelation:
        via_table, via_model = generate_via_names(self.model_name, related_key)
        via_column = generate_foreign_key_column(to_snake_case(self.model_name))
        if related_name == self.schema_name:
            via_related_column = generate_foreign_key_column(to_snake_case(prop.name))
        else:
            via_related_column = generate_foreign_key_column(to_snake_case(related_key))

        return ManyToManyRelation(
            name=prop.name,
            schema_name=self.model_name,
            table_name=self.table_name,
            related_schema_name=related_key,
            related_table_name=related_table,
            via_table_name=via_table,
            via_model_name=via_model,
            via_column=via_column,
            via_related_column=via_related_column,
        )
