"""
Decides which component schemas produce database tables.

The same filter is used for junction detection and for table resolution, so
a schema that cannot become a table can never be treated as a junction.
"""

from typing import Iterable, Optional

from ..constants import DefaultConfig
from .schemas import ComponentSchema


class EligibilityFilter:
    """
    Eligibility rules for table generation.

    A schema produces a table iff it is an object schema with properties,
    it is not composite, it is not marked ``x-table: false``, it is not
    excluded by name, it is not underscore-prefixed (when skipping is on),
    and it has an ``x-table`` annotation (when only annotated schemas count).
    """

    def __init__(
        self,
        exclude_models: Optional[Iterable[str]] = None,
        skip_underscored_schemas: bool = False,
        generate_models_only_x_table: bool = False,
    ):
        self.exclude_models = set(exclude_models or [])
        self.skip_underscored_schemas = skip_underscored_schemas
        self.generate_models_only_x_table = generate_models_only_x_table

    @classmethod
    def from_config(cls, config) -> "EligibilityFilter":
        return cls(
            exclude_models=config.exclude_models,
            skip_underscored_schemas=config.skip_underscored_schemas,
            generate_models_only_x_table=config.generate_models_only_x_table,
        )

    def can_generate_model(self, schema_name: str, schema: ComponentSchema) -> bool:
        # only object schemas with declared properties become tables
        if not schema.is_object_schema() or not schema.has_properties():
            return False
        if schema.is_composite_schema():
            return False
        if schema.is_non_db():
            return False
        if schema_name in self.exclude_models:
            return False
        if self.skip_underscored_schemas and schema_name.startswith(DefaultConfig.UNDERSCORE_PREFIX):
            return False
        if self.generate_models_only_x_table and not schema.has_custom_table_name():
            return False
        return True
