"""
Convert an OpenAPI description into a database schema.

There are two ways to choose which schemas become tables:

1. let the resolver guess: every object schema with properties that is not
   composite, excluded or underscore-prefixed becomes a table;
2. set ``generateModelsOnlyXTable`` and mark table schemas explicitly with
   ``x-table``.

Schema definition rules used for the conversion::

    components:
      schemas:
        ModelName:                 # table name becomes model_names
          description:             # used as table comment
          required: [id, some]     # required properties are NOT NULL
          x-table: custom_table    # explicit table name (false: never a table)
          x-pk: pid                # primary key property if not "id"
          x-indexes:
            - propertyName
            - propertyName1,propertyName2
            - 'gin:propertyName'   # index type
            - 'unique:propertyName'
          properties:
            prop_name:
              type:                # string|integer|number|boolean|array|object
              format:
              minimum / maximum / minLength / maxLength / default
              x-db-type:           # custom column type (JSONB, UUID, ...)

Many-to-many relations go through either a ``junction_``-prefixed schema
referencing both sides, or a link table when both sides list each other.
"""

import logging
from typing import Dict, Optional

from .colored_logging import log_highlight, log_progress, log_success
from .config import ResolverConfig
from .domain.attributes import AttributeResolver
from .domain.eligibility import EligibilityFilter
from .domain.junctions import JunctionSchemaDetector, JunctionSchemas
from .domain.models import TableModel
from .document import SchemaDocument


logger = logging.getLogger(__name__)


class SchemaToDatabase:
    """
    Derives the relational model of a schema document.

    Resolution runs in two strictly sequential phases: every eligible schema
    is resolved into a table model first, then many-to-many relations are
    linked against the complete set of models.
    """

    def __init__(self, document: SchemaDocument, config: Optional[ResolverConfig] = None):
        self.document = document
        self.config = config or ResolverConfig()
        self.eligibility = EligibilityFilter.from_config(self.config)

    def find_junction_schemas(self) -> JunctionSchemas:
        """
        Detect and validate the junction schemas of the document.

        Raises:
            StructuralDocumentError: If a junction schema does not link
                exactly two other schemas
        """
        detector = JunctionSchemaDetector(self.eligibility, prefix=self.config.junction_prefix)
        return detector.detect(self.document)

    def can_generate_model(self, schema_name: str, schema) -> bool:
        return self.eligibility.can_generate_model(schema_name, schema)

    def prepare_models(self) -> Dict[str, TableModel]:
        """
        Resolve all eligible schemas into table models.

        Returns:
            Mapping of model name (junction prefix trimmed) to table model,
            in document order

        Raises:
            StructuralDocumentError: If a junction schema is malformed; no
                models are returned in that case
        """
        log_progress(logger, "Analyzing schema document for database tables")
        junctions = self.find_junction_schemas()

        models = self._resolve_tables(junctions)
        self._link_many_to_many(models)

        # TODO generate inverse (has-many) relations for plain references A -> B

        log_success(logger, f"Resolved {len(models)} table models")
        return models

    def _resolve_tables(self, junctions: JunctionSchemas) -> Dict[str, TableModel]:
        models: Dict[str, TableModel] = {}

        for schema_name, schema in self.document.items():
            if not self.can_generate_model(schema_name, schema):
                log_highlight(logger, f"Skipping schema '{schema_name}': no table")
                continue

            model_name = schema_name
            if junctions.is_junction_schema(schema_name):
                model_name = junctions.trim_prefix(schema_name)
                if junctions.is_link_only(schema_name):
                    logger.debug(f"Junction '{schema_name}' only links two tables, no model generated")
                    continue

            resolver = AttributeResolver(
                schema_name, schema, junctions, self.eligibility, model_name=model_name
            )
            models[model_name] = resolver.resolve()
            logger.debug(f"Resolved '{schema_name}' as table '{models[model_name].table_name}'")

        return models

    @staticmethod
    def _link_many_to_many(models: Dict[str, TableModel]):
        """Fill the many-to-many fields that need the complete table set."""
        for model in models.values():
            for relation in model.many_to_many:
                related_model = models[relation.related_schema_name]
                relation.resolve(
                    has_via_model=relation.via_model_name in models,
                    pk_attribute=model.get_pk_attribute(),
                    related_pk_attribute=related_model.get_pk_attribute(),
                )


def prepare_models(document: SchemaDocument, config: Optional[ResolverConfig] = None) -> Dict[str, TableModel]:
    """Convenience wrapper around :meth:`SchemaToDatabase.prepare_models`."""
    return SchemaToDatabase(document, config).prepare_models()
