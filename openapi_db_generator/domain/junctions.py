"""
Junction schema detection for OpenAPI DB Generator.

A junction schema is a prefixed schema (``junction_PostTag``) whose purpose is
to link two other schemas pairwise. Each linked schema declares an array of
references back to the junction, which makes the pair a many-to-many relation.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..constants import DefaultConfig
from ..exceptions import StructuralDocumentError
from .eligibility import EligibilityFilter
from .naming import generate_foreign_key_column, trim_prefix
from .schemas import ComponentSchema, PropertySchema


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JunctionDescriptor:
    """
    One side of a junction pair, seen from ``schema_name``.

    ``schema_name.ref_property`` is the array property pointing at the
    junction; through it ``schema_name`` is many-to-many with
    ``target_class_name``. In the junction table ``pair_property`` points at
    ``schema_name`` and ``owner_property`` points at ``target_class_name``.
    The other descriptor of the pair has the two properties swapped.
    """

    junction_schema_name: str
    junction_table_name: str
    owner_property: str
    target_class_name: str
    pair_property: str
    schema_name: str
    ref_property: str
    related_table_name: str
    foreign_pk_column: str
    python_type: str
    db_type: str

    @property
    def owner_column(self) -> str:
        """Junction table column pointing at ``target_class_name``."""
        return generate_foreign_key_column(self.owner_property)

    @property
    def pair_column(self) -> str:
        """Junction table column pointing at ``schema_name``."""
        return generate_foreign_key_column(self.pair_property)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'junction_schema_name': self.junction_schema_name,
            'junction_table_name': self.junction_table_name,
            'owner_property': self.owner_property,
            'target_class_name': self.target_class_name,
            'pair_property': self.pair_property,
            'schema_name': self.schema_name,
            'ref_property': self.ref_property,
            'related_table_name': self.related_table_name,
            'foreign_pk_column': self.foreign_pk_column,
            'python_type': self.python_type,
            'db_type': self.db_type,
        }


@dataclass(frozen=True)
class _ReciprocalReference:
    """A junction property whose target schema references the junction back."""

    property: str
    target_class_name: str
    reciprocal_property: str
    related_table_name: str
    foreign_pk_column: str
    python_type: str
    db_type: str


class JunctionSchemas:
    """
    The validated junction descriptors of a document, indexed for lookups.

    Descriptors always come in mirrored pairs, one per linked schema.
    """

    def __init__(
        self,
        descriptors: Iterable[JunctionDescriptor] = (),
        prefix: str = DefaultConfig.JUNCTION_PREFIX,
        link_only: Iterable[str] = (),
    ):
        self.prefix = prefix
        self._descriptors: List[JunctionDescriptor] = list(descriptors)
        self._link_only: Set[str] = set(link_only)
        self._by_ref: Dict[Tuple[str, str], JunctionDescriptor] = {}
        self._by_junction: Dict[str, List[JunctionDescriptor]] = {}

        for descriptor in self._descriptors:
            self._by_ref[(descriptor.schema_name, descriptor.ref_property)] = descriptor
            self._by_junction.setdefault(descriptor.junction_schema_name, []).append(descriptor)

    def __iter__(self) -> Iterator[JunctionDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def junction_schema_names(self) -> List[str]:
        return list(self._by_junction.keys())

    def is_junction_schema(self, schema_name: str) -> bool:
        return schema_name in self._by_junction

    def is_link_only(self, schema_name: str) -> bool:
        """True when the junction carries nothing but its two link properties."""
        return schema_name in self._link_only

    def trim_prefix(self, schema_name: str) -> str:
        return trim_prefix(schema_name, self.prefix)

    def is_junction_ref(self, schema_name: str, property_name: str) -> bool:
        return (schema_name, property_name) in self._by_ref

    def by_junction_ref(self, schema_name: str, property_name: str) -> Optional[JunctionDescriptor]:
        return self._by_ref.get((schema_name, property_name))

    def by_junction_schema(self, schema_name: str) -> List[JunctionDescriptor]:
        return list(self._by_junction.get(schema_name, []))

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: [descriptor.to_dict() for descriptor in descriptors]
            for name, descriptors in self._by_junction.items()
        }


class JunctionSchemaDetector:
    """
    Finds junction schemas in a document and validates them.

    Only schemas that pass the eligibility filter are considered, so an
    excluded schema is never a junction candidate.
    """

    def __init__(
        self,
        eligibility: EligibilityFilter,
        prefix: str = DefaultConfig.JUNCTION_PREFIX,
    ):
        self.eligibility = eligibility
        self.prefix = prefix

    def detect(self, document) -> JunctionSchemas:
        """
        Scan all schemas of the document for junctions.

        Args:
            document: SchemaDocument to scan

        Returns:
            JunctionSchemas holding two mirrored descriptors per junction

        Raises:
            StructuralDocumentError: If a junction schema does not link
                exactly two other schemas
        """
        descriptors: List[JunctionDescriptor] = []
        link_only: List[str] = []

        for schema_name, schema in document.items():
            if not schema_name.startswith(self.prefix):
                continue
            if not self.eligibility.can_generate_model(schema_name, schema):
                logger.debug(f"Skipping junction candidate '{schema_name}': not eligible for a table")
                continue

            references = self._find_reciprocal_references(schema_name, schema)
            if len(references) != 2:
                logger.error(
                    f"Junction schema '{schema_name}' has {len(references)} reciprocal references"
                )
                message = (
                    f"Junction table must reference exactly two other schemas: "
                    f"'{schema_name}' references {len(references)}"
                )
                self_target = self._self_referenced_schema(schema)
                if self_target is not None:
                    message += (
                        "; a self-referencing junction needs one back-reference array "
                        f"on '{self_target}' for each of its link properties"
                    )
                raise StructuralDocumentError(
                    message,
                    junction_schema=schema_name,
                    reference_count=len(references),
                )

            table_name = schema.resolve_table_name(trim_prefix(schema_name, self.prefix))
            descriptors.extend(self._pair(schema_name, table_name, references))

            if self._is_link_only(schema, references):
                link_only.append(schema_name)

            logger.info(
                f"Detected junction schema '{schema_name}' linking "
                f"'{references[0].target_class_name}' and '{references[1].target_class_name}'"
            )

        return JunctionSchemas(descriptors, prefix=self.prefix, link_only=link_only)

    def _find_reciprocal_references(
        self, schema_name: str, schema: ComponentSchema
    ) -> List[_ReciprocalReference]:
        references: List[_ReciprocalReference] = []
        claimed: Set[Tuple[str, str]] = set()

        for prop in schema.get_properties():
            if not prop.is_reference():
                continue
            related_name = prop.ref_schema_name
            related_schema = prop.get_ref_schema()
            if not self.eligibility.can_generate_model(related_name, related_schema):
                logger.debug(f"'{schema_name}.{prop.name}' references non-table schema '{related_name}'")
                continue
            foreign_pk = prop.get_target_property()
            if foreign_pk is None:
                logger.debug(f"'{schema_name}.{prop.name}': '{related_name}' has no primary key property")
                continue

            reciprocal = self._find_reciprocal_property(schema_name, related_name, related_schema, claimed)
            if reciprocal is None:
                continue
            claimed.add((related_name, reciprocal.name))

            references.append(_ReciprocalReference(
                property=prop.name,
                target_class_name=related_name,
                reciprocal_property=reciprocal.name,
                related_table_name=related_schema.resolve_table_name(related_name),
                foreign_pk_column=foreign_pk.name,
                python_type=foreign_pk.guess_python_type(),
                db_type=foreign_pk.guess_db_type(for_reference=True),
            ))

        return references

    @staticmethod
    def _find_reciprocal_property(
        junction_name: str,
        related_name: str,
        related_schema: ComponentSchema,
        claimed: Set[Tuple[str, str]],
    ) -> Optional[PropertySchema]:
        """First array property of the related schema pointing back at the junction."""
        for candidate in related_schema.get_properties():
            if not candidate.has_ref_items():
                continue
            # a self-referencing junction needs two different back references
            if (related_name, candidate.name) in claimed:
                continue
            if candidate.ref_schema_name == junction_name:
                return candidate
        return None

    @staticmethod
    def _self_referenced_schema(schema: ComponentSchema) -> Optional[str]:
        """Schema referenced by more than one link property of the junction, if any."""
        targets = [prop.ref_schema_name for prop in schema.get_properties() if prop.is_reference()]
        for target in targets:
            if targets.count(target) > 1:
                return target
        return None

    @staticmethod
    def _pair(
        junction_name: str, table_name: str, references: List[_ReciprocalReference]
    ) -> List[JunctionDescriptor]:
        """Cross-link two reciprocal references into a mirrored descriptor pair."""
        first, second = references
        return [
            JunctionSchemaDetector._describe(junction_name, table_name, first, second),
            JunctionSchemaDetector._describe(junction_name, table_name, second, first),
        ]

    @staticmethod
    def _describe(
        junction_name: str,
        table_name: str,
        target: _ReciprocalReference,
        side: _ReciprocalReference,
    ) -> JunctionDescriptor:
        return JunctionDescriptor(
            junction_schema_name=junction_name,
            junction_table_name=table_name,
            owner_property=target.property,
            target_class_name=target.target_class_name,
            pair_property=side.property,
            schema_name=side.target_class_name,
            ref_property=side.reciprocal_property,
            related_table_name=target.related_table_name,
            foreign_pk_column=target.foreign_pk_column,
            python_type=target.python_type,
            db_type=target.db_type,
        )

    @staticmethod
    def _is_link_only(schema: ComponentSchema, references: List[_ReciprocalReference]) -> bool:
        link_properties = {ref.property for ref in references}
        return all(
            prop.name in link_properties or prop.name == schema.pk_name
            for prop in schema.get_properties()
        )
