"""
Wrappers around parsed OpenAPI component schemas and their properties.

The wrappers only read already-parsed mappings. Cross-schema references are
followed lazily by name through the owning document, so cyclic references
(A -> B -> A) never build an object graph.
"""

from typing import Any, Dict, List, Mapping, Optional, Set, TYPE_CHECKING

from ..constants import (
    COMPOSITE_KEYWORDS,
    DefaultConfig,
    OpenApiTypes,
    SchemaExtensions,
)
from ..exceptions import SchemaDocumentError
from .field_mapping import default_mapper
from .naming import generate_table_name

if TYPE_CHECKING:
    from ..document import SchemaDocument


def _parse_ref(ref: str):
    """
    Split a local reference into (schema_name, property_name).

    '#/components/schemas/Post' -> ('Post', None)
    '#/components/schemas/Post/properties/title' -> ('Post', 'title')
    """
    if not isinstance(ref, str) or not ref.startswith(DefaultConfig.SCHEMA_REF_PREFIX):
        raise SchemaDocumentError(
            f"Unsupported reference '{ref}': only local component schema references are resolved",
            reference=str(ref),
        )
    parts = ref[len(DefaultConfig.SCHEMA_REF_PREFIX):].split("/")
    if len(parts) == 1 and parts[0]:
        return parts[0], None
    if len(parts) == 3 and parts[1] == "properties":
        return parts[0], parts[2]
    raise SchemaDocumentError(f"Malformed reference '{ref}'", reference=ref)


class PropertySchema:
    """
    One property of a component schema.

    A property is exactly one of: scalar, single reference to another schema,
    or array of references to another schema. A reference to another schema's
    property (``#/components/schemas/X/properties/y``) is scalar: its
    definition is copied from the target and local keys override it.
    """

    def __init__(
        self,
        name: str,
        data: Mapping[str, Any],
        document: Optional["SchemaDocument"] = None,
        is_pk: bool = False,
    ):
        self.name = name
        self.document = document
        self.is_pk = is_pk
        self.data = self._inline_property_pointer(dict(data or {}))

    def _inline_property_pointer(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ref = data.get("$ref")
        if ref is None:
            return data
        schema_name, property_name = _parse_ref(ref)
        if property_name is None:
            return data
        target = self._lookup_schema(schema_name, ref).get_property(property_name)
        if target is None:
            raise SchemaDocumentError(
                f"Property '{property_name}' not found in schema '{schema_name}'",
                schema=schema_name,
                reference=ref,
            )
        merged = dict(target.data)
        merged.update({key: value for key, value in data.items() if key != "$ref"})
        return merged

    def _lookup_schema(self, schema_name: str, ref: str) -> "ComponentSchema":
        if self.document is None:
            raise SchemaDocumentError(
                f"Cannot follow reference '{ref}' without a document", reference=ref
            )
        schema = self.document.get_schema(schema_name)
        if schema is None:
            raise SchemaDocumentError(
                f"Unresolvable reference '{ref}'", schema=schema_name, reference=ref
            )
        return schema

    # --- classification ---

    @property
    def _ref(self) -> Optional[str]:
        if "$ref" in self.data:
            return self.data["$ref"]
        # nullable references are commonly written as allOf with a single $ref
        all_of = self.data.get("allOf")
        if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], Mapping):
            return all_of[0].get("$ref")
        return None

    @property
    def _items_ref(self) -> Optional[str]:
        items = self.data.get("items")
        if self.data.get("type") == OpenApiTypes.ARRAY and isinstance(items, Mapping):
            return items.get("$ref")
        return None

    def is_reference(self) -> bool:
        return self._ref is not None

    def has_ref_items(self) -> bool:
        return self._items_ref is not None

    def is_scalar(self) -> bool:
        return not self.is_reference() and not self.has_ref_items()

    @property
    def ref_schema_name(self) -> Optional[str]:
        ref = self._ref or self._items_ref
        if ref is None:
            return None
        return _parse_ref(ref)[0]

    def get_ref_schema(self) -> "ComponentSchema":
        """Follow the reference to the target component schema."""
        ref = self._ref or self._items_ref
        if ref is None:
            raise SchemaDocumentError(
                f"Property '{self.name}' is not a reference", context={'property': self.name}
            )
        return self._lookup_schema(self.ref_schema_name, ref)

    def get_target_property(self) -> Optional["PropertySchema"]:
        """
        Primary key property of the referenced schema, or None when the target
        is not stored in the database or declares no primary key property.
        """
        target = self.get_ref_schema()
        if target.is_non_db():
            return None
        return target.get_property(target.pk_name)

    # --- attributes ---

    @property
    def type(self) -> str:
        if self.has_ref_items():
            return OpenApiTypes.ARRAY
        if self.is_reference():
            return OpenApiTypes.OBJECT
        return self.data.get("type", OpenApiTypes.STRING)

    @property
    def format(self) -> Optional[str]:
        return self.data.get("format")

    @property
    def custom_db_type(self) -> Optional[str]:
        return self.data.get(SchemaExtensions.DB_TYPE)

    @property
    def description(self) -> str:
        return self.data.get("description", "")

    @property
    def read_only(self) -> bool:
        return bool(self.data.get("readOnly", False))

    @property
    def enum(self) -> Optional[List[Any]]:
        return self.data.get("enum")

    @property
    def default(self) -> Optional[Any]:
        return self.data.get("default")

    @property
    def min_length(self) -> Optional[int]:
        return self.data.get("minLength")

    @property
    def max_length(self) -> Optional[int]:
        return self.data.get("maxLength")

    @property
    def minimum(self) -> Optional[Any]:
        return self.data.get("minimum")

    @property
    def maximum(self) -> Optional[Any]:
        return self.data.get("maximum")

    def guess_db_type(self, for_reference: bool = False) -> str:
        return default_mapper.guess_db_type(self, for_reference=for_reference)

    def guess_python_type(self) -> str:
        return default_mapper.guess_python_type(self)

    def __repr__(self) -> str:
        return f"PropertySchema({self.name!r}, type={self.type!r})"


class ComponentSchema:
    """One named schema definition of the document."""

    def __init__(self, data: Mapping[str, Any], document: Optional["SchemaDocument"] = None):
        self.data = data or {}
        self.document = document
        self._properties: Optional[List[PropertySchema]] = None

    # --- classification ---

    def is_object_schema(self) -> bool:
        return self.data.get("type", OpenApiTypes.OBJECT) == OpenApiTypes.OBJECT

    def has_properties(self) -> bool:
        return bool(self.data.get("properties"))

    def is_composite_schema(self) -> bool:
        return any(keyword in self.data for keyword in COMPOSITE_KEYWORDS)

    def is_non_db(self) -> bool:
        """Schemas annotated with ``x-table: false`` are never stored."""
        return self.data.get(SchemaExtensions.TABLE) is False

    def has_custom_table_name(self) -> bool:
        table = self.data.get(SchemaExtensions.TABLE)
        return isinstance(table, str) and bool(table.strip())

    # --- annotations ---

    def resolve_table_name(self, schema_name: str) -> str:
        if self.has_custom_table_name():
            return self.data[SchemaExtensions.TABLE].strip()
        return generate_table_name(schema_name)

    @property
    def pk_name(self) -> str:
        return self.data.get(SchemaExtensions.PRIMARY_KEY) or DefaultConfig.PRIMARY_KEY_NAME

    @property
    def index_specs(self) -> List[str]:
        return list(self.data.get(SchemaExtensions.INDEXES) or [])

    @property
    def required(self) -> Set[str]:
        return set(self.data.get("required") or [])

    @property
    def description(self) -> str:
        return self.data.get("description", "")

    def is_required(self, property_name: str) -> bool:
        return property_name in self.required

    # --- properties ---

    def get_properties(self) -> List[PropertySchema]:
        """Properties in declaration order."""
        if self._properties is None:
            pk_name = self.pk_name
            self._properties = [
                PropertySchema(name, prop_data, self.document, is_pk=(name == pk_name))
                for name, prop_data in (self.data.get("properties") or {}).items()
            ]
        return self._properties

    def get_property(self, name: str) -> Optional[PropertySchema]:
        for prop in self.get_properties():
            if prop.name == name:
                return prop
        return None

    def has_property(self, name: str) -> bool:
        return self.get_property(name) is not None
