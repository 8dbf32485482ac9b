"""
Schema document access for OpenAPI DB Generator.

The resolver only talks to the :class:`SchemaDocument` protocol. The
:class:`OpenApiDocument` adapter implements it over an already-parsed
OpenAPI mapping, and :func:`load_document` parses YAML/JSON files with PyYAML.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol, Tuple, Union

import yaml

from .domain.schemas import ComponentSchema
from .exceptions import SchemaDocumentError


logger = logging.getLogger(__name__)


class SchemaDocument(Protocol):
    """Read-only access to the named component schemas of a document."""

    def schema_names(self) -> List[str]:
        """Schema names in document order."""
        ...

    def get_schema(self, name: str) -> Optional[ComponentSchema]:
        """Schema by name, or None when the document does not define it."""
        ...

    def items(self) -> Iterator[Tuple[str, ComponentSchema]]:
        """(name, schema) pairs in document order."""
        ...


class OpenApiDocument:
    """
    SchemaDocument over a parsed OpenAPI 3 mapping.

    Component schemas are wrapped once and kept in a name-keyed table, so
    references between schemas are plain name lookups.
    """

    def __init__(self, spec: Mapping[str, Any]):
        if not isinstance(spec, Mapping):
            raise SchemaDocumentError(
                f"OpenAPI document must be a mapping, got {type(spec).__name__}"
            )
        self.spec = spec
        components = spec.get("components") or {}
        raw_schemas = components.get("schemas") or {}
        if not isinstance(raw_schemas, Mapping):
            raise SchemaDocumentError("'components.schemas' must be a mapping")
        self._raw_schemas = raw_schemas
        self._schemas: Dict[str, ComponentSchema] = {}

    def schema_names(self) -> List[str]:
        return list(self._raw_schemas.keys())

    def get_schema(self, name: str) -> Optional[ComponentSchema]:
        if name not in self._raw_schemas:
            return None
        if name not in self._schemas:
            self._schemas[name] = ComponentSchema(self._raw_schemas[name], self)
        return self._schemas[name]

    def items(self) -> Iterator[Tuple[str, ComponentSchema]]:
        for name in self.schema_names():
            yield name, self.get_schema(name)

    def __len__(self) -> int:
        return len(self._raw_schemas)

    def __contains__(self, name: str) -> bool:
        return name in self._raw_schemas


def load_document(path: Union[str, Path]) -> OpenApiDocument:
    """
    Load an OpenAPI document from a YAML or JSON file.

    Args:
        path: Path to the document

    Returns:
        Parsed document

    Raises:
        SchemaDocumentError: If the file is missing or not a valid mapping
    """
    doc_path = Path(path)
    if not doc_path.is_file():
        raise SchemaDocumentError(
            f"OpenAPI document not found at {doc_path}",
            context={'path': str(doc_path)},
        )

    try:
        with open(doc_path, "r", encoding="utf-8") as f:
            spec = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaDocumentError(
            f"Error parsing OpenAPI document {doc_path}: {e}",
            context={'path': str(doc_path)},
        ) from e

    if not isinstance(spec, dict):
        raise SchemaDocumentError(
            f"Content of {doc_path} is not a mapping",
            context={'path': str(doc_path)},
        )

    logger.debug(f"Loaded OpenAPI document from {doc_path}")
    return OpenApiDocument(spec)
