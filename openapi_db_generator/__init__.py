"""
OpenAPI DB Generator.

Derives a relational data model (tables, columns, keys, indexes and
relations) from the component schemas of an OpenAPI document.
"""

from .config import ResolverConfig, load_config
from .document import OpenApiDocument, SchemaDocument, load_document
from .exceptions import (
    ConfigurationError,
    OpenApiDbGeneratorError,
    SchemaDocumentError,
    StructuralDocumentError,
)
from .resolver import SchemaToDatabase, prepare_models

__version__ = "0.1.0"

__all__ = [
    'ResolverConfig',
    'load_config',
    'OpenApiDocument',
    'SchemaDocument',
    'load_document',
    'ConfigurationError',
    'OpenApiDbGeneratorError',
    'SchemaDocumentError',
    'StructuralDocumentError',
    'SchemaToDatabase',
    'prepare_models',
]
