# File: tests/conftest.py
# Contains pytest fixtures for loading the OpenAPI documents used in tests.

import pytest
from pathlib import Path
from typing import Any, Callable, Dict

from openapi_db_generator import OpenApiDocument, ResolverConfig, load_document


# --- Constants ---
TESTS_DIR = Path(__file__).parent
SPECS_DIR = TESTS_DIR / "specs"


@pytest.fixture(scope="session")
def specs_dir() -> Path:
    return SPECS_DIR


@pytest.fixture
def blog_document() -> OpenApiDocument:
    return load_document(SPECS_DIR / "blog.yaml")


@pytest.fixture
def many2many_document() -> OpenApiDocument:
    return load_document(SPECS_DIR / "many2many.yaml")


@pytest.fixture
def relations_document() -> OpenApiDocument:
    return load_document(SPECS_DIR / "relations.yaml")


@pytest.fixture
def blog_config() -> ResolverConfig:
    return ResolverConfig(excludeModels=["Error"])


@pytest.fixture
def make_document() -> Callable[[Dict[str, Any]], OpenApiDocument]:
    """Factory building a document from a mapping of component schemas."""

    def _make(schemas: Dict[str, Any]) -> OpenApiDocument:
        return OpenApiDocument({
            "openapi": "3.0.3",
            "info": {"title": "Test", "version": "1.0.0"},
            "paths": {},
            "components": {"schemas": schemas},
        })

    return _make
