"""
Index specification handling for OpenAPI DB Generator.

Schemas declare indexes in ``x-indexes`` as short strings:

    - title                 plain index on one property
    - author,title          composite index
    - gin:tags              index with an explicit type (USING gin)
    - unique:slug           unique index

Property names that are foreign keys are resolved to their column names.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..constants import IndexDefaults
from .models import IndexInfo
from .naming import generate_index_name


logger = logging.getLogger(__name__)


@dataclass
class IndexSpec:
    """A parsed ``x-indexes`` entry, still in terms of property names."""

    properties: List[str]
    is_unique: bool = False
    method: Optional[str] = None


def parse_index_spec(spec: str) -> IndexSpec:
    """
    Parse one index specification string.

    Example:
        >>> parse_index_spec("unique:email")
        IndexSpec(properties=['email'], is_unique=True, method=None)
        >>> parse_index_spec("gin:tags")
        IndexSpec(properties=['tags'], is_unique=False, method='gin')
    """
    if not isinstance(spec, str) or not spec.strip():
        raise ValueError(f"Index specification must be a non-empty string, got {spec!r}")

    is_unique = False
    method = None
    body = spec.strip()

    if IndexDefaults.TAG_SEPARATOR in body:
        tag, body = body.split(IndexDefaults.TAG_SEPARATOR, 1)
        tag = tag.strip()
        if tag.lower() == IndexDefaults.UNIQUE_TAG:
            is_unique = True
        else:
            method = tag

    properties = [part.strip() for part in body.split(IndexDefaults.COLUMN_SEPARATOR) if part.strip()]
    if not properties:
        raise ValueError(f"Index specification '{spec}' names no properties")

    return IndexSpec(properties=properties, is_unique=is_unique, method=method)


class IndexResolver:
    """Turns the ``x-indexes`` entries of one schema into table indexes."""

    def __init__(self, table_name: str, property_columns: Dict[str, str]):
        """
        Args:
            table_name: Table the indexes belong to
            property_columns: Mapping of property name to physical column name
        """
        self.table_name = table_name
        self.property_columns = property_columns

    def resolve(self, specs: List[str]) -> List[IndexInfo]:
        indexes: List[IndexInfo] = []
        seen = set()

        for raw_spec in specs:
            spec = parse_index_spec(raw_spec)
            columns = [self._column_for(prop) for prop in spec.properties]
            name = generate_index_name(self.table_name, columns, spec.is_unique, spec.method)
            if name in seen:
                logger.debug(f"Skipping duplicate index '{name}' on {self.table_name}")
                continue
            seen.add(name)
            indexes.append(IndexInfo(
                name=name,
                columns=columns,
                is_unique=spec.is_unique,
                method=spec.method,
            ))

        return indexes

    def _column_for(self, property_name: str) -> str:
        if property_name not in self.property_columns:
            logger.warning(
                f"Index on {self.table_name} names unknown property '{property_name}', using it as column name"
            )
            return property_name
        return self.property_columns[property_name]
