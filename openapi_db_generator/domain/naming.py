"""
Naming convention utilities for OpenAPI DB Generator.

This module converts schema and property names from an OpenAPI document into
table, column, index and relation names used by the relational model.
"""

import re
from typing import List, Optional
import inflect

from ..constants import DefaultConfig, IndexDefaults


# Initialize inflect engine for pluralization
p = inflect.engine()


def to_snake_case(name: str) -> str:
    """
    Convert CamelCase or PascalCase to snake_case.

    Args:
        name: The string to convert to snake_case

    Returns:
        The converted snake_case string

    Example:
        >>> to_snake_case("UserAccount")
        'user_account'
        >>> to_snake_case("XMLHttpRequest")
        'xml_http_request'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    name = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub("__([A-Z])", r"_\1", name)
    name = re.sub("([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.lower()


def pluralize(name: str) -> str:
    """
    Pluralize the last word of a schema name.

    Example:
        >>> pluralize("Category")
        'Categories'
    """
    if not name:
        return name
    return p.plural(name)


def generate_table_name(schema_name: str) -> str:
    """
    Generate the default table name for a schema.

    Args:
        schema_name: Component schema name (e.g., 'PostTag')

    Returns:
        Plural snake_case table name (e.g., 'post_tags')
    """
    return to_snake_case(pluralize(schema_name))


def generate_foreign_key_column(property_name: str) -> str:
    """
    Generate the foreign key column name for a reference property.

    Example:
        >>> generate_foreign_key_column("author")
        'author_id'
        >>> generate_foreign_key_column("domain_id")
        'domain_id'
    """
    suffix = f"_{DefaultConfig.PRIMARY_KEY_NAME}"
    if property_name.endswith(suffix):
        return property_name
    return f"{property_name}{suffix}"


def generate_relationship_name(column_name: str) -> str:
    """
    Generate a relationship name from a foreign key column name.

    Args:
        column_name: Foreign key column name (e.g., 'author_id')

    Returns:
        Relationship name (e.g., 'author')
    """
    if column_name.endswith('_id'):
        return column_name[:-3]
    return column_name


def generate_foreign_key_name(table: str, column: str, ref_table: str, ref_column: str) -> str:
    """Generate a foreign key constraint name, e.g. 'fk_posts_author_id_users_id'."""
    return f"fk_{table}_{column}_{ref_table}_{ref_column}"


def generate_index_name(
    table: str,
    columns: List[str],
    is_unique: bool = False,
    method: Optional[str] = None
) -> str:
    """
    Generate an index name from its table and columns.

    Example:
        >>> generate_index_name("users", ["email"], is_unique=True)
        'users_email_key'
        >>> generate_index_name("posts", ["tags"], method="gin")
        'posts_tags_gin_index'
    """
    if is_unique:
        suffix = IndexDefaults.UNIQUE_SUFFIX
    elif method:
        suffix = f"{method}_{IndexDefaults.INDEX_SUFFIX}"
    else:
        suffix = IndexDefaults.INDEX_SUFFIX
    return "_".join([table, *columns, suffix])


def generate_via_names(schema_name: str, related_schema_name: str):
    """
    Generate the link table and model names for a many-to-many relation
    that has no junction schema.

    The pair is ordered by table name so both sides agree on the names.

    Returns:
        Tuple of (via_table_name, via_model_name), e.g. ('posts2tags', 'Posts2Tags')
    """
    sides = sorted(
        [(generate_table_name(schema_name), pluralize(schema_name)),
         (generate_table_name(related_schema_name), pluralize(related_schema_name))]
    )
    via_table = "2".join(table for table, _ in sides)
    via_model = "2".join(model for _, model in sides)
    return via_table, via_model


def trim_prefix(name: str, prefix: str) -> str:
    """Remove ``prefix`` from the start of ``name`` when present."""
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name
