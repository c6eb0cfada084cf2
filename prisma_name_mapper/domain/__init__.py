"""
Domain module for Prisma Name Mapper.

Naming rules, catalog rows and the catalog mapping builder, independent of
how the catalog is read or where the schema comes from.
"""

from .models import (
    TableEntry,
    ColumnEntry,
    CatalogMappings,
    DirectiveFieldEntry,
    LineKind,
    ParseCursor,
    column_key,
)

from .naming import (
    NamingPolicy,
    InflectNamingPolicy,
    DEFAULT_NAMING_POLICY,
    needs_transform,
    transform_table_name,
    transform_field_name,
    to_pascal_case,
    to_camel_case,
    singularize,
)

from .catalog import build_catalog_mappings

__all__ = [
    # Core models
    'TableEntry',
    'ColumnEntry',
    'CatalogMappings',
    'DirectiveFieldEntry',
    'LineKind',
    'ParseCursor',
    'column_key',

    # Naming
    'NamingPolicy',
    'InflectNamingPolicy',
    'DEFAULT_NAMING_POLICY',
    'needs_transform',
    'transform_table_name',
    'transform_field_name',
    'to_pascal_case',
    'to_camel_case',
    'singularize',

    # Catalog
    'build_catalog_mappings',
]
