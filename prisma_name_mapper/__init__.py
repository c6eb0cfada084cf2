"""
Prisma Name Mapper.

Rewrites a Prisma schema pulled from MySQL so models are singular PascalCase
and fields camelCase, keeping @@map/@map annotations to the database names.
"""

from .domain import (
    TableEntry,
    ColumnEntry,
    CatalogMappings,
    NamingPolicy,
    InflectNamingPolicy,
    build_catalog_mappings,
)
from .directives import rewrite_directive_fields
from .schema_walker import SchemaTransformer, transform_schema

__all__ = [
    'TableEntry',
    'ColumnEntry',
    'CatalogMappings',
    'NamingPolicy',
    'InflectNamingPolicy',
    'build_catalog_mappings',
    'rewrite_directive_fields',
    'SchemaTransformer',
    'transform_schema',
]
