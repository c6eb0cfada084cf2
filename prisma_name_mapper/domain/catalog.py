"""
Catalog mapping builder.

Turns the raw table and column listing of the database into the rename maps
consumed by the schema walker and the directive rewriter.
"""

import logging
from typing import Dict, Iterable, Optional

from .models import CatalogMappings, ColumnEntry, TableEntry, column_key
from .naming import DEFAULT_NAMING_POLICY, NamingPolicy


logger = logging.getLogger(__name__)


def build_catalog_mappings(
    tables: Iterable[TableEntry],
    columns: Iterable[ColumnEntry],
    policy: Optional[NamingPolicy] = None,
) -> CatalogMappings:
    """
    Build table and column rename maps from the catalog.

    Only identifiers flagged by the naming policy (all lower-case) are added.
    Table order is kept, since the schema walker takes the first table that
    matches a model.

    Args:
        tables: Catalog table rows
        columns: Catalog column rows
        policy: Naming policy, defaults to the inflect based English policy

    Returns:
        Immutable CatalogMappings
    """
    policy = policy or DEFAULT_NAMING_POLICY

    table_map: Dict[str, str] = {}
    for table in tables:
        if not table.name:
            continue
        if policy.needs_transform(table.name):
            table_map[table.name] = policy.transform_table_name(table.name)

    column_map: Dict[str, str] = {}
    for column in columns:
        if not column.name or not column.table_name:
            continue
        if policy.needs_transform(column.name):
            column_map[column_key(column.table_name, column.name)] = policy.transform_field_name(column.name)

    logger.debug(f"Catalog mappings built: {len(table_map)} tables, {len(column_map)} columns to rename.")
    return CatalogMappings(tables=table_map, columns=column_map)
