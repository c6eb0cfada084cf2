"""
Offline catalog source.

Reads the table/column catalog from a YAML file instead of a live database::

    tables:
      order_items:
        - id
        - user_id
      users: [id, email]
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from .domain.models import ColumnEntry, TableEntry
from .exceptions import raise_introspection_error


logger = logging.getLogger(__name__)

Catalog = Tuple[List[TableEntry], List[ColumnEntry]]


def select_tables(
    table_names: Iterable[str],
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> List[str]:
    """Apply include/exclude filters to table names, keeping catalog order."""
    include_set = set(include_tables) if include_tables else None
    exclude_set = set(exclude_tables) if exclude_tables else set()

    selected = []
    for name in table_names:
        if name in exclude_set:
            logger.info(f"Excluding table: {name}")
            continue
        if include_set is not None and name not in include_set:
            logger.debug(f"Skipping table '{name}' (not in include list).")
            continue
        selected.append(name)
    return selected


def filter_catalog(
    tables: List[TableEntry],
    columns: List[ColumnEntry],
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> Catalog:
    """Drop excluded tables, and their columns, from a catalog."""
    selected = set(select_tables((t.name for t in tables), include_tables, exclude_tables))
    return (
        [t for t in tables if t.name in selected],
        [c for c in columns if c.table_name in selected],
    )


def parse_catalog(data: Dict[str, Any], source: str = "<catalog>") -> Catalog:
    """
    Convert the ``tables`` mapping of a catalog document into catalog rows.

    Raises:
        SchemaIntrospectionError: If the document does not have the expected shape
    """
    if not isinstance(data, dict) or not isinstance(data.get("tables"), dict):
        raise_introspection_error(
            "Catalog must be a mapping with a 'tables' key of {table: [columns]}.",
            source=source,
        )

    tables: List[TableEntry] = []
    columns: List[ColumnEntry] = []
    for table_name, column_names in data["tables"].items():
        table_name = str(table_name)
        if column_names is None:
            column_names = []
        if not isinstance(column_names, list):
            raise_introspection_error(
                f"Columns of table '{table_name}' must be a list.",
                table=table_name,
                source=source,
            )
        tables.append(TableEntry(table_name))
        columns.extend(ColumnEntry(table_name, str(name)) for name in column_names)
    return tables, columns


def load_catalog_file(
    path: str,
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> Catalog:
    """
    Load a catalog from a YAML file.

    Raises:
        SchemaIntrospectionError: If the file is missing or malformed
    """
    catalog_path = Path(path)
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise_introspection_error(f"Could not read catalog file: {e}", source=str(catalog_path))
    except yaml.YAMLError as e:
        raise_introspection_error(f"Error parsing catalog file: {e}", source=str(catalog_path))

    tables, columns = parse_catalog(data, source=str(catalog_path))
    logger.info(f"Loaded {len(tables)} tables and {len(columns)} columns from {catalog_path}.")
    return filter_catalog(tables, columns, include_tables, exclude_tables)
