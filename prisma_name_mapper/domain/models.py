"""
Domain models for Prisma Name Mapper.

Catalog rows come from the database (or a catalog file); the parse cursor and
directive entries only live for the duration of one schema pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class TableEntry:
    """A table listed in the database catalog."""
    name: str


@dataclass(frozen=True)
class ColumnEntry:
    """A column listed in the database catalog."""
    table_name: str
    name: str


def column_key(table_name: str, column_name: str) -> str:
    """Build the lookup key used by the column mapping."""
    return f"{table_name}.{column_name}"


@dataclass(frozen=True)
class CatalogMappings:
    """
    Ground-truth renames built from the catalog.

    Attributes:
        tables: raw table name -> model name
        columns: "raw_table.raw_column" -> field name
    """
    tables: Mapping[str, str] = field(default_factory=dict)
    columns: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mappings so they can be shared between passes
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def column(self, table_name: str, column_name: str) -> Optional[str]:
        return self.columns.get(column_key(table_name, column_name))


class LineKind(Enum):
    """Categories a schema line can fall into, in matching priority order."""
    MODEL_HEADER = "model_header"
    BLOCK_CLOSE = "block_close"
    TABLE_MAP = "table_map"
    DIRECTIVE = "directive"
    FIELD = "field"
    OTHER = "other"


@dataclass
class ParseCursor:
    """Where the schema walker is: which model block is open and its table."""
    model_name: Optional[str] = None
    table_name: Optional[str] = None
    in_block: bool = False
    table_has_map: bool = False

    def open(self, model_name: str, table_name: str, table_has_map: bool) -> None:
        self.model_name = model_name
        self.table_name = table_name
        self.in_block = True
        self.table_has_map = table_has_map

    def close(self) -> None:
        self.model_name = None
        self.table_name = None
        self.in_block = False
        self.table_has_map = False


@dataclass(frozen=True)
class DirectiveFieldEntry:
    """One entry of a directive field list, e.g. ``created_at(sort: Desc)``."""
    identifier: str
    parameter_suffix: str = ""

    def render(self, identifier: Optional[str] = None) -> str:
        return (identifier or self.identifier) + self.parameter_suffix
