"""
Tests for reading the catalog from a YAML file
"""

import tempfile
from pathlib import Path
from unittest import TestCase

from prisma_name_mapper.catalog_loader import (
    filter_catalog,
    load_catalog_file,
    parse_catalog,
    select_tables,
)
from prisma_name_mapper.domain.models import ColumnEntry, TableEntry
from prisma_name_mapper.exceptions import SchemaIntrospectionError


CATALOG_YAML = """\
tables:
  order_items:
    - id
    - user_id
  users: [id, email]
  _prisma_migrations:
"""


class TestParseCatalog(TestCase):

    def test_tables_and_columns(self):
        tables, columns = parse_catalog({"tables": {"users": ["id", "email"], "tags": None}})

        assert tables == [TableEntry("users"), TableEntry("tags")]
        assert columns == [ColumnEntry("users", "id"), ColumnEntry("users", "email")]

    def test_missing_tables_key(self):
        with self.assertRaises(SchemaIntrospectionError):
            parse_catalog({"users": ["id"]})

    def test_not_a_mapping(self):
        with self.assertRaises(SchemaIntrospectionError):
            parse_catalog(None)

    def test_columns_must_be_a_list(self):
        with self.assertRaises(SchemaIntrospectionError) as ctx:
            parse_catalog({"tables": {"users": "id"}}, source="catalog.yaml")

        assert ctx.exception.context == {"table": "users", "source": "catalog.yaml"}


class TestSelectTables(TestCase):

    def test_include_and_exclude(self):
        names = ["users", "orders", "_prisma_migrations"]

        assert select_tables(names) == names
        assert select_tables(names, exclude_tables=["_prisma_migrations"]) == ["users", "orders"]
        assert select_tables(names, include_tables=["orders"]) == ["orders"]

    def test_filter_catalog_drops_columns_of_excluded_tables(self):
        tables = [TableEntry("users"), TableEntry("orders")]
        columns = [ColumnEntry("users", "id"), ColumnEntry("orders", "id")]

        tables, columns = filter_catalog(tables, columns, exclude_tables=["orders"])

        assert tables == [TableEntry("users")]
        assert columns == [ColumnEntry("users", "id")]


class TestLoadCatalogFile(TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)
        self.catalog_path = Path(self.tmp_dir.name) / "catalog.yaml"

    def test_load(self):
        self.catalog_path.write_text(CATALOG_YAML, encoding="utf-8")

        tables, columns = load_catalog_file(str(self.catalog_path))

        assert [t.name for t in tables] == ["order_items", "users", "_prisma_migrations"]
        assert ColumnEntry("order_items", "user_id") in columns
        assert len(columns) == 4

    def test_load_with_filters(self):
        self.catalog_path.write_text(CATALOG_YAML, encoding="utf-8")

        tables, columns = load_catalog_file(str(self.catalog_path), exclude_tables=["_prisma_migrations", "users"])

        assert tables == [TableEntry("order_items")]
        assert all(c.table_name == "order_items" for c in columns)

    def test_missing_file(self):
        with self.assertRaises(SchemaIntrospectionError):
            load_catalog_file(str(self.catalog_path))

    def test_invalid_yaml(self):
        self.catalog_path.write_text("tables: [unclosed", encoding="utf-8")

        with self.assertRaises(SchemaIntrospectionError):
            load_catalog_file(str(self.catalog_path))
