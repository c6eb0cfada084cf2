"""
Tests for the catalog mapping builder
"""

from unittest import TestCase

from prisma_name_mapper.domain.catalog import build_catalog_mappings
from prisma_name_mapper.domain.models import CatalogMappings, ColumnEntry, TableEntry, column_key


class TestBuildCatalogMappings(TestCase):

    def setUp(self):
        self.tables = [TableEntry("order_items"), TableEntry("users"), TableEntry("LegacyTable")]
        self.columns = [
            ColumnEntry("order_items", "user_id"),
            ColumnEntry("order_items", "id"),
            ColumnEntry("users", "createdAt"),
        ]

    def test_table_mapping(self):
        mappings = build_catalog_mappings(self.tables, self.columns)

        assert dict(mappings.tables) == {"order_items": "OrderItem", "users": "User"}

    def test_column_mapping_uses_composite_key(self):
        mappings = build_catalog_mappings(self.tables, self.columns)

        assert mappings.columns["order_items.user_id"] == "userId"
        assert mappings.columns["order_items.id"] == "id"
        assert mappings.column("order_items", "user_id") == "userId"

    def test_mixed_case_identifiers_are_skipped(self):
        mappings = build_catalog_mappings(self.tables, self.columns)

        assert "LegacyTable" not in mappings.tables
        assert "users.createdAt" not in mappings.columns

    def test_table_order_is_kept(self):
        tables = [TableEntry(name) for name in ("zebras", "apples", "mangoes")]
        mappings = build_catalog_mappings(tables, [])

        assert list(mappings.tables) == ["zebras", "apples", "mangoes"]

    def test_empty_names_are_ignored(self):
        mappings = build_catalog_mappings([TableEntry("")], [ColumnEntry("", "x"), ColumnEntry("t", "")])

        assert dict(mappings.tables) == {}
        assert dict(mappings.columns) == {}

    def test_mappings_are_read_only(self):
        mappings = build_catalog_mappings(self.tables, self.columns)

        with self.assertRaises(TypeError):
            mappings.tables["orders"] = "Order"

    def test_empty_catalog(self):
        mappings = build_catalog_mappings([], [])

        assert mappings == CatalogMappings()


class TestColumnKey(TestCase):

    def test_column_key(self):
        assert column_key("order_items", "user_id") == "order_items.user_id"
