"""
Centralized constants for Prisma Name Mapper.

Line patterns of the Prisma schema language and configuration defaults live
here so the walker, the directive rewriter and the CLI agree on them.
"""

import re


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    SCHEMA_PATH = "prisma/schema.prisma"
    OUTPUT_FILENAME = "enhanced-schema-singular.prisma"

    # Environment fallback for the default database connection
    DB_HOST = "localhost"
    DB_USER = "root"
    DB_PASSWORD = ""
    ENV_FILE = ".env"


class SupportedDatabases:
    """Supported database engines."""

    MYSQL = 'django.db.backends.mysql'

    # The catalog format assumes MySQL's information_schema
    SUPPORTED = [MYSQL]


# =============================================================================
# PRISMA SCHEMA SYNTAX
# =============================================================================

class PrismaSyntax:
    """Regular expressions matching the Prisma schema lines we rewrite."""

    # model order_items {
    MODEL_HEADER = re.compile(r"^(\s*)model\s+(\w+)\s+\{")

    BLOCK_CLOSE = "}"

    # @@map("order_items"), @@map('order_items'), @@map(name: "order_items")
    TABLE_MAP = re.compile(r"^\s*@@map\s*\(")
    TABLE_MAP_NAME = re.compile(r"@@map\s*\(\s*(?:name\s*:\s*)?[\"']([^\"']+)[\"']\s*\)")

    # @map("user_id") but not @@map(...)
    FIELD_MAP = re.compile(r"(?<!@)@map\s*\(")

    DIRECTIVE_LINE = re.compile(r"^\s*@@(?:index|unique|id|fulltext)\b")
    # Captures the content of the bracketed field list
    DIRECTIVE_FIELDS = re.compile(
        r"@@(?:index|unique|id|fulltext)\s*\(\s*(?:fields\s*:\s*)?\[(.*?)\]"
    )
    # field_name or field_name(sort: Desc)
    DIRECTIVE_FIELD_ENTRY = re.compile(r"(\w+)(\([^)]*\))?")

    # user_id Int @id
    FIELD_LINE = re.compile(r"^(\s*)(\w+)(\s+)(\S.*)$")

    LINE_COMMENT = "//"

    TABLE_MAP_TEMPLATE = '  @@map("{name}")'
    FIELD_MAP_TEMPLATE = '@map("{name}")'
