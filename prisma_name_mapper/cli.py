import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from prisma_name_mapper.catalog_loader import Catalog, load_catalog_file
from prisma_name_mapper.config_validation import ToolConfigSchema, load_config
from prisma_name_mapper.domain.catalog import build_catalog_mappings
from prisma_name_mapper.exceptions import NameMapperError, SchemaFileError
from prisma_name_mapper.introspection_django import introspect_catalog_django, setup_django
from prisma_name_mapper.schema_walker import SchemaTransformer

from prisma_name_mapper.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_highlight,
    log_section
)

logger = get_colored_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Rename Prisma models to singular PascalCase and fields to camelCase, "
            "adding @@map/@map annotations for the original MySQL names."
        )
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file (containing Django DATABASES dict).",
    )
    parser.add_argument(
        "-s",
        "--schema",
        dest="schema_path",
        help="Prisma schema to transform. Overrides config file setting.",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_path",
        help="File to write the transformed schema to. Overrides config file setting.",
    )
    parser.add_argument(
        "--catalog-file",
        dest="catalog_file",
        help="YAML catalog of tables and columns to use instead of a live database.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def read_catalog(config: ToolConfigSchema) -> Catalog:
    """Get the table/column catalog from the catalog file or the database."""
    if config.catalog_file:
        log_progress(logger, f"Loading catalog from {config.catalog_file}...")
        return load_catalog_file(
            config.catalog_file,
            include_tables=config.include_tables,
            exclude_tables=config.exclude_tables,
        )

    log_progress(logger, "Configuring Django settings for introspection...")
    setup_django(config.databases, config.SECRET_KEY)
    return introspect_catalog_django(
        include_tables=config.include_tables,
        exclude_tables=config.exclude_tables,
    )


def read_schema(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaFileError(f"Could not read schema: {e}", path=path) from e


def write_schema(path: str, content: str) -> None:
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise SchemaFileError(f"Could not write transformed schema: {e}", path=path) from e


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        log_success(logger, "Configuration loaded and validated successfully.")

        # 2. Read the catalog (hard failure if unavailable)
        log_section(logger, "Database Catalog")
        tables, columns = read_catalog(config)
        mappings = build_catalog_mappings(tables, columns)
        log_highlight(
            logger,
            f"Found {len(mappings.tables)} tables and {len(mappings.columns)} columns to rename.",
        )

        # 3. Transform the schema
        log_section(logger, "Schema Transformation")
        log_progress(logger, f"Processing {config.schema_path}...")
        schema_text = read_schema(config.schema_path)
        transformer = SchemaTransformer(mappings)
        enhanced_schema = transformer.transform(schema_text)

        stats = transformer.stats
        logger.info(
            f"Models: {stats.models} ({stats.models_renamed} renamed, {stats.table_maps_added} @@map added), "
            f"fields renamed: {stats.fields_renamed}, directives rewritten: {stats.directives_rewritten}"
        )

        # 4. Save the result next to the original, which is kept as a diff baseline
        write_schema(config.output_path, enhanced_schema)
        log_success(logger, f"Transformed schema saved to {config.output_path}")

    # --- Error Handling ---
    except NameMapperError as e:
        logger.error(str(e), exc_info=args.verbose)
        return 1
    except RuntimeError as e:
        logger.error(f"Runtime Error: {e}", exc_info=args.verbose)
        return 1
    except ImportError as e:
        logger.error(
            f"Import Error: {e}. Ensure the MySQL driver is installed.",
            exc_info=args.verbose,
        )
        logger.error("Example: pip install mysqlclient")
        return 1
    except Exception as e:
        logger.error(
            f"An unexpected error occurred during transformation: {e}", exc_info=True
        )
        return 1

    return 0


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
