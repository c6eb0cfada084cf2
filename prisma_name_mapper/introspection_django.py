import logging
import django
from django.db import connections, DEFAULT_DB_ALIAS
from django.db.utils import DatabaseError, OperationalError
from django.conf import settings
from typing import List, Dict, Any

from prisma_name_mapper.catalog_loader import Catalog, select_tables
from prisma_name_mapper.domain.models import ColumnEntry, TableEntry
from prisma_name_mapper.exceptions import DatabaseConnectionError, SchemaIntrospectionError


logger = logging.getLogger(__name__)

# --- Django Setup Helper ---
_django_setup_done = False


def setup_django(db_settings: Dict[str, Any], secret_key: str):
    """Configures minimal Django settings and runs django.setup()."""
    global _django_setup_done
    if _django_setup_done:
        logger.debug("Django setup already performed.")
        return

    logger.info("Configuring Django settings for introspection...")
    # --- Convert Pydantic models to plain dicts for Django settings ---
    plain_db_settings: Dict[str, Dict[str, Any]] = {}
    for alias, db_model in db_settings.items():
        if hasattr(db_model, 'model_dump') and callable(db_model.model_dump):
            plain_db_settings[alias] = db_model.model_dump(exclude_none=True)
        elif isinstance(db_model, dict):
            plain_db_settings[alias] = db_model
        else:
            logger.error(f"Unexpected type for database settings '{alias}': {type(db_model)}. Expected Pydantic model or dict.")
            raise TypeError(f"Invalid database settings type for alias '{alias}'.")
    logger.debug(f"Using DB aliases for Django: {', '.join(plain_db_settings)}")

    try:
        settings.configure(
            SECRET_KEY=secret_key,
            DATABASES=plain_db_settings,
            TIME_ZONE='UTC',
            USE_TZ=True,
        )
        django.setup()
    except Exception as e:
        logger.error(f"Failed to configure Django: {e}", exc_info=True)
        raise
    _django_setup_done = True
    logger.info("Django setup complete.")


def introspect_catalog_django(
    db_alias: str = DEFAULT_DB_ALIAS,
    include_tables: List[str] = None,
    exclude_tables: List[str] = None,
) -> Catalog:
    """
    Reads table and column names through Django's connection.introspection.

    Equivalent to listing information_schema.TABLES and information_schema.COLUMNS
    for the connected database. Views are skipped.

    Raises:
        DatabaseConnectionError: If the database cannot be reached
        SchemaIntrospectionError: If the catalog cannot be read
    """
    if not _django_setup_done:
        raise RuntimeError("Django has not been set up. Call setup_django() first.")

    logger.info(f"Reading table catalog for alias '{db_alias}'...")
    conn = connections[db_alias]
    introspector = conn.introspection

    tables: List[TableEntry] = []
    columns: List[ColumnEntry] = []
    try:
        with conn.cursor() as cursor:
            all_db_items = introspector.get_table_list(cursor)
            logger.info(f"Found {len(all_db_items)} database items (tables/views).")

            table_names = []
            for item in all_db_items:
                if getattr(item, 'type', 't') != 't':
                    logger.debug(f"Skipping item '{item.name}' (type: {item.type}).")
                    continue
                table_names.append(item.name)

            for table_name in select_tables(table_names, include_tables, exclude_tables):
                try:
                    table_description = introspector.get_table_description(cursor, table_name)
                except Exception as e:
                    raise SchemaIntrospectionError(
                        f"Could not get description for table '{table_name}': {e}",
                        table=table_name,
                        source=db_alias,
                    ) from e
                tables.append(TableEntry(table_name))
                columns.extend(ColumnEntry(table_name, description.name) for description in table_description)
    except OperationalError as e:
        raise DatabaseConnectionError(
            f"Could not connect to database '{db_alias}': {e}",
            engine=conn.settings_dict.get('ENGINE'),
        ) from e
    except DatabaseError as e:
        raise SchemaIntrospectionError(
            f"Could not read the table catalog: {e}",
            source=db_alias,
        ) from e

    logger.info(f"Catalog read: {len(tables)} tables, {len(columns)} columns.")
    return tables, columns
