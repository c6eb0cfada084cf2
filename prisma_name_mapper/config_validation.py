# File: prisma_name_mapper/config_validation.py
from argparse import Namespace
import sys
import logging
import os
from typing import List, Optional, Dict, Any, Self
import yaml
from pathlib import Path

from dotenv import load_dotenv

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from prisma_name_mapper.constants import DefaultConfig, SupportedDatabases

logger = logging.getLogger(__name__)


# --- Pydantic Models for Configuration Schema ---
class DatabaseSettings(BaseModel):
    """Schema for a single database connection within the DATABASES dict."""

    ENGINE: str = Field(
        default=SupportedDatabases.MYSQL,
        min_length=1,
        description="Django database engine (only 'django.db.backends.mysql' is supported).",
    )
    NAME: str = Field(..., min_length=1, description="Database name.")
    USER: Optional[str] = Field(default=None, description="Database user.")
    PASSWORD: Optional[str] = Field(default=None, description="Database password.")
    HOST: Optional[str] = Field(default=None, description="Database host address.")
    PORT: Optional[int] = Field(default=None, description="Database port number.")
    OPTIONS: Dict[str, Any] = Field(
        default_factory=dict, description="Database engine specific options."
    )

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)

    @field_validator("ENGINE")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        """The catalog queries assume MySQL's information_schema."""
        if v not in SupportedDatabases.SUPPORTED:
            raise ValueError(f"Database engine: {v} is not supported. Supported engines are: {', '.join(SupportedDatabases.SUPPORTED)}")
        return v

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> Optional[int]:
        """Ensure port is a number or string representation of one, and within range."""
        if v is None or v == "":
            return None
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError(
                f"Port must be an integer or string containing digits, got {type(v).__name__}"
            )
        if isinstance(v, str) and not v.isdigit():
            raise ValueError(
                f"Port must be a number or string containing only digits, got '{v}'"
            )
        port_num = int(v)
        if not 0 <= port_num <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {port_num}")
        return port_num


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    databases: Optional[Dict[str, DatabaseSettings]] = Field(
        default=None,
        description="Django DATABASES setting dictionary. Must contain a 'default' key.",
    )
    schema_path: str = Field(
        DefaultConfig.SCHEMA_PATH,
        min_length=1,
        description="Prisma schema to transform.",
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Where to write the transformed schema. Defaults to a file next to the schema.",
    )
    catalog_file: Optional[str] = Field(
        default=None,
        description="YAML catalog ({tables: {table: [columns]}}) used instead of a live database.",
    )
    include_tables: Optional[List[str]] = Field(
        default=None,
        description="Optional list of specific table names (strings) to include.",
    )
    exclude_tables: Optional[List[str]] = Field(
        default=None, description="Optional list of table names (strings) to exclude."
    )

    # Internal field, usually added by load_config if not provided by user
    SECRET_KEY: Optional[str] = Field(
        default=None, description="Internal secret key for Django setup."
    )

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Allow dict.get() style access."""
        return getattr(self, key, default)

    @field_validator(
        "include_tables", "exclude_tables", mode="before", check_fields=False
    )
    @classmethod
    def check_table_names_list(cls, v: Optional[List[Any]]) -> Optional[List[str]]:
        """Ensure items in table lists are non-empty strings."""
        if v is None:
            return None
        if not isinstance(v, list):
            raise ValueError("include_tables/exclude_tables must be a list.")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise ValueError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list

    @model_validator(mode="after")
    def check_catalog_source_and_paths(self) -> Self:
        """Perform cross-field validation checks."""
        # 1. The catalog comes from either a database or a catalog file
        if not self.databases and not self.catalog_file:
            raise ValueError(
                "Either 'databases' (or the DB_* environment variables) or 'catalog_file' must be configured."
            )
        if self.databases is not None and "default" not in self.databases:
            raise ValueError(
                "The 'databases' configuration dictionary must contain a 'default' key."
            )
        if self.databases and self.catalog_file:
            logger.warning(
                "Both 'databases' and 'catalog_file' are configured. The catalog file will be used."
            )

        # 2. Never overwrite the source schema, it is the diff baseline
        if self.output_path is None:
            self.output_path = str(Path(self.schema_path).with_name(DefaultConfig.OUTPUT_FILENAME))
        if Path(self.output_path).resolve() == Path(self.schema_path).resolve():
            raise ValueError(
                "'output_path' must differ from 'schema_path'; the source schema is never overwritten."
            )

        return self

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
        validate_assignment=False,
    )


def databases_from_env(environ: Optional[Dict[str, str]] = None) -> Optional[Dict[str, Any]]:
    """
    Build the default database connection from DB_* environment variables.

    Returns None when DB_NAME is not set.
    """
    environ = os.environ if environ is None else environ
    if not environ.get("DB_NAME"):
        return None
    return {
        "default": {
            "ENGINE": SupportedDatabases.MYSQL,
            "NAME": environ["DB_NAME"],
            "HOST": environ.get("DB_HOST") or DefaultConfig.DB_HOST,
            "PORT": environ.get("DB_PORT") or None,
            "USER": environ.get("DB_USER") or DefaultConfig.DB_USER,
            "PASSWORD": environ.get("DB_PASSWORD", DefaultConfig.DB_PASSWORD),
        }
    }


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any]) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.
    Exits with error messages if validation fails.
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        logger.critical(
            "Configuration validation failed! Please check your config file or arguments."
        )
        print("\n--- Configuration Errors ---", file=sys.stderr)
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")

            print(f"  - Location: '{loc_str}'", file=sys.stderr)
            print(f"    Error:    {msg}", file=sys.stderr)

            if "ENGINE" in loc_parts:
                print(
                    f"    Hint:     Use '{SupportedDatabases.MYSQL}'.",
                    file=sys.stderr,
                )

        print("----------------------------", file=sys.stderr)
        sys.exit(1)


def load_config(
    config_path: Optional[str],
    cli_args: Namespace,
    env_file: Optional[str] = DefaultConfig.ENV_FILE,
) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments and DB_*
    environment variables, validates the result, and returns a validated
    Pydantic model instance.
    DB_* variables missing from the environment are read from ``env_file``
    (the project's ``.env``) when it exists.
    Exits with error messages if validation fails.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if config_file.is_file():
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error(f"Error parsing YAML file {config_path}: {e}")
                logger.warning("Proceeding with defaults and CLI arguments only.")
                yaml_config = None
            if yaml_config and isinstance(yaml_config, dict):
                raw_config.update(yaml_config)
                logger.debug(f"Loaded configuration from {config_path}")
            elif yaml_config:
                logger.warning(
                    f"Content in config file {config_path} is not a dictionary. Ignoring file content."
                )
        else:
            logger.warning(
                f"Config file not found at {config_path}. Using defaults and CLI arguments."
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    overridden_keys = set()
    for key, value in vars(cli_args).items():
        if value is not None and key != "databases" and key in ToolConfigSchema.model_fields:
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    # 3. Fall back to the DB_* environment variables for the connection
    if not raw_config.get("databases") and not raw_config.get("catalog_file"):
        if env_file and Path(env_file).is_file():
            # Variables already set in the environment win over the file
            load_dotenv(env_file, override=False)
            logger.debug(f"Loaded environment from {env_file}")
        env_databases = databases_from_env()
        if env_databases:
            raw_config["databases"] = env_databases
            logger.debug("Using database connection from DB_* environment variables.")

    # 4. Add internal SECRET_KEY if not present (needed for django.setup)
    if "SECRET_KEY" not in raw_config:
        raw_config["SECRET_KEY"] = os.urandom(50).hex()

    logger.info("Validating final configuration...")
    validated_config: ToolConfigSchema = validate_and_parse_config(raw_config)

    return validated_config
