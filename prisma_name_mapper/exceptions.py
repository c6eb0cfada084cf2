"""
Custom exception hierarchy for Prisma Name Mapper.

The schema transformation itself never raises; these exceptions cover the
surrounding pipeline (configuration, catalog introspection, schema files) and
carry context and recovery suggestions for the user.
"""

import re
from typing import Dict, Any, Optional, List


class NameMapperError(Exception):
    """
    Base exception for all Prisma Name Mapper errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(NameMapperError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify the schema and output paths",
                "Provide either a database connection or a catalog file",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaIntrospectionError(NameMapperError):
    """Raised when the table/column catalog cannot be read."""

    def __init__(self, message: str, table: str = None, source: str = None, **kwargs):
        context = kwargs.get('context', {})
        if table:
            context['table'] = table
        if source:
            context['source'] = source

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check database connection settings",
                "Check database user permissions on information_schema",
                "Review the include/exclude table filters",
                "Verify the catalog file format (tables: {table: [columns]})",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INTROSPECTION_ERROR"
        )


class DatabaseConnectionError(NameMapperError):
    """Raised when database connection fails."""

    def __init__(self, message: str, database_url: str = None, engine: str = None, **kwargs):
        context = kwargs.get('context', {})
        if database_url:
            # Mask sensitive parts of the URL
            context['database_url'] = self._mask_credentials(database_url)
        if engine:
            context['engine'] = engine

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check database server is running",
                "Verify connection credentials",
                "Ensure the mysqlclient driver is installed",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="DATABASE_CONNECTION_ERROR"
        )

    @staticmethod
    def _mask_credentials(url: str) -> str:
        """Mask sensitive credentials in database URL."""
        return re.sub(r'://([^:]+):([^@]+)@', r'://\1:***@', url)


class SchemaFileError(NameMapperError):
    """Raised when the schema cannot be read or the result cannot be written."""

    def __init__(self, message: str, path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if path:
            context['path'] = path

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the file exists and is readable",
                "Check the output directory is writable",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="SCHEMA_FILE_ERROR"
        )


# Convenience functions for common error patterns
def raise_configuration_error(message: str, config_file: str = None, **kwargs):
    """Convenience function to raise configuration errors."""
    raise ConfigurationError(message, config_file=config_file, **kwargs)


def raise_introspection_error(message: str, table: str = None, source: str = None, **kwargs):
    """Convenience function to raise introspection errors."""
    raise SchemaIntrospectionError(message, table=table, source=source, **kwargs)
