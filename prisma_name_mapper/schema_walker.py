"""
Schema block walker for Prisma Name Mapper.

A single pass over a Prisma schema that renames models and fields to Prisma's
conventions and records the original database names with ``@@map`` and
``@map`` annotations.

Every line is classified by an ordered list of matchers (model header, block
close, table map, directive, field, other) and the category decides which
handler runs. The only state is a ParseCursor owned by the pass.

Example:
    >>> transform_schema(
    ...     'model order_items {\\n  user_id Int\\n}',
    ...     [TableEntry("order_items")],
    ...     [ColumnEntry("order_items", "user_id")],
    ... )
    'model OrderItem {\\n  @@map("order_items")\\n  userId Int @map("user_id")\\n}'
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .constants import PrismaSyntax
from .directives import is_directive_line, resolve_field_name, rewrite_directive_fields
from .domain.catalog import build_catalog_mappings
from .domain.models import CatalogMappings, ColumnEntry, LineKind, ParseCursor, TableEntry
from .domain.naming import DEFAULT_NAMING_POLICY, NamingPolicy


logger = logging.getLogger(__name__)


# --- Line classification ---

def _is_model_header(line: str, cursor: ParseCursor) -> bool:
    return bool(PrismaSyntax.MODEL_HEADER.match(line))


def _is_block_close(line: str, cursor: ParseCursor) -> bool:
    return cursor.in_block and line.strip() == PrismaSyntax.BLOCK_CLOSE


def _is_table_map(line: str, cursor: ParseCursor) -> bool:
    return cursor.in_block and bool(PrismaSyntax.TABLE_MAP.match(line))


def _is_directive(line: str, cursor: ParseCursor) -> bool:
    return cursor.in_block and cursor.table_name is not None and is_directive_line(line)


def _is_field(line: str, cursor: ParseCursor) -> bool:
    if not (cursor.in_block and cursor.table_name):
        return False
    stripped = line.strip()
    if not stripped or stripped.startswith(PrismaSyntax.LINE_COMMENT):
        return False
    return bool(PrismaSyntax.FIELD_LINE.match(line))


LINE_MATCHERS: Sequence[Tuple[LineKind, Callable[[str, ParseCursor], bool]]] = (
    (LineKind.MODEL_HEADER, _is_model_header),
    (LineKind.BLOCK_CLOSE, _is_block_close),
    (LineKind.TABLE_MAP, _is_table_map),
    (LineKind.DIRECTIVE, _is_directive),
    (LineKind.FIELD, _is_field),
)


def classify_line(line: str, cursor: ParseCursor) -> LineKind:
    """Return the first line category whose matcher accepts the line."""
    for kind, matcher in LINE_MATCHERS:
        if matcher(line, cursor):
            return kind
    return LineKind.OTHER


# --- Helpers ---

def find_table_map(lines: Sequence[str], start: int) -> Tuple[bool, Optional[str]]:
    """
    Look for an existing ``@@map`` in the block starting after ``start``.

    The search stops at the first line starting with a closing brace or at
    the next model header, whichever comes first. Commented out annotations
    are ignored.

    Returns:
        (has_map, raw table name or None if the annotation could not be read)
    """
    for line in lines[start + 1:]:
        if line.strip().startswith(PrismaSyntax.BLOCK_CLOSE) or PrismaSyntax.MODEL_HEADER.match(line):
            break
        definition, _ = split_trailing_comment(line)
        if "@@map(" in definition or PrismaSyntax.TABLE_MAP.match(definition):
            match = PrismaSyntax.TABLE_MAP_NAME.search(definition)
            return True, match.group(1) if match else None
    return False, None


def split_trailing_comment(line: str) -> Tuple[str, str]:
    """
    Split a field line into its definition and a trailing ``//`` comment.

    Comment markers inside string literals (e.g. ``@default("http://x")``)
    are ignored.
    """
    quote = None
    i = 0
    while i < len(line):
        char = line[i]
        if quote:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif line.startswith(PrismaSyntax.LINE_COMMENT, i):
            return line[:i], line[i:]
        i += 1
    return line, ""


def append_field_map(line: str, raw_name: str) -> str:
    """Add ``@map("raw_name")`` at the end of a field definition."""
    annotation = PrismaSyntax.FIELD_MAP_TEMPLATE.format(name=raw_name)
    # Keep the CR of CRLF input at the very end of the line
    eol = "\r" if line.endswith("\r") else ""
    definition, comment = split_trailing_comment(line[:len(line) - len(eol)])
    definition = f"{definition.rstrip()} {annotation}"
    if comment:
        return f"{definition} {comment}{eol}"
    return definition + eol


# --- Walker ---

@dataclass
class TransformStats:
    """Counts of what a pass changed, for reporting."""
    models: int = 0
    models_renamed: int = 0
    table_maps_added: int = 0
    fields_renamed: int = 0
    directives_rewritten: int = 0
    unterminated_models: List[str] = field(default_factory=list)


class SchemaTransformer:
    """
    Renames Prisma models and fields using catalog mappings.

    Apart from the stats of the last pass the transformer holds read-only
    configuration. Each call to ``transform`` creates its own ParseCursor, so
    one instance can be reused for several schemas.
    """

    def __init__(self, mappings: CatalogMappings, policy: Optional[NamingPolicy] = None):
        self.mappings = mappings
        self.policy = policy or DEFAULT_NAMING_POLICY
        self.stats = TransformStats()

    def transform(self, schema_text: str) -> str:
        """Transform a whole schema and return the new text."""
        self.stats = TransformStats()
        cursor = ParseCursor()
        lines = schema_text.split("\n")
        output: List[str] = []

        for index, line in enumerate(lines):
            kind = classify_line(line, cursor)

            if kind is LineKind.MODEL_HEADER:
                output.extend(self._open_block(lines, index, cursor))
            elif kind is LineKind.BLOCK_CLOSE:
                cursor.close()
                output.append(line)
            elif kind is LineKind.DIRECTIVE:
                output.append(self._rewrite_directive(line, cursor))
            elif kind is LineKind.FIELD:
                output.append(self._rewrite_field(line, cursor))
            else:
                output.append(line)

        if cursor.in_block:
            # End of input closes the block implicitly
            self.stats.unterminated_models.append(cursor.model_name)
            logger.warning(
                f"Model '{cursor.model_name}' is not closed before the end of the schema. "
                "Treating the end of input as the end of the block."
            )

        return "\n".join(output)

    # -- Handlers --

    def resolve_table(self, model_name: str) -> Tuple[str, Optional[str]]:
        """
        Find the database table behind a model without an explicit ``@@map``.

        Returns:
            (raw table name, new model name or None when the catalog has no match)
        """
        for table_name, transformed in self.mappings.tables.items():
            if transformed == model_name:
                return table_name, transformed
            if table_name == model_name.lower() or self.policy.transform_table_name(table_name) == model_name:
                return table_name, self.policy.transform_table_name(table_name)
        return model_name.lower(), None

    def _open_block(self, lines: Sequence[str], index: int, cursor: ParseCursor) -> List[str]:
        line = lines[index]
        match = PrismaSyntax.MODEL_HEADER.match(line)
        model_name = match.group(2)
        self.stats.models += 1

        if cursor.in_block:
            self.stats.unterminated_models.append(cursor.model_name)
            logger.warning(f"Model '{cursor.model_name}' is not closed before model '{model_name}' starts.")

        has_map, mapped_table = find_table_map(lines, index)
        header = line
        if has_map and mapped_table:
            table_name = mapped_table
        elif has_map:
            logger.warning(f"Could not read the @@map annotation of model '{model_name}', assuming table '{model_name.lower()}'.")
            table_name = model_name.lower()
        else:
            table_name, new_model_name = self.resolve_table(model_name)
            if new_model_name and new_model_name != model_name:
                start, end = match.span(2)
                header = line[:start] + new_model_name + line[end:]
                self.stats.models_renamed += 1
                logger.debug(f"Model '{model_name}' -> '{new_model_name}' (table '{table_name}')")
            elif new_model_name is None:
                logger.debug(f"No catalog table matches model '{model_name}', assuming table '{table_name}'.")

        cursor.open(model_name, table_name, has_map)
        emitted = [header]

        if not has_map and self.policy.transform_table_name(table_name) != table_name:
            eol = "\r" if line.endswith("\r") else ""
            emitted.append(PrismaSyntax.TABLE_MAP_TEMPLATE.format(name=table_name) + eol)
            self.stats.table_maps_added += 1

        return emitted

    def _rewrite_directive(self, line: str, cursor: ParseCursor) -> str:
        new_line = rewrite_directive_fields(line, self.mappings.columns, cursor.table_name, self.policy)
        if new_line != line:
            self.stats.directives_rewritten += 1
        return new_line

    def _rewrite_field(self, line: str, cursor: ParseCursor) -> str:
        match = PrismaSyntax.FIELD_LINE.match(line)
        indent, field_name, separator, rest = match.groups()

        if PrismaSyntax.FIELD_MAP.search(rest):
            return line
        if not self.policy.needs_transform(field_name):
            return line

        new_name = resolve_field_name(field_name, self.mappings.columns, cursor.table_name, self.policy)
        if new_name == field_name:
            return line

        self.stats.fields_renamed += 1
        logger.debug(f"Field '{cursor.table_name}.{field_name}' -> '{new_name}'")
        return append_field_map(f"{indent}{new_name}{separator}{rest}", field_name)


def transform_schema(
    schema_text: str,
    tables: Iterable[TableEntry],
    columns: Iterable[ColumnEntry],
    policy: Optional[NamingPolicy] = None,
) -> str:
    """
    Rename the models and fields of a Prisma schema to Prisma conventions.

    Args:
        schema_text: Content of ``schema.prisma``
        tables: Catalog table rows
        columns: Catalog column rows
        policy: Naming policy, defaults to the inflect based English policy

    Returns:
        The transformed schema text
    """
    mappings = build_catalog_mappings(tables, columns, policy)
    return SchemaTransformer(mappings, policy).transform(schema_text)
