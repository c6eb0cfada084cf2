"""
Rewriting of field references inside Prisma block directives.

Handles ``@@index``, ``@@unique``, ``@@id`` and ``@@fulltext`` lines such as::

    @@index([user_id, created_at(sort: Desc)], map: "idx_user_created")

Field names inside the bracketed list are renamed the same way their
declarations are, while per-field arguments like ``(sort: Desc)`` are kept
verbatim.
"""

import logging
from typing import List, Mapping, Optional

from .constants import PrismaSyntax
from .domain.models import DirectiveFieldEntry, column_key
from .domain.naming import DEFAULT_NAMING_POLICY, NamingPolicy


logger = logging.getLogger(__name__)


def is_directive_line(line: str) -> bool:
    """Check if a line is a block directive that lists fields."""
    return bool(PrismaSyntax.DIRECTIVE_LINE.match(line))


def parse_directive_fields(fields_str: str) -> List[DirectiveFieldEntry]:
    """
    Split the content of a directive's bracketed list into entries.

    Example:
        >>> parse_directive_fields("created_at(sort: Desc)")
        [DirectiveFieldEntry(identifier='created_at', parameter_suffix='(sort: Desc)')]
    """
    return [
        DirectiveFieldEntry(identifier=m.group(1), parameter_suffix=m.group(2) or "")
        for m in PrismaSyntax.DIRECTIVE_FIELD_ENTRY.finditer(fields_str)
    ]


def resolve_field_name(
    identifier: str,
    column_map: Mapping[str, str],
    table_name: str,
    policy: NamingPolicy,
) -> str:
    """Catalog name for ``table_name.identifier``, else the policy's camelCase."""
    mapped = column_map.get(column_key(table_name, identifier))
    return mapped or policy.transform_field_name(identifier)


def rewrite_directive_fields(
    line: str,
    column_map: Mapping[str, str],
    table_name: str,
    policy: Optional[NamingPolicy] = None,
) -> str:
    """
    Rename the field references of a directive line.

    Args:
        line: A schema line, e.g. ``  @@unique([order_id, product_id])``
        column_map: "raw_table.raw_column" -> field name
        table_name: Raw table name of the model block the line belongs to
        policy: Naming policy used when the catalog has no entry

    Returns:
        The line with field names renamed, or the line unchanged if it has no
        bracketed field list.
    """
    policy = policy or DEFAULT_NAMING_POLICY

    match = PrismaSyntax.DIRECTIVE_FIELDS.search(line)
    if not match:
        return line

    def _replace(entry_match):
        entry = DirectiveFieldEntry(
            identifier=entry_match.group(1),
            parameter_suffix=entry_match.group(2) or "",
        )
        if not policy.needs_transform(entry.identifier):
            return entry_match.group(0)
        new_name = resolve_field_name(entry.identifier, column_map, table_name, policy)
        if new_name != entry.identifier:
            logger.debug(f"Directive field '{entry.identifier}' -> '{new_name}' in table '{table_name}'")
        return entry.render(new_name)

    fields_str = match.group(1)
    new_fields_str = PrismaSyntax.DIRECTIVE_FIELD_ENTRY.sub(_replace, fields_str)

    start, end = match.span(1)
    return line[:start] + new_fields_str + line[end:]
