"""
Naming convention utilities for Prisma Name Mapper.

This module decides which database identifiers should be renamed and how
they are converted into Prisma's conventions (singular PascalCase models,
camelCase fields).
"""

import re
from abc import ABC, abstractmethod
from typing import List

import inflect


# Initialize inflect engine for singularization
p = inflect.engine()

_DELIMITER_RE = re.compile(r"[^A-Za-z0-9]+")
_CASE_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])|([A-Z])([A-Z][a-z])")

# Words with no separate singular form
UNCOUNTABLE_NOUNS = frozenset({
    "data", "equipment", "information", "metadata", "money", "news",
    "series", "sheep", "species",
})

# Singular nouns ending in "s" that inflect would strip (alias -> alia)
SINGULAR_NOUNS = frozenset({
    "alias", "atlas", "bias", "canvas", "gas",
    "bonus", "bus", "campus", "census", "corpus", "focus", "status", "virus",
    "analysis", "crisis", "diagnosis", "ellipsis", "hypothesis", "oasis",
    "parenthesis", "synopsis", "thesis",
})


def _plural_of(noun: str) -> str:
    if noun.endswith("is"):
        return noun[:-2] + "es"
    return noun + "es"


# statuses -> status, analyses -> analysis
IRREGULAR_PLURALS = {_plural_of(noun): noun for noun in SINGULAR_NOUNS}


def needs_transform(identifier: str) -> bool:
    """
    Check whether an identifier should be renamed.

    Only identifiers without any upper-case character (plain lower or
    snake_case, the way MySQL tables and columns are usually named) are
    candidates. Mixed-case identifiers are considered already converted.

    Example:
        >>> needs_transform("user_id")
        True
        >>> needs_transform("userId")
        False
    """
    return identifier == identifier.lower()


def split_words(name: str) -> List[str]:
    """
    Split an identifier into words on delimiters and case boundaries.

    Example:
        >>> split_words("order_items")
        ['order', 'items']
        >>> split_words("XMLHttpRequest")
        ['XML', 'Http', 'Request']
    """
    name = _CASE_BOUNDARY_RE.sub(
        lambda m: f"{m.group(1)} {m.group(2)}" if m.group(1) else f"{m.group(3)} {m.group(4)}",
        name,
    )
    return [word for word in _DELIMITER_RE.split(name) if word]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_pascal_case(name: str) -> str:
    """Convert an identifier to PascalCase without touching its number."""
    return "".join(_capitalize(word) for word in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert an identifier to camelCase."""
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def singularize(name: str) -> str:
    """
    Singularize the last word of a table name.

    Only the last word is inflected so compound names keep their prefix
    intact (``order_items`` -> ``order_item``). Uncountable nouns, words
    ending in ``ss`` and the known singular nouns ending in ``s`` are kept.

    Example:
        >>> singularize("categories")
        'category'
        >>> singularize("address")
        'address'
    """
    words = split_words(name)
    if not words:
        return name
    last = words[-1]
    lower = last.lower()
    if lower in UNCOUNTABLE_NOUNS or lower in SINGULAR_NOUNS or lower.endswith("ss"):
        return name
    if lower in IRREGULAR_PLURALS:
        singular = last[:1] + IRREGULAR_PLURALS[lower][1:]
    else:
        singular = p.singular_noun(last)
    # inflect returns False if the word is already singular
    if not singular:
        return name
    head = name[: name.rfind(last)]
    return head + singular


class NamingPolicy(ABC):
    """
    Naming policy used by the schema transformer.

    Subclass to plug in another locale or naming convention without
    touching the schema walker.
    """

    @abstractmethod
    def transform_table_name(self, raw: str) -> str:
        """Convert a database table name to a model name."""

    @abstractmethod
    def transform_field_name(self, raw: str) -> str:
        """Convert a database column name to a field name."""

    def needs_transform(self, identifier: str) -> bool:
        return needs_transform(identifier)


class InflectNamingPolicy(NamingPolicy):
    """English naming policy: singular PascalCase models, camelCase fields."""

    def transform_table_name(self, raw: str) -> str:
        return to_pascal_case(singularize(raw))

    def transform_field_name(self, raw: str) -> str:
        return to_camel_case(raw)


DEFAULT_NAMING_POLICY = InflectNamingPolicy()


def transform_table_name(raw: str) -> str:
    """
    Convert a table name into a Prisma model name.

    Example:
        >>> transform_table_name("order_items")
        'OrderItem'
    """
    return DEFAULT_NAMING_POLICY.transform_table_name(raw)


def transform_field_name(raw: str) -> str:
    """
    Convert a column name into a Prisma field name.

    Example:
        >>> transform_field_name("user_id")
        'userId'
    """
    return DEFAULT_NAMING_POLICY.transform_field_name(raw)
