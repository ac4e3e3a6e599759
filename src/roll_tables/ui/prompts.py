"""Filtering and display helpers for the table and row pickers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from roll_tables.models import PlaceholderRow, Table


INTERNAL_LINK_PATTERN = re.compile(r"^\[\[([^#\]]+)#([^|\]]+)(?:\|[^\]]+)?\]\]$")
"""Matches wiki links of the form [[file#heading]] or [[file#heading|alias]]."""


def table_title(name: str) -> str:
    """Display title for a table name.

    Example:
        >>> table_title("[[Bestiary#Forest Encounters]]")
        'Bestiary > Forest Encounters'
    """
    match = INTERNAL_LINK_PATTERN.match(name)
    if match:
        return f"{match.group(1)} > {match.group(2)}"
    return name


def describe_table(table: Table) -> str:
    """One-line picker entry: title followed by how the table resolves."""
    return f"{table_title(table.name)} ({table.label})"


def filter_tables(tables: Mapping[str, Table], query: str) -> list[Table]:
    """Tables whose name contains the query, ignoring case."""
    needle = query.lower()
    return [table for table in tables.values() if needle in table.name.lower()]


def filter_rows(rows: Iterable[PlaceholderRow], query: str) -> list[PlaceholderRow]:
    """Rows whose placeholder label contains the query, ignoring case."""
    needle = query.lower()
    return [row for row in rows if needle in row.placeholder.lower()]


__all__ = [
    "INTERNAL_LINK_PATTERN",
    "table_title",
    "describe_table",
    "filter_tables",
    "filter_rows",
]
