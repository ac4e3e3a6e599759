"""Markdown pipe-table parsing into roll tables.

A table block is a header line of pipe-delimited cells, immediately followed
by a separator line (``| --- | :---: |``), followed by any number of body
lines. The header's first cell is either a dice expression (rolled table) or
a free-text label (placeholder table); its second cell is the table name.

Malformed blocks are skipped, never raised: text that is not a table is
simply not a table.

Example:
    >>> text = '''
    ... | 1d6 | Weather |
    ... | --- | ------- |
    ... | 1-3 | Rain    |
    ... | 4-6 | Sun     |
    ... '''
    >>> tables = parse_tables(text, "notes.md")
    >>> tables["Weather"].roll
    '1d6'
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from roll_tables.core.logging import get_logger
from roll_tables.engine.dice import is_valid_expression
from roll_tables.models import PlaceholderRow, PlaceholderTable, RolledRow, RolledTable, Table


logger = get_logger(__name__)

SEPARATOR_PATTERN = re.compile(r"^\|\s*(:?-+:?)\s*(\|\s*(:?-+:?)\s*)*\|$")
"""A header separator row made only of dash runs with optional alignment colons."""


def is_pipe_line(line: str) -> bool:
    """Whether a stripped line starts and ends with a pipe."""
    return len(line) >= 2 and line.startswith("|") and line.endswith("|")


def is_separator_line(line: str) -> bool:
    """Whether a stripped line is a table header separator."""
    return SEPARATOR_PATTERN.match(line) is not None


def parse_table_row(line: str) -> list[str]:
    """Split a pipe-delimited line into trimmed cells.

    The pieces outside the leading and trailing pipes are dropped.
    Whitespace-only cells become empty strings and keep their position.

    Example:
        >>> parse_table_row("| 1-3 |  Rain | Wind |")
        ['1-3', 'Rain', 'Wind']
    """
    return [cell.strip() for cell in line.strip().split("|")[1:-1]]


def iter_table_blocks(text: str) -> Iterator[list[str]]:
    """Yield the lines of each table block found in text, in source order.

    Each block is [header, separator, *body] with lines stripped.
    """
    lines = [line.strip() for line in text.splitlines()]
    index = 0
    while index < len(lines) - 1:
        if not (is_pipe_line(lines[index]) and is_separator_line(lines[index + 1])):
            index += 1
            continue

        end = index + 2
        while end < len(lines) and is_pipe_line(lines[end]):
            end += 1
        yield lines[index:end]
        index = end


def _build_table(block: list[str], source_id: str) -> Table | None:
    header = parse_table_row(block[0])
    token = header[0] if header else ""
    name = header[1] if len(header) > 1 else ""
    if not token or not name:
        logger.debug("Skipping table without token or name", source_id=source_id, header=block[0])
        return None

    body = [cells for cells in (parse_table_row(line) for line in block[2:]) if cells]

    if is_valid_expression(token):
        return RolledTable(
            name=name,
            roll=token,
            rows=[RolledRow.from_cells(cells) for cells in body],
            source_id=source_id,
        )
    return PlaceholderTable(
        name=name,
        placeholder=token,
        rows=[PlaceholderRow.from_cells(cells) for cells in body],
        source_id=source_id,
    )


def parse_tables(text: str, source_id: str) -> dict[str, Table]:
    """Parse every roll table in a body of text.

    Args:
        text: Raw document text.
        source_id: Identifier of the document, used in diagnostics.

    Returns:
        Tables keyed by name, in source order. When two blocks share a name
        the first one is kept.
    """
    tables: dict[str, Table] = {}
    for block in iter_table_blocks(text):
        table = _build_table(block, source_id)
        if table is None:
            continue
        if table.name in tables:
            logger.warning("Duplicate table name", table=table.name, source_id=source_id)
            continue
        tables[table.name] = table

    logger.debug("Parsed tables", source_id=source_id, count=len(tables))
    return tables


__all__ = [
    "SEPARATOR_PATTERN",
    "is_pipe_line",
    "is_separator_line",
    "parse_table_row",
    "iter_table_blocks",
    "parse_tables",
]
