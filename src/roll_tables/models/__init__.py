"""Pydantic models for roll tables, rows, and outcomes.

Tables and rows are discriminated unions on ``kind`` (see TableKind).
They are created once by the parser and read-only afterwards; outcomes
are created by the resolver and consumed by the renderer.
"""

from __future__ import annotations

from roll_tables.models.enums import TableKind
from roll_tables.models.tables import (
    Outcome,
    PlaceholderRow,
    PlaceholderTable,
    RolledRow,
    RolledTable,
    Row,
    Table,
)


__all__ = [
    "TableKind",
    "RolledRow",
    "PlaceholderRow",
    "Row",
    "RolledTable",
    "PlaceholderTable",
    "Table",
    "Outcome",
]
