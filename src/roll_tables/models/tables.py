"""Table, row, and outcome models.

Rows and tables come in two variants, rolled and placeholder, modelled as
discriminated unions on the ``kind`` field. Every derived attribute
(``roll``, ``placeholder``, ``value``, ``next_table``) is an explicit field
filled in once when the row is built from its raw cells.

Models:
    RolledRow / PlaceholderRow: One body line of a table.
    RolledTable / PlaceholderTable: A parsed table block.
    Outcome: The record of resolving one table once.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from roll_tables.core.exceptions import ValidationError
from roll_tables.models.enums import TableKind


def _split_cells(cells: Sequence[str]) -> tuple[tuple[str, ...], str, str, str]:
    """Return (cells, key, value, next_table) for a row's raw cells.

    Raises:
        ValidationError: If no cells are given.
    """
    if not cells:
        raise ValidationError("A row needs at least one cell", field_name="cells")
    cells = tuple(cells)
    value = cells[1] if len(cells) > 1 else ""
    next_table = cells[2] if len(cells) > 2 else ""
    return cells, cells[0], value, next_table


# =============================================================================
# Rows
# =============================================================================


class RolledRow(BaseModel):
    """A row of a rolled table.

    Attributes:
        kind: Row type discriminator.
        cells: Raw trimmed cell values in source order.
        roll: Range ("4-6") or single value ("7") matched against a roll.
        value: Outcome text for this row.
        next_table: Name of the table the chain continues into, or "".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[TableKind.ROLLED] = Field(
        default=TableKind.ROLLED,
        description="Row type discriminator",
    )
    cells: tuple[str, ...] = Field(min_length=1, description="Raw cell values")
    roll: str = Field(description="Range or single value matched against a roll")
    value: str = Field(default="", description="Outcome text")
    next_table: str = Field(default="", description="Table to continue into")

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> RolledRow:
        """Build a rolled row from its trimmed cells."""
        cells, roll, value, next_table = _split_cells(cells)
        return cls(cells=cells, roll=roll, value=value, next_table=next_table)


class PlaceholderRow(BaseModel):
    """A row of a placeholder table.

    Attributes:
        kind: Row type discriminator.
        cells: Raw trimmed cell values in source order.
        placeholder: Label shown to whoever picks the row.
        value: Outcome text for this row.
        next_table: Name of the table the chain continues into, or "".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[TableKind.PLACEHOLDER] = Field(
        default=TableKind.PLACEHOLDER,
        description="Row type discriminator",
    )
    cells: tuple[str, ...] = Field(min_length=1, description="Raw cell values")
    placeholder: str = Field(description="Label shown to the chooser")
    value: str = Field(default="", description="Outcome text")
    next_table: str = Field(default="", description="Table to continue into")

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> PlaceholderRow:
        """Build a placeholder row from its trimmed cells."""
        cells, placeholder, value, next_table = _split_cells(cells)
        return cls(cells=cells, placeholder=placeholder, value=value, next_table=next_table)


Row = Annotated[
    RolledRow | PlaceholderRow,
    Field(discriminator="kind", description="A table row (rolled or placeholder)"),
]
"""Discriminated union of row variants, keyed on ``kind``."""


# =============================================================================
# Tables
# =============================================================================


class RolledTable(BaseModel):
    """A table resolved by rolling its dice expression.

    Attributes:
        kind: Table type discriminator.
        name: Unique table name (second header cell).
        roll: Dice expression from the first header cell.
        rows: Rows in source line order.
        is_valid: True once the block has been structurally accepted.
        source_id: Document the table was parsed from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[TableKind.ROLLED] = Field(
        default=TableKind.ROLLED,
        description="Table type discriminator",
    )
    name: str = Field(min_length=1, description="Unique table name")
    roll: str = Field(min_length=1, description="Dice expression")
    rows: tuple[RolledRow, ...] = Field(default=(), description="Rows in source order")
    is_valid: bool = Field(default=True, description="Structurally accepted")
    source_id: str = Field(default="", description="Source document identifier")

    @property
    def label(self) -> str:
        """Short description shown by table pickers."""
        return f"Roll: {self.roll}"


class PlaceholderTable(BaseModel):
    """A table resolved by an external choice among its rows.

    Attributes:
        kind: Table type discriminator.
        name: Unique table name (second header cell).
        placeholder: Prompt label from the first header cell.
        rows: Rows in source line order.
        is_valid: True once the block has been structurally accepted.
        source_id: Document the table was parsed from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[TableKind.PLACEHOLDER] = Field(
        default=TableKind.PLACEHOLDER,
        description="Table type discriminator",
    )
    name: str = Field(min_length=1, description="Unique table name")
    placeholder: str = Field(min_length=1, description="Prompt label")
    rows: tuple[PlaceholderRow, ...] = Field(default=(), description="Rows in source order")
    is_valid: bool = Field(default=True, description="Structurally accepted")
    source_id: str = Field(default="", description="Source document identifier")

    @property
    def label(self) -> str:
        """Short description shown by table pickers."""
        return f"Select: {self.placeholder}"


Table = Annotated[
    RolledTable | PlaceholderTable,
    Field(discriminator="kind", description="A roll table (rolled or placeholder)"),
]
"""Discriminated union of table variants, keyed on ``kind``."""


# =============================================================================
# Outcome
# =============================================================================


class Outcome(BaseModel):
    """The immutable result of resolving one table once.

    Placeholder outcomes leave ``table_roll`` and ``dice_roll`` empty; the
    renderer relies on that to tell them apart from rolled outcomes.

    Attributes:
        table_name: Name of the resolved table.
        table_roll: The table's dice expression, or "" for placeholders.
        dice_roll: The rolled total as text, or "" for placeholders.
        row: The matched or chosen row.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    table_name: str = Field(description="Name of the resolved table")
    table_roll: str = Field(default="", description="Dice expression rolled")
    dice_roll: str = Field(default="", description="Rolled total")
    row: Row

    @property
    def is_placeholder(self) -> bool:
        """Whether this outcome came from a placeholder choice."""
        return not self.table_roll and not self.dice_roll


__all__ = [
    "RolledRow",
    "PlaceholderRow",
    "Row",
    "RolledTable",
    "PlaceholderTable",
    "Table",
    "Outcome",
]
