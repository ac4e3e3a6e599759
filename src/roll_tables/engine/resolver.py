"""Outcome resolution for a single table.

A rolled table is resolved by rolling its dice expression once and taking
the first row, in source order, whose range or value matches the total.
A placeholder table is resolved by asking a chooser for one of its rows.
Either way the result is an Outcome, or None when the table cannot
produce one.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from roll_tables.core.exceptions import DiceRollError, ValidationError
from roll_tables.core.logging import get_logger
from roll_tables.engine.dice import is_valid_expression, roll_total
from roll_tables.models import Outcome, PlaceholderRow, PlaceholderTable, RolledTable, Table


logger = get_logger(__name__)

RollFunction = Callable[[str], int]
"""Rolls a valid dice expression and returns its total."""

RowChooser = Callable[[PlaceholderTable], PlaceholderRow | None]
"""Picks one row of a placeholder table, or returns None to cancel."""

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def row_matches(row_roll: str, value: int) -> bool:
    """Check whether a rolled row's roll token covers a rolled value.

    Args:
        row_roll: A range such as '4-6' or a single value such as '7'.
        value: The rolled total.

    Returns:
        True if the value falls in the range or equals the single value.
        Tokens that cannot be read as numbers never match.

    Example:
        >>> row_matches("4-6", 5)
        True
        >>> row_matches("7", 6)
        False
    """
    if "-" in row_roll:
        low, _, high = row_roll.partition("-")
        try:
            return int(low) <= value <= int(high)
        except ValueError:
            return False

    match = _LEADING_INT.match(row_roll)
    if match is None:
        return False
    return int(match.group(1)) == value


def resolve_rolled(table: RolledTable, *, roll: RollFunction = roll_total) -> Outcome | None:
    """Roll a table's dice and find the matching row.

    Args:
        table: The rolled table to resolve.
        roll: Function rolling the table's expression.

    Returns:
        Outcome for the first matching row, or None if no row matches or
        a valid expression cannot be rolled (such as "1d0").

    Raises:
        DiceRollError: If the table's expression is not a valid dice expression.
    """
    try:
        rolled = roll(table.roll)
    except DiceRollError as exc:
        if not is_valid_expression(table.roll):
            raise
        logger.error("Dice roll failed", table=table.name, expression=table.roll, error=exc.message)
        return None
    logger.debug("Rolled table", table=table.name, expression=table.roll, total=rolled)

    for row in table.rows:
        if row_matches(row.roll, rolled):
            return Outcome(
                table_name=table.name,
                table_roll=table.roll,
                dice_roll=str(rolled),
                row=row,
            )

    logger.warning("No matching row", table=table.name, total=rolled)
    return None


def resolve_placeholder(table: PlaceholderTable, chooser: RowChooser) -> Outcome | None:
    """Ask the chooser for a row of a placeholder table.

    Args:
        table: The placeholder table to resolve.
        chooser: Collaborator that picks a row, or returns None to cancel.

    Returns:
        Outcome for the chosen row, or None if the chooser cancelled.

    Raises:
        ValidationError: If the chooser returns a row of another table.
    """
    row = chooser(table)
    if row is None:
        logger.info("Placeholder choice cancelled", table=table.name)
        return None
    if row not in table.rows:
        raise ValidationError(
            f"Chosen row does not belong to table {table.name!r}",
            field_name="row",
            invalid_value=row.placeholder,
        )
    return Outcome(table_name=table.name, row=row)


def resolve(
    table: Table,
    chooser: RowChooser,
    *,
    roll: RollFunction = roll_total,
) -> Outcome | None:
    """Resolve a table of either kind to an Outcome.

    Args:
        table: The table to resolve.
        chooser: Row chooser used for placeholder tables.
        roll: Roll function used for rolled tables.

    Returns:
        The Outcome, or None when the table produced nothing.
    """
    if isinstance(table, RolledTable):
        return resolve_rolled(table, roll=roll)
    if isinstance(table, PlaceholderTable):
        return resolve_placeholder(table, chooser)
    raise TypeError(f"Unsupported table type: {type(table).__name__}")


__all__ = [
    "RollFunction",
    "RowChooser",
    "row_matches",
    "resolve_rolled",
    "resolve_placeholder",
    "resolve",
]
