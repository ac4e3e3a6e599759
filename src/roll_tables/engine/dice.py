"""Dice expression validation and rolling.

This module wraps the d20 library. Validation only parses an expression,
so it is pure and is what the table parser uses to tell rolled tables
from placeholder tables. Rolling consumes randomness and expects an
expression that has already passed validation.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any

import d20

from roll_tables.core.exceptions import DiceRollError
from roll_tables.core.logging import get_logger


logger = get_logger(__name__)

_parser = d20.Roller()


def is_valid_expression(expression: str) -> bool:
    """Check whether a string is a syntactically valid dice expression.

    Args:
        expression: Candidate expression such as '1d6' or '2d10+5'.

    Returns:
        False for empty input or anything the d20 grammar rejects.

    Example:
        >>> is_valid_expression("2d10+5")
        True
        >>> is_valid_expression("Choice")
        False
    """
    if not expression or not expression.strip():
        return False
    try:
        _parser.parse(expression)
    except d20.RollError:
        return False
    return True


@dataclass(frozen=True)
class DiceRoll:
    """The result of rolling one dice expression.

    Attributes:
        expression: The expression that was rolled.
        total: The integer total of the roll.
        dice: Individual kept die faces.
    """

    expression: str
    total: int
    dice: list[int] = field(default_factory=list)


class DiceRoller:
    """Rolls validated dice expressions with d20.

    Example:
        >>> roller = DiceRoller()
        >>> result = roller.roll("1d6")
        >>> 1 <= result.total <= 6
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional seed for the random source d20 draws from.
        """
        self._roller = d20.Roller()
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceRoll:
        """Roll a dice expression.

        Args:
            expression: A valid dice expression.

        Returns:
            DiceRoll with the total and the kept die faces.

        Raises:
            DiceRollError: If the expression is not a valid dice expression.
        """
        if not is_valid_expression(expression):
            raise DiceRollError("Invalid dice expression", expression=expression)

        try:
            result = self._roller.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(f"Dice roll failed: {exc}", expression=expression) from exc

        dice_roll = DiceRoll(
            expression=expression,
            total=int(result.total),
            dice=self._extract_dice_values(result.expr),
        )
        logger.debug("Dice rolled", expression=expression, total=dice_roll.total)
        return dice_roll

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Collect the kept die faces from a d20 expression tree."""
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def roll_total(expression: str) -> int:
    """Roll an expression with the shared roller and return its total.

    This is the default roll function of the outcome resolver.

    Args:
        expression: A valid dice expression.

    Returns:
        The integer total.

    Raises:
        DiceRollError: If the expression is not a valid dice expression.
    """
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller.roll(expression).total


__all__ = [
    "DiceRoll",
    "DiceRoller",
    "is_valid_expression",
    "roll_total",
]
