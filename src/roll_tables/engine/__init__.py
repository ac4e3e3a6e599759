"""Roll engine: dice, outcome resolution, chain traversal, and rendering.

Submodules:
    dice: Dice expression validation and rolling (d20 library)
    resolver: Resolves one table to an Outcome
    chain: Follows next-table links with cycle detection
    render: Turns outcomes into text

Example:
    >>> from roll_tables.engine import roll_table, render_outcomes
    >>> outcomes = roll_table(tables, "Weather", chooser)
    >>> print(render_outcomes(outcomes))
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================
from roll_tables.engine.dice import (
    DiceRoll,
    DiceRoller,
    is_valid_expression,
    roll_total,
)

# =============================================================================
# Resolution
# =============================================================================
from roll_tables.engine.resolver import (
    RollFunction,
    RowChooser,
    resolve,
    resolve_placeholder,
    resolve_rolled,
    row_matches,
)

# =============================================================================
# Traversal & Rendering
# =============================================================================
from roll_tables.engine.chain import (
    ChainResult,
    ChainStopReason,
    ChainTraversal,
    roll_table,
    traverse,
)
from roll_tables.engine.render import render_outcome, render_outcomes


__all__ = [
    # Dice
    "DiceRoll",
    "DiceRoller",
    "is_valid_expression",
    "roll_total",
    # Resolution
    "RollFunction",
    "RowChooser",
    "resolve",
    "resolve_placeholder",
    "resolve_rolled",
    "row_matches",
    # Traversal
    "ChainResult",
    "ChainStopReason",
    "ChainTraversal",
    "roll_table",
    "traverse",
    # Rendering
    "render_outcome",
    "render_outcomes",
]
