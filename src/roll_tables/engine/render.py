"""Rendering of outcomes into insertable text."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from roll_tables.models import Outcome


def render_outcome(outcome: Outcome) -> str:
    """Render one outcome.

    Rolled outcomes always render as a four-line block; placeholder
    outcomes render their value alone, and nothing when it is blank.

    Example:
        >>> render_outcome(outcome)
        'Weather\\n1d6: 3\\nRain\\n\\n'
    """
    if outcome.is_placeholder:
        value = outcome.row.value
        return f"{value}\n\n" if value.strip() else ""
    return (
        f"{outcome.table_name}\n"
        f"{outcome.table_roll}: {outcome.dice_roll}\n"
        f"{outcome.row.value}\n\n"
    )


def render_outcomes(outcomes: Iterable[Outcome] | Mapping[str, Outcome]) -> str:
    """Render outcomes in order and concatenate them.

    Args:
        outcomes: Outcomes in traversal order, or the mapping returned by
            roll_table.

    Returns:
        The rendered text. An empty string is a valid result.
    """
    if isinstance(outcomes, Mapping):
        outcomes = outcomes.values()
    return "".join(render_outcome(outcome) for outcome in outcomes)


__all__ = [
    "render_outcome",
    "render_outcomes",
]
