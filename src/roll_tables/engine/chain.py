"""Chain traversal across linked tables.

Starting from one table, the traversal resolves the current table, records
its outcome, and follows the chosen row's ``next_table`` link. It stops when
the next table does not exist, when a table produces no outcome, or when the
link points back at a table already visited in this run. Each table is
therefore resolved at most once, which bounds a run by the number of tables
even when the links form cycles.

The only point where a run waits on the outside world is a placeholder
table. ChainTraversal.steps() is a generator that yields such tables and
expects the chosen row (or None) to be sent back, so any driver can supply
the choice: a blocking prompt, a callback, or a scripted test.

Example:
    >>> outcomes = roll_table(tables, "Weather", chooser)
    >>> list(outcomes)
    ['Weather', 'Wind']
"""

from __future__ import annotations

from collections.abc import Generator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from roll_tables.core.logging import get_logger
from roll_tables.engine.dice import roll_total
from roll_tables.engine.resolver import (
    RollFunction,
    RowChooser,
    resolve_placeholder,
    resolve_rolled,
)
from roll_tables.models import Outcome, PlaceholderRow, PlaceholderTable, Table


logger = get_logger(__name__)


class ChainStopReason(StrEnum):
    """Why a traversal stopped."""

    MISSING_TABLE = "missing_table"
    """The next table name is not in the table mapping."""

    NO_OUTCOME = "no_outcome"
    """The current table produced no outcome (no match or cancelled choice)."""

    CYCLE_DETECTED = "cycle_detected"
    """The next table was already resolved in this run."""


@dataclass
class ChainResult:
    """Result of one traversal.

    Attributes:
        outcomes: Outcomes keyed by table name, in visiting order.
        stop_reason: Why the traversal stopped.
        last_table: The table name the traversal stopped at.
    """

    stop_reason: ChainStopReason
    outcomes: dict[str, Outcome] = field(default_factory=dict)
    last_table: str = ""


class ChainTraversal:
    """A single run over a table mapping from a starting table."""

    def __init__(
        self,
        tables: Mapping[str, Table],
        start_name: str,
        *,
        roll: RollFunction = roll_total,
    ) -> None:
        self._tables = tables
        self._start_name = start_name
        self._roll = roll

    def steps(self) -> Generator[PlaceholderTable, PlaceholderRow | None, ChainResult]:
        """Run the traversal, yielding placeholder tables that need a choice.

        Yields:
            Each placeholder table reached; send back its chosen row or None.

        Returns:
            The ChainResult once the traversal stops.
        """
        outcomes: dict[str, Outcome] = {}
        current = self._start_name

        while True:
            table = self._tables.get(current)
            if table is None:
                return self._finish(outcomes, ChainStopReason.MISSING_TABLE, current)

            logger.debug("Resolving table", table=current, kind=table.kind)
            if isinstance(table, PlaceholderTable):
                chosen = yield table
                outcome = resolve_placeholder(table, lambda _table, row=chosen: row)
            else:
                outcome = resolve_rolled(table, roll=self._roll)

            if outcome is None:
                return self._finish(outcomes, ChainStopReason.NO_OUTCOME, current)

            outcomes[current] = outcome
            next_name = outcome.row.next_table
            if next_name in outcomes:
                return self._finish(outcomes, ChainStopReason.CYCLE_DETECTED, next_name)
            current = next_name

    def _finish(
        self,
        outcomes: dict[str, Outcome],
        reason: ChainStopReason,
        last_table: str,
    ) -> ChainResult:
        logger.info(
            "Chain finished",
            start_table=self._start_name,
            outcomes=len(outcomes),
            stop_reason=reason,
            last_table=last_table,
        )
        return ChainResult(stop_reason=reason, outcomes=outcomes, last_table=last_table)


def traverse(
    tables: Mapping[str, Table],
    start_name: str,
    chooser: RowChooser,
    *,
    roll: RollFunction = roll_total,
) -> ChainResult:
    """Run a traversal, answering placeholder tables with a blocking chooser.

    Args:
        tables: Table mapping keyed by name.
        start_name: Name of the table to start from.
        chooser: Picks a row of a placeholder table, or None to cancel.
        roll: Roll function used for rolled tables.

    Returns:
        The ChainResult of the run.
    """
    steps = ChainTraversal(tables, start_name, roll=roll).steps()
    try:
        pending = next(steps)
        while True:
            pending = steps.send(chooser(pending))
    except StopIteration as stop:
        return stop.value


def roll_table(
    tables: Mapping[str, Table],
    start_name: str,
    chooser: RowChooser,
    *,
    roll: RollFunction = roll_total,
) -> dict[str, Outcome]:
    """Resolve a chain of tables and return its outcomes.

    Args:
        tables: Table mapping keyed by name.
        start_name: Name of the table to start from.
        chooser: Picks a row of a placeholder table, or None to cancel.
        roll: Roll function used for rolled tables.

    Returns:
        Outcomes keyed by table name, in visiting order.
    """
    return traverse(tables, start_name, chooser, roll=roll).outcomes


__all__ = [
    "ChainStopReason",
    "ChainResult",
    "ChainTraversal",
    "traverse",
    "roll_table",
]
