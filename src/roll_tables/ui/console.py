"""Interactive chooser on a terminal.

The chooser lists numbered entries and reads an answer: a number picks that
entry, any other text narrows the list to entries containing it, and a blank
answer or end of input cancels.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence
from typing import TextIO, TypeVar

from roll_tables.core.constants import TABLE_PICKER_PROMPT
from roll_tables.core.logging import get_logger
from roll_tables.models import PlaceholderRow, PlaceholderTable, Table
from roll_tables.ui.prompts import describe_table, filter_rows, filter_tables


logger = get_logger(__name__)

T = TypeVar("T")


class ConsoleChooser:
    """Picks tables and placeholder rows by prompting on a terminal.

    Args:
        input_func: Reads one answer for a prompt (defaults to input).
        output: Stream the numbered entries are written to.
    """

    def __init__(
        self,
        *,
        input_func: Callable[[str], str] | None = None,
        output: TextIO | None = None,
    ) -> None:
        self._input = input_func or input
        self._output = output or sys.stdout

    def choose_table(self, tables: Mapping[str, Table]) -> Table | None:
        """Ask which table to start a chain from."""
        return self._pick(
            TABLE_PICKER_PROMPT,
            list(tables.values()),
            describe_table,
            lambda query: filter_tables(tables, query),
        )

    def choose_row(self, table: PlaceholderTable) -> PlaceholderRow | None:
        """Ask which row of a placeholder table to use."""
        return self._pick(
            table.placeholder,
            list(table.rows),
            lambda row: row.placeholder,
            lambda query: filter_rows(table.rows, query),
        )

    __call__ = choose_row

    def _pick(
        self,
        prompt: str,
        items: Sequence[T],
        describe: Callable[[T], str],
        search: Callable[[str], list[T]],
    ) -> T | None:
        candidates = list(items)
        if not candidates:
            logger.info("Nothing to choose from", prompt=prompt)
            return None

        while True:
            for number, item in enumerate(candidates, start=1):
                self._output.write(f"{number}. {describe(item)}\n")
            self._output.flush()

            try:
                answer = self._input(f"{prompt} ").strip()
            except EOFError:
                return None
            if not answer:
                return None

            if answer.isdigit() and 1 <= int(answer) <= len(candidates):
                return candidates[int(answer) - 1]

            matches = [item for item in search(answer) if item in candidates]
            if len(matches) == 1:
                return matches[0]
            if not matches:
                self._output.write(f"No matches for {answer!r}.\n")
                continue
            candidates = matches


__all__ = [
    "ConsoleChooser",
]
