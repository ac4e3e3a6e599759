"""Host glue: terminal chooser, text buffer, and the roll-table command."""

from __future__ import annotations

from roll_tables.ui.app import RollCommandResult, main, run_roll_table
from roll_tables.ui.console import ConsoleChooser
from roll_tables.ui.editor import Cursor, TextBuffer
from roll_tables.ui.prompts import describe_table, filter_rows, filter_tables, table_title


__all__ = [
    "ConsoleChooser",
    "Cursor",
    "TextBuffer",
    "RollCommandResult",
    "run_roll_table",
    "main",
    "describe_table",
    "filter_rows",
    "filter_tables",
    "table_title",
]
