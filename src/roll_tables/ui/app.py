"""The roll-table command.

Loads every table in the vault, lets the user pick a starting table (or
takes one by name), resolves the chain, and inserts the rendered text at a
cursor in a target document or prints it.

Usage:
    roll-tables --vault notes --list
    roll-tables --vault notes --table Weather
    roll-tables --vault notes --insert notes/session.md --line 12
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from roll_tables.core.config import Settings, VaultSettings, get_settings
from roll_tables.core.constants import NOTHING_INSERTED_MESSAGE
from roll_tables.core.exceptions import ChainError, RollTablesError
from roll_tables.core.logging import bind_context, clear_context, configure_logging, get_logger
from roll_tables.engine.chain import ChainResult, traverse
from roll_tables.engine.dice import DiceRoller
from roll_tables.engine.render import render_outcomes
from roll_tables.engine.resolver import RollFunction
from roll_tables.ingestion.vault import DirectoryVault, load_tables
from roll_tables.models import PlaceholderRow, PlaceholderTable, Table
from roll_tables.ui.console import ConsoleChooser
from roll_tables.ui.editor import Cursor, TextBuffer
from roll_tables.ui.prompts import describe_table


logger = get_logger(__name__)


class Chooser(Protocol):
    """Interactive selection of the start table and of placeholder rows."""

    def choose_table(self, tables: dict[str, Table]) -> Table | None: ...

    def choose_row(self, table: PlaceholderTable) -> PlaceholderRow | None: ...


@dataclass
class RollCommandResult:
    """What one run of the roll-table command produced.

    Attributes:
        text: Rendered outcome text; empty when nothing was produced.
        chain: The traversal result, or None if no table was selected.
        cursor: Cursor after the inserted text, when inserting into a file.
    """

    text: str = ""
    chain: ChainResult | None = None
    cursor: Cursor | None = None

    @property
    def inserted(self) -> bool:
        return self.cursor is not None


def load_vault_tables(settings: Settings) -> dict[str, Table]:
    """Load every table from the configured vault."""
    vault = DirectoryVault(
        settings.vault.path,
        pattern=settings.vault.pattern,
        encoding=settings.vault.encoding,
    )
    return load_tables(vault)


def run_roll_table(
    settings: Settings,
    chooser: Chooser,
    *,
    table_name: str | None = None,
    insert_into: Path | None = None,
    cursor: Cursor | None = None,
    roll: RollFunction | None = None,
) -> RollCommandResult:
    """Run the roll-table command once.

    Args:
        settings: Application settings (vault location, dice seed).
        chooser: Picks the start table and placeholder rows.
        table_name: Start table; when None the chooser picks one.
        insert_into: Document to insert the rendered text into.
        cursor: Insert position in that document; defaults to its end.
        roll: Roll function override; defaults to a d20 roller.

    Returns:
        The rendered text, the chain result, and the new cursor if inserted.

    Raises:
        ChainError: If table_name is not a known table.
    """
    bind_context(vault=str(settings.vault.path))
    try:
        tables = load_vault_tables(settings)

        if table_name is None:
            selected = chooser.choose_table(tables)
            if selected is None:
                logger.info("No table selected")
                return RollCommandResult()
            table_name = selected.name
        elif table_name not in tables:
            raise ChainError("Unknown table", table_name=table_name)

        bind_context(start_table=table_name)
        if roll is None:
            roller = DiceRoller(seed=settings.dice_seed)
            roll = lambda expression: roller.roll(expression).total  # noqa: E731

        chain = traverse(tables, table_name, chooser.choose_row, roll=roll)
        text = render_outcomes(chain.outcomes)
        result = RollCommandResult(text=text, chain=chain)
        if not text or insert_into is None:
            return result

        buffer = TextBuffer.from_file(insert_into, encoding=settings.vault.encoding)
        result.cursor = buffer.insert_at(cursor or buffer.end, text)
        buffer.write_to(insert_into, encoding=settings.vault.encoding)
        logger.info("Inserted outcomes", path=str(insert_into), cursor=result.cursor)
        return result
    finally:
        clear_context()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roll-tables",
        description="Roll on markdown tables and follow their chains.",
    )
    parser.add_argument("--vault", type=Path, help="directory of markdown documents")
    parser.add_argument("--table", help="start table name (prompted when omitted)")
    parser.add_argument("--list", action="store_true", help="list available tables and exit")
    parser.add_argument("--insert", type=Path, metavar="FILE", help="insert the result into FILE")
    parser.add_argument("--line", type=int, help="zero-based insert line (default: end of file)")
    parser.add_argument("--ch", type=int, default=0, help="zero-based insert column")
    parser.add_argument("--seed", type=int, help="seed for reproducible rolls")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="override the configured log level",
    )
    parser.add_argument("--json-logs", action="store_true", help="emit JSON log lines")
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    update: dict[str, object] = {}
    if args.vault is not None:
        update["vault"] = VaultSettings(
            path=args.vault,
            pattern=settings.vault.pattern,
            encoding=settings.vault.encoding,
        )
    if args.seed is not None:
        update["dice_seed"] = args.seed
    if args.log_level is not None:
        update["log_level"] = args.log_level
    if args.json_logs:
        update["json_logs"] = True
    return settings.model_copy(update=update) if update else settings


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``roll-tables`` console script."""
    args = build_parser().parse_args(argv)

    try:
        settings = _apply_overrides(get_settings(), args)
        configure_logging(level=settings.effective_log_level, json_format=settings.json_logs)

        if args.list:
            for table in load_vault_tables(settings).values():
                print(describe_table(table))
            return 0

        cursor = Cursor(args.line, args.ch) if args.line is not None else None
        result = run_roll_table(
            settings,
            ConsoleChooser(output=sys.stderr),
            table_name=args.table,
            insert_into=args.insert,
            cursor=cursor,
        )
    except RollTablesError as exc:
        logger.error("Roll table command failed", error=exc.message, **exc.details)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not result.text:
        print(NOTHING_INSERTED_MESSAGE, file=sys.stderr)
        return 1
    if not result.inserted:
        sys.stdout.write(result.text)
    return 0


__all__ = [
    "Chooser",
    "RollCommandResult",
    "load_vault_tables",
    "run_roll_table",
    "build_parser",
    "main",
]
