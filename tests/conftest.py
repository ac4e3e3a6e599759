"""Pytest configuration and shared fixtures.

This module provides common fixtures for the roll-tables test suite.
Dice are injected through plain roll functions so that every test that
resolves a rolled table is deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import structlog

from roll_tables.engine.dice import DiceRoller
from roll_tables.models import PlaceholderRow, PlaceholderTable, RolledRow, RolledTable, Table


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from roll_tables.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop logging configuration made by a test, including captured streams."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Markdown Fixtures
# =============================================================================


TEST_TABLE_MARKDOWN = """\
| 1d6 | TestTable |
| --- | --------- |
| 1-3 | Result 1 |
| 4-6 | Result 2 |
"""

JOURNEY_MARKDOWN = """\
# Travel

Some notes before the tables.

| 1d6 | Weather |
| :-- | :-----: |
| 1-2 | Rain | Wind |
| 3-5 | Clear skies |
| 6 | Storm | Wind |

| 1d4 | Wind |
| --- | ---- |
| 1-2 | Calm |
| 3-4 | Gale | Shelter |

| Where do you shelter? | Shelter |
| --------------------- | ------- |
| Cave | You find a dry cave. |
| Tree | You huddle under an old oak. | Weather |
"""


@pytest.fixture
def sample_table_markdown() -> str:
    """A single rolled table named TestTable."""
    return TEST_TABLE_MARKDOWN


@pytest.fixture
def journey_markdown() -> str:
    """Three linked tables: Weather -> Wind -> Shelter (placeholder)."""
    return JOURNEY_MARKDOWN


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """A vault directory with two documents and a non-markdown file."""
    vault = tmp_path / "vault"
    (vault / "tables").mkdir(parents=True)
    (vault / "tables" / "journey.md").write_text(JOURNEY_MARKDOWN, encoding="utf-8")
    (vault / "test.md").write_text(TEST_TABLE_MARKDOWN, encoding="utf-8")
    (vault / "ignored.txt").write_text(TEST_TABLE_MARKDOWN, encoding="utf-8")
    return vault


# =============================================================================
# Model Factories
# =============================================================================


def make_rolled_table(
    name: str,
    roll: str,
    rows: Iterable[Iterable[str]],
) -> RolledTable:
    """Build a rolled table from row cell lists."""
    return RolledTable(
        name=name,
        roll=roll,
        rows=[RolledRow.from_cells(list(cells)) for cells in rows],
    )


def make_placeholder_table(
    name: str,
    placeholder: str,
    rows: Iterable[Iterable[str]],
) -> PlaceholderTable:
    """Build a placeholder table from row cell lists."""
    return PlaceholderTable(
        name=name,
        placeholder=placeholder,
        rows=[PlaceholderRow.from_cells(list(cells)) for cells in rows],
    )


@pytest.fixture
def chain_tables() -> dict[str, RolledTable]:
    """FirstTable links to SecondTable, which ends the chain."""
    return {
        "FirstTable": make_rolled_table("FirstTable", "1d6", [["1-6", "First result", "SecondTable"]]),
        "SecondTable": make_rolled_table("SecondTable", "1d4", [["1-4", "Second result"]]),
    }


@pytest.fixture
def loop_tables() -> dict[str, RolledTable]:
    """LoopTable1 and LoopTable2 link to each other."""
    return {
        "LoopTable1": make_rolled_table("LoopTable1", "1d6", [["1-6", "First result", "LoopTable2"]]),
        "LoopTable2": make_rolled_table("LoopTable2", "1d4", [["1-4", "Second result", "LoopTable1"]]),
    }


# =============================================================================
# Engine Fixtures
# =============================================================================


def fixed_roll(*totals: int) -> Callable[[str], int]:
    """A roll function returning the given totals in order, then repeating the last."""
    remaining = list(totals)

    def roll(expression: str) -> int:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return roll


class ScriptedChooser:
    """A chooser that answers with preset placeholder labels.

    Attributes:
        answers: Placeholder label to pick per table name.
        start_table: Name returned by choose_table.
        asked: Table names the chooser was asked about, in order.
    """

    def __init__(
        self,
        answers: dict[str, str] | None = None,
        start_table: str | None = None,
    ) -> None:
        self.answers = answers or {}
        self.start_table = start_table
        self.asked: list[str] = []

    def choose_table(self, tables: Mapping[str, Table]) -> Table | None:
        if self.start_table is None:
            return None
        return tables[self.start_table]

    def choose_row(self, table: PlaceholderTable) -> PlaceholderRow | None:
        self.asked.append(table.name)
        label = self.answers.get(table.name)
        for row in table.rows:
            if row.placeholder == label:
                return row
        return None

    __call__ = choose_row


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def rolled_table_factory() -> Callable[..., RolledTable]:
    """Factory building rolled tables from row cell lists."""
    return make_rolled_table


@pytest.fixture
def placeholder_table_factory() -> Callable[..., PlaceholderTable]:
    """Factory building placeholder tables from row cell lists."""
    return make_placeholder_table


@pytest.fixture
def roll_sequence() -> Callable[..., Callable[[str], int]]:
    """Factory for deterministic roll functions."""
    return fixed_roll


@pytest.fixture
def scripted_chooser() -> type[ScriptedChooser]:
    """The ScriptedChooser class, for tests that need preset answers."""
    return ScriptedChooser
