"""roll-tables - Markdown roll tables with chained outcomes.

Pipe tables in markdown documents become roll tables. A table whose first
header cell is a dice expression is rolled; any other table is a
placeholder table whose row is picked by the user. Rows can name a next
table, so one roll can walk a chain of tables; the visited outcomes are
rendered to text.

Example:
    >>> from roll_tables import parse_tables, roll_table, render_outcomes
    >>>
    >>> tables = parse_tables(text, "encounters.md")
    >>> outcomes = roll_table(tables, "Forest Encounter", chooser)
    >>> print(render_outcomes(outcomes))

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic models for tables, rows, and outcomes.
    ingestion: Markdown table parsing and document vaults.
    engine: Dice, outcome resolution, chain traversal, and rendering.
    ui: Terminal chooser, text buffer, and the roll-table command.
"""

from __future__ import annotations

# Core
from roll_tables.core.config import Settings, get_settings
from roll_tables.core.exceptions import RollTablesError
from roll_tables.core.logging import configure_logging, get_logger

# Models
from roll_tables.models import (
    Outcome,
    PlaceholderRow,
    PlaceholderTable,
    RolledRow,
    RolledTable,
    TableKind,
)

# Ingestion
from roll_tables.ingestion import DirectoryVault, load_tables, parse_tables

# Engine
from roll_tables.engine import (
    ChainResult,
    ChainStopReason,
    is_valid_expression,
    render_outcomes,
    roll_table,
    traverse,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "RollTablesError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "TableKind",
    "RolledRow",
    "PlaceholderRow",
    "RolledTable",
    "PlaceholderTable",
    "Outcome",
    # Ingestion
    "parse_tables",
    "load_tables",
    "DirectoryVault",
    # Engine
    "is_valid_expression",
    "roll_table",
    "traverse",
    "render_outcomes",
    "ChainResult",
    "ChainStopReason",
]
