"""Application-wide constants for roll-tables."""

from __future__ import annotations

# =============================================================================
# Document Sources
# =============================================================================

DEFAULT_DOCUMENT_PATTERN = "**/*.md"
"""Glob used to enumerate documents inside a vault directory."""

DEFAULT_ENCODING = "utf-8"
"""Encoding used to read vault documents."""

# =============================================================================
# Table Picker
# =============================================================================

TABLE_PICKER_PROMPT = "Select a table..."
"""Prompt shown when the user picks the table to start a chain from."""

NOTHING_INSERTED_MESSAGE = "No table selected."
"""Notice shown when a chain renders to empty text."""


__all__ = [
    "DEFAULT_DOCUMENT_PATTERN",
    "DEFAULT_ENCODING",
    "TABLE_PICKER_PROMPT",
    "NOTHING_INSERTED_MESSAGE",
]
