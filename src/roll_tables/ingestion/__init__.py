"""Ingestion of markdown documents into roll tables.

Submodules:
    markdown_parser: Finds and classifies pipe tables in text
    vault: Document sources and the merged table library
"""

from __future__ import annotations

from roll_tables.ingestion.markdown_parser import (
    is_separator_line,
    iter_table_blocks,
    parse_table_row,
    parse_tables,
)
from roll_tables.ingestion.vault import (
    DirectoryVault,
    DocumentSource,
    load_tables,
    merge_tables,
)


__all__ = [
    # Parsing
    "parse_tables",
    "parse_table_row",
    "iter_table_blocks",
    "is_separator_line",
    # Document sources
    "DocumentSource",
    "DirectoryVault",
    "load_tables",
    "merge_tables",
]
