"""Document sources and the merged table library.

A document source enumerates documents and reads their text. The loader
parses every document and merges the per-document tables in scan order,
keeping the first table seen for any name. A document that cannot be read
is logged and skipped; the others still contribute.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

from roll_tables.core.constants import DEFAULT_DOCUMENT_PATTERN, DEFAULT_ENCODING
from roll_tables.core.exceptions import DocumentReadError
from roll_tables.core.logging import get_logger
from roll_tables.ingestion.markdown_parser import parse_tables
from roll_tables.models import Table


logger = get_logger(__name__)


class DocumentSource(Protocol):
    """Enumerates and reads source documents."""

    def list_documents(self) -> list[str]:
        """Return document identifiers in scan order."""
        ...

    def read_document(self, source_id: str) -> str:
        """Return the text of one document.

        Raises:
            DocumentReadError: If the document cannot be read.
        """
        ...


class DirectoryVault:
    """A directory of markdown documents on disk.

    Document identifiers are POSIX paths relative to the vault root, listed
    in sorted order so that the scan order does not depend on the filesystem.

    Example:
        >>> vault = DirectoryVault(Path("notes"))
        >>> vault.list_documents()
        ['tables/weather.md', 'travel.md']
    """

    def __init__(
        self,
        root: Path,
        *,
        pattern: str = DEFAULT_DOCUMENT_PATTERN,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.root = Path(root)
        self.pattern = pattern
        self.encoding = encoding

    def list_documents(self) -> list[str]:
        if not self.root.is_dir():
            logger.warning("Vault directory not found", root=str(self.root))
            return []
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.glob(self.pattern)
            if path.is_file()
        )

    def read_document(self, source_id: str) -> str:
        path = self.root / source_id
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(
                f"Failed to read document: {exc}",
                source_id=source_id,
            ) from exc


def merge_tables(parsed: Iterable[tuple[str, Mapping[str, Table]]]) -> dict[str, Table]:
    """Merge per-document table mappings in scan order.

    Args:
        parsed: (source_id, tables) pairs in document scan order.

    Returns:
        One mapping where each name keeps the first table seen for it.
    """
    merged: dict[str, Table] = {}
    for source_id, tables in parsed:
        for name, table in tables.items():
            if name in merged:
                logger.warning(
                    "Duplicate table name",
                    table=name,
                    source_id=source_id,
                    kept_from=merged[name].source_id,
                )
                continue
            merged[name] = table
    return merged


def load_tables(source: DocumentSource) -> dict[str, Table]:
    """Read and parse every document of a source into one table mapping.

    Args:
        source: The document source to scan.

    Returns:
        Tables keyed by name, first occurrence in scan order winning.
    """
    parsed: list[tuple[str, dict[str, Table]]] = []
    for source_id in source.list_documents():
        try:
            text = source.read_document(source_id)
        except DocumentReadError as exc:
            logger.error("Skipping unreadable document", source_id=source_id, error=exc.message)
            continue
        parsed.append((source_id, parse_tables(text, source_id)))

    tables = merge_tables(parsed)
    logger.info("Loaded tables", documents=len(parsed), tables=len(tables))
    return tables


__all__ = [
    "DocumentSource",
    "DirectoryVault",
    "merge_tables",
    "load_tables",
]
