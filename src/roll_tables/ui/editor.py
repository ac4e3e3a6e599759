"""A minimal line/column text buffer for inserting rendered outcomes.

Positions use zero-based ``line`` and ``ch`` (column) like most editors.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from roll_tables.core.constants import DEFAULT_ENCODING
from roll_tables.core.exceptions import ValidationError


@dataclass(frozen=True)
class Cursor:
    """A position in a text buffer.

    Attributes:
        line: Zero-based line index.
        ch: Zero-based column within the line.
    """

    line: int = 0
    ch: int = 0


class TextBuffer:
    """Editable text addressed by line and column.

    Example:
        >>> buffer = TextBuffer("Session notes\\n")
        >>> buffer.insert_at(Cursor(1, 0), "Weather\\n1d6: 3\\nRain\\n\\n")
        Cursor(line=5, ch=0)
    """

    def __init__(self, text: str = "") -> None:
        self._lines = text.split("\n")

    @classmethod
    def from_file(cls, path: Path, *, encoding: str = DEFAULT_ENCODING) -> TextBuffer:
        """Load a buffer from a file; a missing file gives an empty buffer."""
        if not path.exists():
            return cls()
        return cls(path.read_text(encoding=encoding))

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def end(self) -> Cursor:
        """Cursor after the last character of the buffer."""
        return Cursor(len(self._lines) - 1, len(self._lines[-1]))

    def insert_at(self, position: Cursor, text: str) -> Cursor:
        """Insert text at a position and return the cursor just after it.

        Args:
            position: Where to insert.
            text: Text to insert; may span several lines.

        Returns:
            The cursor positioned at the end of the inserted text.

        Raises:
            ValidationError: If the position is outside the buffer.
        """
        if not 0 <= position.line < len(self._lines):
            raise ValidationError(
                "Cursor line is outside the buffer",
                field_name="line",
                invalid_value=position.line,
            )
        current = self._lines[position.line]
        if not 0 <= position.ch <= len(current):
            raise ValidationError(
                "Cursor column is outside the line",
                field_name="ch",
                invalid_value=position.ch,
            )

        spliced = current[: position.ch] + text + current[position.ch :]
        self._lines[position.line : position.line + 1] = spliced.split("\n")

        pieces = text.split("\n")
        if len(pieces) == 1:
            return Cursor(position.line, position.ch + len(text))
        return Cursor(position.line + len(pieces) - 1, len(pieces[-1]))

    def write_to(self, path: Path, *, encoding: str = DEFAULT_ENCODING) -> None:
        path.write_text(self.text, encoding=encoding)


__all__ = [
    "Cursor",
    "TextBuffer",
]
