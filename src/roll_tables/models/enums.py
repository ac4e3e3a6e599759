"""Enumerations for roll-tables models."""

from __future__ import annotations

from enum import StrEnum


class TableKind(StrEnum):
    """Discriminator for table and row polymorphism."""

    ROLLED = "rolled"
    """Outcome chosen by a dice roll matched against row ranges."""

    PLACEHOLDER = "placeholder"
    """Outcome chosen by an external actor from labeled rows."""


__all__ = [
    "TableKind",
]
