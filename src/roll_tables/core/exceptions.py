"""Custom exception hierarchy for roll-tables.

All exceptions inherit from RollTablesError so the command layer can
handle failures at a single boundary while keeping domain context.

Malformed table *data* never raises: the parser skips it and the resolver
reports "no outcome". These exceptions signal contract violations and
failures of external collaborators.

Example:
    >>> from roll_tables.core.exceptions import DiceRollError
    >>> raise DiceRollError("Invalid dice expression", expression="1dX")
"""

from __future__ import annotations

from typing import Any


class RollTablesError(Exception):
    """Base exception for all roll-tables errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(RollTablesError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(RollTablesError):
    """Raised when a value handed to the engine breaks its contract.

    Examples are a row built from no cells, or a chooser returning a row
    that does not belong to the table it was asked about.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Ingestion Domain Exceptions
# =============================================================================


class IngestionError(RollTablesError):
    """Base exception for errors while collecting source documents."""

    def __init__(
        self,
        message: str,
        *,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ingestion error with source document context.

        Args:
            message: Human-readable error description.
            source_id: Identifier of the document that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_id:
            combined_details["source_id"] = source_id
        super().__init__(message, details=combined_details)


class DocumentReadError(IngestionError):
    """Raised when a source document cannot be read.

    The loader catches this per document, so one unreadable file only
    removes its own tables from the merged mapping.
    """


# =============================================================================
# Engine Domain Exceptions
# =============================================================================


class EngineError(RollTablesError):
    """Base exception for resolution and traversal errors."""


class DiceRollError(EngineError):
    """Raised when a dice expression is rolled without being valid."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class ChainError(EngineError):
    """Raised when the command cannot start a chain.

    The traversal itself stops quietly on missing tables; this is for the
    command layer, e.g. a start table name that is not in the library.
    """

    def __init__(
        self,
        message: str,
        *,
        table_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if table_name:
            combined_details["table_name"] = table_name
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "RollTablesError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Ingestion exceptions
    "IngestionError",
    "DocumentReadError",
    # Engine exceptions
    "EngineError",
    "DiceRollError",
    "ChainError",
]
