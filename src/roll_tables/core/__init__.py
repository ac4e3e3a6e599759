"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        RollTablesError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Contract violations on engine inputs.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from roll_tables.core.config import (
    Settings,
    VaultSettings,
    clear_settings_cache,
    get_settings,
)
from roll_tables.core.exceptions import (
    ChainError,
    ConfigurationError,
    DiceRollError,
    DocumentReadError,
    EngineError,
    IngestionError,
    RollTablesError,
    ValidationError,
)
from roll_tables.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


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
    # Configuration
    "Settings",
    "VaultSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
