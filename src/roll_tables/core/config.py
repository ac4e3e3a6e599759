"""Configuration management for roll-tables.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from roll_tables.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.vault.pattern
    '**/*.md'

Environment Variables:
    ROLL_TABLES_VAULT_PATH: Directory scanned for markdown documents
    ROLL_TABLES_VAULT_PATTERN: Glob used to enumerate documents
    ROLL_TABLES_VAULT_ENCODING: Encoding used to read documents
    ROLL_TABLES_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    ROLL_TABLES_JSON_LOGS: Emit JSON log lines instead of console output
    ROLL_TABLES_DICE_SEED: Seed for reproducible dice rolls
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from roll_tables.core.constants import DEFAULT_DOCUMENT_PATTERN, DEFAULT_ENCODING
from roll_tables.core.exceptions import ConfigurationError


class VaultSettings(BaseSettings):
    """Configuration for the directory of source documents.

    Attributes:
        path: Root directory scanned for documents.
        pattern: Glob (relative to path) selecting documents to parse.
        encoding: Text encoding used to read documents.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROLL_TABLES_VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: Path = Field(
        default=Path("."),
        description="Root directory of the document vault",
    )
    pattern: str = Field(
        default=DEFAULT_DOCUMENT_PATTERN,
        min_length=1,
        description="Glob selecting documents inside the vault",
    )
    encoding: str = Field(
        default=DEFAULT_ENCODING,
        description="Encoding used to read documents",
    )

    @field_validator("path", mode="after")
    @classmethod
    def ensure_not_a_file(cls, value: Path) -> Path:
        """Reject a vault path that points at a regular file.

        A missing directory is allowed; it simply yields no documents.

        Raises:
            ConfigurationError: If the path exists and is not a directory.
        """
        if value.exists() and not value.is_dir():
            raise ConfigurationError(
                f"Vault path {str(value)!r} is not a directory",
                config_key="vault.path",
            )
        return value


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines.
        dice_seed: Optional seed for the dice random source.
        vault: Document vault settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROLL_TABLES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Roll Tables",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    dice_seed: int | None = Field(
        default=None,
        description="Seed for reproducible dice rolls",
    )

    vault: VaultSettings = Field(default_factory=VaultSettings)

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "VaultSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
