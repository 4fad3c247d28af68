"""
VBAM Centralized Configuration

Provides validated, type-safe access to environment variables using Pydantic Settings.

Usage:
    from vbam_cma.core.config import get_settings

    settings = get_settings()
    folder = settings.campaigns_dir

Data Paths:
    Campaign databases live in a per-application folder under the platform
    user data directory (e.g. ~/.local/share/vbamcma on Linux), one
    <Campaign_Name>.db file per campaign.

Environment Variables:
    VBAM_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    VBAM_DEBUG: Legacy debug flag (enables DEBUG level if set)
    VBAM_LOG_JSON: Output logs as JSON
    VBAM_DATA_DIR: Override the campaign storage folder
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from platformdirs import user_data_dir
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Folder name under the platform user data directory
APP_DIR_NAME = "vbamcma"


class VbamSettings(BaseSettings):
    """
    VBAM configuration settings with validation.

    Environment variables are automatically loaded with the VBAM_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="VBAM_",
        extra="ignore",
        case_sensitive=False,
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for VBAM components",
    )

    debug: bool = Field(
        default=False,
        description="Legacy debug flag (enables DEBUG level if set)",
    )

    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format for machine parsing",
    )

    # =========================================================================
    # Data Paths
    # =========================================================================

    data_dir: Optional[Path] = Field(
        default=None,
        description="Campaign storage folder (defaults to the platform user data dir)",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def effective_log_level(self) -> str:
        """
        Get effective log level, respecting legacy VBAM_DEBUG.

        Priority:
        1. Explicit VBAM_LOG_LEVEL
        2. VBAM_DEBUG=1 -> DEBUG
        3. Default: WARNING
        """
        if self.debug and self.log_level == "WARNING":
            return "DEBUG"
        return self.log_level

    @property
    def log_level_int(self) -> int:
        """Get effective log level as logging constant."""
        return getattr(logging, self.effective_log_level)

    @property
    def campaigns_dir(self) -> Path:
        """Folder holding the campaign databases."""
        if self.data_dir is not None:
            return self.data_dir
        return Path(user_data_dir(APP_DIR_NAME, appauthor=False))


@lru_cache(maxsize=1)
def get_settings() -> VbamSettings:
    """
    Get the singleton settings instance.

    The settings are validated at first access.
    """
    return VbamSettings()


def reset_settings() -> None:
    """
    Reset the settings cache (for testing).

    After calling this, the next get_settings() call will
    reload settings from environment variables.
    """
    get_settings.cache_clear()
