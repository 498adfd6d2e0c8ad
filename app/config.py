# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.STATIC_ROOT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The settings object is handed to create_app() once at startup; route
# handlers receive it through dependencies instead of importing it.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default, so the server starts with no
    environment at all and serves ./static on 127.0.0.1:8080.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    API_HOST: str = Field(
        default="127.0.0.1",
        description="Host to bind the server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the server"
    )

    # -------------------------------------------------------------------------
    # Static Files
    # -------------------------------------------------------------------------

    STATIC_ROOT: Path = Field(
        default=Path("static"),
        description="Directory every GET request must resolve inside of"
    )

    DEFAULT_DOCUMENT: str = Field(
        default="form.html",
        min_length=1,
        description="Document served for GET /, relative to STATIC_ROOT"
    )

    # -------------------------------------------------------------------------
    # Form Submissions
    # -------------------------------------------------------------------------

    SUBMISSION_LOG_PATH: Path = Field(
        default=Path("form_submissions.txt"),
        description="Append-only file receiving one line per accepted submission"
    )

    MAX_BODY_BYTES: int = Field(
        default=10 * 1024,
        ge=1,
        description="Largest accepted POST /submit body in bytes"
    )

    BODY_READ_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Time allowed for a client to deliver the request body"
    )

    # When False a failed append is logged and the client still gets 200.
    FAIL_ON_PERSISTENCE_ERROR: bool = Field(
        default=False,
        description="Return 500 to the client when the submission log cannot be written"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def max_body_kib(self) -> float:
        """Body cap in KiB, for log messages."""
        return self.MAX_BODY_BYTES / 1024


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
