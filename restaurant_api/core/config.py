"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Local testing, sample menu and customers loaded at startup
    - STAGING: Pre-production checks
    - PRODUCTION: Live environment

Every setting can be overridden through an environment variable of the same
name (case-insensitive) or a .env file in the working directory.

Usage:
    from restaurant_api.core.config import get_settings

    settings = get_settings()
    if settings.seed_sample_data:
        # Populate the stores with the sample dishes/users/orders

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing
        PRODUCTION: Live environment
        STAGING: Pre-production testing
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details
        app_name: Display name used in the API docs and root endpoint
        app_version: Version reported by the API
        api_host: Host to bind the API server
        api_port: Port for the API server
        seed_sample_data: Load the sample dishes, users and orders at startup
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Restaurant Ordering API",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=3000,
        description="API server port"
    )

    # ==========================================================================
    # DATA
    # ==========================================================================

    seed_sample_data: bool = Field(
        default=True,
        description="Populate the in-memory stores with the sample menu at startup"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process; call ``get_settings.cache_clear()``
    to reload them after changing the environment.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.api_port)
        3000
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger("restaurant_api")

