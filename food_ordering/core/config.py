"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.

The JSON data files, the product cache freshness window, the allowed CORS
origins and the optional document store are all driven from here so that
services never read os.environ directly.

Usage:
    from food_ordering.core.config import get_settings

    settings = get_settings()
    store_path = settings.products_file

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from food_ordering import __version__


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local run, verbose startup
        PRODUCTION: Deployed storefront
        STAGING: Pre-production deployment
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # API Configuration
        api_host: Host to bind the API server
        api_port: Port for the API server (PORT)

        # Storage
        data_directory: Directory holding products.json and orders.json
        file_lock_timeout: Seconds to wait for a data file lock
        cache_ttl_seconds: Freshness window of the cached snapshots

        # Catalog
        placeholder_image: Image used when a product has none

        # Document store
        database_url: SQLAlchemy async URL; unset disables the order archive
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
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
        default="Food Ordering API",
        description="Application display name"
    )
    app_version: str = Field(
        default=__version__,
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=3010,
        validation_alias=AliasChoices("port", "api_port"),
        description="API server port"
    )
    cors_origins: str = Field(
        default="https://your-user-app.netlify.app,https://your-admin-app.netlify.app",
        description="Comma-separated list of allowed CORS origins"
    )

    # ==========================================================================
    # FILE STORAGE
    # ==========================================================================

    data_directory: str = Field(
        default="data",
        description="Directory for the JSON data files"
    )
    products_filename: str = Field(
        default="products.json",
        description="Products document filename"
    )
    orders_filename: str = Field(
        default="orders.json",
        description="Orders document filename"
    )
    order_counter_filename: str = Field(
        default="orders.counter.json",
        description="Persisted next order id"
    )
    file_lock_timeout: float = Field(
        default=10,
        description="Seconds to wait for a data file lock"
    )

    # ==========================================================================
    # CACHE
    # ==========================================================================

    cache_ttl_seconds: float = Field(
        default=300,
        ge=0,
        description="Freshness window of cached snapshots (5 minutes)"
    )

    # ==========================================================================
    # CATALOG
    # ==========================================================================

    placeholder_image: str = Field(
        default="https://via.placeholder.com/300",
        description="Image URL used when a product has none"
    )

    # ==========================================================================
    # DOCUMENT STORE
    # ==========================================================================

    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy URL for the order archive (disabled when unset)"
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

    @field_validator("database_url", mode="before")
    @classmethod
    def blank_database_url(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty DATABASE_URL as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def document_store_enabled(self) -> bool:
        """Check if orders should also be archived to the document store."""
        return self.database_url is not None

    @property
    def data_path(self) -> Path:
        return Path(self.data_directory)

    @property
    def products_file(self) -> Path:
        return self.data_path / self.products_filename

    @property
    def orders_file(self) -> Path:
        return self.data_path / self.orders_filename

    @property
    def order_counter_file(self) -> Path:
        return self.data_path / self.order_counter_filename


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once. Tests that
    change the environment call ``get_settings.cache_clear()``.

    Returns:
        Settings: Configured application settings
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
        Configured application logger
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
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("filelock").setLevel(logging.WARNING)

    return logging.getLogger("food_ordering")
