"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single cached Settings instance is shared by the whole process.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Catalog Tuning:
--------------
- CACHE_SIZE: LRU capacity (invalid or non-positive values fall back
  to 10000)
- SEARCH_DEFAULT_LIMIT / SEARCH_MAX_LIMIT: result bounds for search
- RESOLVER_MAX_WORKERS: worker pool size for candidate resolution

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 10000


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy database connection string
        db_connect_retries: Connection attempts before startup fails
        db_connect_retry_delay: Seconds between connection attempts
        cache_size: Maximum number of products held in the LRU cache
        search_default_limit: Result bound used when none is given
        search_max_limit: Largest result bound a caller may request
        resolver_max_workers: Worker threads used to resolve candidates
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> settings.cache_size
        10000
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Product Search API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/products.db",
        description="SQLAlchemy database connection string"
    )

    db_connect_retries: int = Field(
        default=5,
        ge=1,
        le=60,
        description="Connection attempts before giving up at startup"
    )

    db_connect_retry_delay: float = Field(
        default=2.0,
        ge=0,
        le=60,
        description="Seconds to wait between connection attempts"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    cache_size: int = Field(
        default=DEFAULT_CACHE_SIZE,
        description="Maximum number of products held in the LRU cache"
    )

    search_default_limit: int = Field(
        default=50,
        ge=1,
        description="Result bound used when the caller gives none"
    )

    search_max_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Largest result bound a caller may request"
    )

    resolver_max_workers: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Worker threads used to resolve search candidates"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize the environment name, defaulting unknown values."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("cache_size", mode="before")
    @classmethod
    def validate_cache_size(cls, value: Any) -> int:
        """
        Parse the cache capacity leniently.

        Non-numeric or non-positive values fall back to the default
        capacity instead of failing startup.

        Args:
            value: Raw value from the environment or defaults

        Returns:
            A positive cache capacity
        """
        try:
            size = int(value)
        except (TypeError, ValueError):
            logger.warning(
                f"Invalid CACHE_SIZE {value!r}, using {DEFAULT_CACHE_SIZE}"
            )
            return DEFAULT_CACHE_SIZE

        if size <= 0:
            logger.warning(
                f"Non-positive CACHE_SIZE {size}, using {DEFAULT_CACHE_SIZE}"
            )
            return DEFAULT_CACHE_SIZE

        return size

    @model_validator(mode="after")
    def validate_search_limits(self) -> "Settings":
        """Keep the default search limit within the maximum."""
        if self.search_default_limit > self.search_max_limit:
            logger.warning(
                f"search_default_limit {self.search_default_limit} exceeds "
                f"search_max_limit {self.search_max_limit}, clamping"
            )
            self.search_default_limit = self.search_max_limit
        return self

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string to list."""
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for SQLite databases.

        Returns:
            Path to database file, or None for non-SQLite or in-memory
            databases
        """
        if not self.database_url.startswith("sqlite"):
            return None

        db_path = self.database_url.replace("sqlite:///", "", 1)
        if not db_path or db_path.startswith("sqlite:") or db_path == ":memory:":
            return None
        if db_path.startswith("./"):
            db_path = db_path[2:]
        return Path(db_path)

    def ensure_directories(self) -> None:
        """Create the SQLite database directory when needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug}, "
            f"cache_size={self.cache_size})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Returns:
        Global Settings instance
    """
    settings = Settings()
    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
