"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the catalog backend and the API gateway
using Pydantic Settings.

Both processes read the same Settings class; each one only looks at the
fields it needs (the gateway never touches database_url, the backend never
touches the timeouts).

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the catalog backend
        gateway_name: Display name for the API gateway
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Catalog backend port
        gateway_port: Gateway port
        database_url: SQLAlchemy database connection string
        seed_demo_data: Insert demo products on startup when the table is empty
        cors_origins: Allowed CORS origins (JSON array string)
        catalog_api_url: Base URL of the catalog backend, as seen by the gateway
        catalog_service_name: Service name reported in gateway error details
        request_timeout_ms: Bound for every forwarded backend call
        health_check_timeout_ms: Bound for the liveness probe

    Example:
        >>> settings = Settings()
        >>> settings.catalog_api_url
        'http://localhost:8000/api'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
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
        default="Product Catalog API",
        description="Display name for the catalog backend"
    )

    gateway_name: str = Field(
        default="Product API Gateway",
        description="Display name for the API gateway"
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
        default=8000,
        ge=1,
        le=65535,
        description="Catalog backend port"
    )

    gateway_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="API gateway port"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/catalog.db",
        description="SQLAlchemy database connection string"
    )

    seed_demo_data: bool = Field(
        default=False,
        description="Create demo products on startup if the catalog is empty"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # GATEWAY SETTINGS
    # =========================================================================
    catalog_api_url: str = Field(
        default="http://localhost:8000/api",
        description="Catalog backend base URL used by the gateway"
    )

    catalog_service_name: str = Field(
        default="catalog-service",
        min_length=1,
        description="Backend service name reported in error details"
    )

    request_timeout_ms: int = Field(
        default=5000,
        ge=1,
        le=120000,
        description="Timeout for forwarded backend calls in milliseconds"
    )

    health_check_timeout_ms: int = Field(
        default=3000,
        ge=1,
        le=60000,
        description="Timeout for the backend liveness probe in milliseconds"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize the environment name, falling back to development."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("catalog_api_url")
    @classmethod
    def validate_catalog_api_url(cls, value: str) -> str:
        """
        Validate the backend base URL.

        Raises:
            ValueError: If the URL is not http(s)
        """
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(
                f"catalog_api_url must be an http(s) URL, got: {value!r}"
            )
        return value.rstrip("/")

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

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
            Path to database file, or None for in-memory/non-SQLite databases
        """
        if self.database_url.startswith("sqlite:///"):
            db_path = self.database_url.replace("sqlite:///", "")
            if db_path.startswith("./"):
                db_path = db_path[2:]
            if db_path and db_path != ":memory:":
                return Path(db_path)
        return None

    def ensure_directories(self) -> None:
        """Create the SQLite database directory if needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"catalog_api_url={self.catalog_api_url!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
