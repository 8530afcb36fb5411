"""
Application configuration using Pydantic Settings.

Provides centralized configuration for:
- API settings (bind host and port)
- MongoDB connection and collection names
- Logging

All settings support environment variable overrides and .env file loading.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from functools import lru_cache


DEFAULT_MONGODB_URI = "mongodb://localhost:27017/?directConnection=true"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    prefix "DOG_WALKING_" (e.g., DOG_WALKING_LOG_LEVEL). The MongoDB
    connection string is also read from the bare MONGODB_URI variable.

    Environment variables are loaded from:
    1. System environment
    2. .env file in the current directory
    3. Default values defined below
    """

    # =========================================================================
    # API Settings
    # =========================================================================

    app_name: str = Field(
        default="Dog Walking Booking API",
        description="Application name"
    )
    app_version: str = Field(
        default="0.1.0",
        description="API version"
    )

    debug: bool = Field(
        default=False,
        description="Debug mode - enables verbose logging"
    )
    environment: str = Field(
        default="development",
        description="Environment: development|staging|production"
    )

    host: str = Field(
        default="localhost",
        description="API bind host"
    )
    port: int = Field(
        default=5001,
        description="API bind port",
        gt=0,
        lt=65536
    )

    # =========================================================================
    # MongoDB Settings
    # =========================================================================

    mongodb_uri: str = Field(
        default=DEFAULT_MONGODB_URI,
        description="MongoDB connection string",
        validation_alias=AliasChoices("MONGODB_URI", "DOG_WALKING_MONGODB_URI"),
    )
    mongodb_database: str = Field(
        default="dog_walking",
        description="Logical database name"
    )
    mongodb_server_selection_timeout_ms: int = Field(
        default=5000,
        description="How long the driver waits for a reachable server (ms)",
        gt=0
    )

    owner_collection: str = Field(
        default="owner",
        description="Collection holding owners"
    )
    dog_collection: str = Field(
        default="dog",
        description="Collection holding dogs"
    )
    booking_collection: str = Field(
        default="booking",
        description="Collection holding bookings"
    )

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG|INFO|WARNING|ERROR|CRITICAL"
    )
    log_format: str = Field(
        default="json",
        description="Log format: json|text"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got: {v}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got: {v}")
        return v_lower

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def mongodb_uri_redacted(self) -> str:
        """Connection string with credentials stripped, safe for logs."""
        scheme, sep, rest = self.mongodb_uri.partition("://")
        if "@" in rest:
            rest = rest.split("@", 1)[1]
        return f"{scheme}{sep}{rest}"

    # =========================================================================
    # Model Config
    # =========================================================================

    model_config = SettingsConfigDict(
        env_prefix="DOG_WALKING_",  # Environment variable prefix
        env_file=".env",             # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",              # Ignore extra environment variables
        validate_default=True,       # Validate default values
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once and shared
    across the application.

    Returns:
        Settings: Cached settings instance

    Example:
        >>> from api.src.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.mongodb_database)
        dog_walking
    """
    return Settings()


def clear_settings_cache():
    """
    Clear the settings cache.

    Useful for testing when you need to reload settings with different
    environment variables.
    """
    get_settings.cache_clear()
