"""
wishlink/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (storage backend, scheduler, hashing)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Storage
    STORAGE_BACKEND: Literal["memory", "file", "mongo"] = Field(
        default="file",
        description="Key-value store backend for wishes, users and the session"
    )
    STORAGE_DIR: str = Field(
        default="data",
        description="Directory holding one JSON file per key (file backend)"
    )
    MONGODB_URL: Optional[str] = Field(
        default=None,
        description="MongoDB connection URI (mongo backend)"
    )
    MONGODB_DB_NAME: str = Field(
        default="wishlink",
        description="MongoDB database name"
    )
    MONGODB_COLLECTION: str = Field(
        default="kv",
        description="Collection holding one document per key"
    )

    # Notification scheduler
    SCHEDULER_ENABLED: bool = Field(
        default=True,
        description="Run the SMS poller in the background while the app is up"
    )
    POLL_INTERVAL_SECONDS: int = Field(
        default=60,
        description="Seconds between two scheduled notification passes"
    )
    SMS_SEND_HOUR: int = Field(
        default=9,
        description="Earliest local hour at which scheduled SMS go out"
    )
    TIMEZONE: Optional[str] = Field(
        default=None,
        description="IANA timezone used for 'today' (server local time when unset)"
    )
    DESKTOP_NOTIFICATIONS: bool = Field(
        default=False,
        description="Emit a best-effort notification after each simulated SMS"
    )

    # Security
    PASSWORD_HASH_SCHEME: Literal["pbkdf2", "legacy"] = Field(
        default="pbkdf2",
        description="Digest used for new passwords"
    )
    PASSWORD_HASH_ITERATIONS: int = Field(
        default=100_000,
        description="PBKDF2 iteration count"
    )

    # Wishes
    WISH_CODE_MAX_ATTEMPTS: int = Field(
        default=10,
        description="Draws allowed when looking for an unused wish code"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("POLL_INTERVAL_SECONDS")
    @classmethod
    def validate_poll_interval(cls, v):
        """Poll interval must be positive."""
        if v <= 0:
            raise ValueError("POLL_INTERVAL_SECONDS must be positive")
        return v

    @field_validator("SMS_SEND_HOUR")
    @classmethod
    def validate_send_hour(cls, v):
        """Send hour is an hour of the day."""
        if not 0 <= v <= 23:
            raise ValueError("SMS_SEND_HOUR must be between 0 and 23")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if config.STORAGE_BACKEND == "mongo" and not config.MONGODB_URL:
        errors.append("MONGODB_URL is required for the mongo storage backend")

    if config.TIMEZONE:
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            ZoneInfo(config.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown TIMEZONE: {config.TIMEZONE}")

    # Production-specific validations
    if config.is_production:
        if config.STORAGE_BACKEND == "memory":
            errors.append("STORAGE_BACKEND=memory is not durable and not allowed in production")
        if config.PASSWORD_HASH_SCHEME == "legacy":
            errors.append("PASSWORD_HASH_SCHEME=legacy is not allowed in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
