"""
Configuration Management Module

This module handles all application configuration using Pydantic Settings.
Configuration is loaded from environment variables with strong typing and validation.

Design Decisions:
- Use Pydantic Settings for automatic environment variable loading
- Every setting is optional so the receiver can start for local testing
- An unset webhook secret disables signature verification (logged loudly)
- Empty strings count as unset for secrets and URLs
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values are loaded from environment variables only,
    never hardcoded or logged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # =========================================================================
    # Levanta Configuration
    # =========================================================================
    levanta_webhook_secret: Optional[str] = Field(
        default=None,
        description="Shared secret for HMAC-SHA256 signature verification"
    )

    body_read_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=300.0,
        description="Maximum seconds to wait for the full request body"
    )

    # =========================================================================
    # Notification Sinks
    # =========================================================================
    discord_webhook_url: Optional[str] = Field(
        default=None,
        description="Discord webhook URL for outbound notifications"
    )

    slack_webhook_url: Optional[str] = Field(
        default=None,
        description="Slack incoming webhook URL for outbound notifications"
    )

    telegram_bot_token: Optional[str] = Field(
        default=None,
        description="Telegram bot token for outbound notifications"
    )

    telegram_chat_id: Optional[str] = Field(
        default=None,
        description="Telegram chat ID that receives notifications"
    )

    notification_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Timeout in seconds for outbound notification requests"
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port to bind the server"
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_json_format: bool = Field(
        default=True,
        description="Enable JSON logging format"
    )

    log_requests: bool = Field(
        default=False,
        description="Enable request/response logging"
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator(
        "levanta_webhook_secret",
        "discord_webhook_url",
        "slack_webhook_url",
        "telegram_bot_token",
        "telegram_chat_id",
    )
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings as unset."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    # =========================================================================
    # Computed Properties
    # =========================================================================
    @property
    def signature_verification_enabled(self) -> bool:
        """Whether incoming webhooks are checked against a secret."""
        return self.levanta_webhook_secret is not None

    @property
    def telegram_configured(self) -> bool:
        """Telegram needs both a bot token and a chat ID."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once,
    which is important for performance and consistency.

    Returns:
        Settings instance
    """
    return Settings()
