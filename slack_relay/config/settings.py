"""
Application settings and configuration management.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings, read from SLACK_RELAY_* environment variables."""

    # Server Configuration
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8787)
    log_level: str = Field(default="INFO")

    # Relay configuration file (enabled flag, webhook URL, default thread)
    config_path: str = Field(
        default="slack-relay-config.json",
        validation_alias=AliasChoices("SLACK_RELAY_CONFIG", "config_path"),
        description="Path to the relay configuration file, re-read on every request"
    )

    # Duplicate suppression
    dedupe_window_ms: int = Field(
        default=90_000,
        validation_alias=AliasChoices("SLACK_RELAY_DEDUPE_MS", "dedupe_window_ms"),
        description="Window in milliseconds during which a repeated event signature is suppressed. "
        "Zero or negative disables suppression."
    )

    # Outbound webhook
    webhook_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices("SLACK_RELAY_WEBHOOK_TIMEOUT", "webhook_timeout_seconds"),
        description="Timeout in seconds for a single webhook POST"
    )

    @field_validator('config_path', mode='after')
    @classmethod
    def strip_config_path(cls, v: str) -> str:
        """Strip whitespace from the config path to avoid common configuration errors."""
        return v.strip() if v else v

    @field_validator('webhook_timeout_seconds', mode='after')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("webhook_timeout_seconds must be positive")
        return v

    model_config = SettingsConfigDict(
        env_prefix="SLACK_RELAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
