"""
Application settings, loaded from ``GIFTDESK_*`` environment variables.

Usage:
    from giftdesk.config import Settings

    settings = Settings.from_env()
    settings.database_url   # None selects the in-memory adapters
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "GIFTDESK_"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Flat, immutable application configuration."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        frozen=True,
        extra="ignore",
        case_sensitive=False,
    )

    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy async URL; unset keeps everything in memory",
    )
    jwt_secret: str = Field(
        default="change-me-change-me-change-me-32b",
        description="HS256 signing secret for access tokens",
    )
    jwt_issuer: str = "giftdesk"
    jwt_ttl_seconds: int = Field(default=3600, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    mail_sender: str = "noreply@giftdesk.local"
    max_gifts_per_year: int = Field(default=3, ge=1)
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("database_url")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def uses_database(self) -> bool:
        return self.database_url is not None

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides: Any) -> Settings:
        """Read settings from the environment under *prefix*.

        Keyword *overrides* win over the environment.
        """
        return cls(_env_prefix=prefix, **overrides)
