"""Service settings read from the environment (or a local `.env`)."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Every field maps to the upper-cased environment variable of the same name."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./talentbook.db",
        description="SQLAlchemy URL of the notification store",
        min_length=1,
    )
    secret_key: str = Field(
        description="HMAC key used to sign access tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Lifetime of issued access tokens, in minutes",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name or UTC offset used to stamp records",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    app_base_url: str = Field(
        default="http://localhost:5173",
        description="Public URL of the front end, used to build links in emails",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    notification_list_limit: int = Field(
        default=20,
        description="Default number of notifications returned per listing",
        gt=0,
    )
    notification_retention_days: int = Field(
        default=30,
        description="Age in days after which notifications are purged",
        ge=0,
    )
    notification_bulk_mode: Literal["atomic", "partial"] = Field(
        default="atomic",
        description=(
            "Behaviour of bulk notification creation when some recipients do not "
            "exist: fail the whole batch or skip the invalid rows"
        ),
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for mirroring notifications by email",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
