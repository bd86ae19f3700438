"""Environment configuration and validation.

Settings are loaded from environment variables (optionally via a local `.env` file) and passed
explicitly to the code that needs them; nothing else in the project reads the environment.
"""

from __future__ import annotations

import logging

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_REQUIRE_AUTH_IN_HOURS = 168


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    require_auth_in_hours: int = Field(
        default=DEFAULT_REQUIRE_AUTH_IN_HOURS,
        ge=0,
        alias="REQUIRE_AUTH_IN_HOURS",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_structured_inputs: bool = Field(default=False, alias="LOG_STRUCTURED_INPUTS")


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid (e.g. a negative
            `REQUIRE_AUTH_IN_HOURS`).
    """

    try:
        settings = Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc

    if "require_auth_in_hours" not in settings.model_fields_set:
        logger.warning(
            "REQUIRE_AUTH_IN_HOURS is not set; using %d hours (one week) as the default",
            DEFAULT_REQUIRE_AUTH_IN_HOURS,
        )
    return settings
