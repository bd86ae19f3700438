"""Application composition root.

This module wires configuration and logging together and exposes the checks that depend on
configuration, such as authentication staleness.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.config.logging import configure_logging
from src.config.settings import Settings, load_settings
from src.datatypes.schema import User


@dataclass(frozen=True)
class App:
    """Shared application dependencies for pipeline stages."""

    settings: Settings

    def is_authenticated(self, user: User, *, now: datetime | None = None) -> bool:
        """Whether `user` authenticated within the configured `REQUIRE_AUTH_IN_HOURS` window."""

        return user.is_authenticated(
            require_auth_in_hours=self.settings.require_auth_in_hours,
            now=now,
        )


def create_app(settings: Settings | None = None) -> App:
    """Create the application container, loading settings from the environment if not given."""

    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level, log_structured_inputs=settings.log_structured_inputs)
    return App(settings=settings)
