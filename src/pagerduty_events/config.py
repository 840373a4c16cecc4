"""Settings for the events client and command line.

Configuration is loaded from:
- environment variables prefixed with ``PAGERDUTY_``
- and a local `.env` file (if present)

The library itself never reads settings implicitly; pass them to
`EventClient.from_settings` or use the `pagerduty-event` command.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagerduty_events.client import DEFAULT_API_URL, DEFAULT_TIMEOUT
from pagerduty_events.event import SERVICE_KEY_LENGTH


class EventsSettings(BaseSettings):
    """Settings for sending events.

    Environment variables:
    - PAGERDUTY_API_URL      (optional)
    - PAGERDUTY_TIMEOUT      (optional, seconds; 0 disables the timeout)
    - PAGERDUTY_SERVICE_KEY  (optional default service key)
    - PAGERDUTY_DRY_RUN      (optional)
    - PAGERDUTY_LOG_LEVEL    (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `EventsSettings(_env_file=path_to_env)`.
    """

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Events API endpoint",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        ge=0.0,
        description="Request timeout in seconds (0 means no timeout)",
    )
    service_key: str | None = Field(
        default=None,
        description="Default service key used when none is given explicitly",
    )
    dry_run: bool = Field(
        default=False,
        description="Render events without sending them",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGERDUTY_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("service_key")
    @classmethod
    def _check_service_key(cls, value: str | None) -> str | None:
        if value is not None and len(value) != SERVICE_KEY_LENGTH:
            raise ValueError(f"service_key must be {SERVICE_KEY_LENGTH} characters long")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value!r}")
        return level
