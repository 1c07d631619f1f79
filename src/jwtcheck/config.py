"""Configuration for jwtcheck.

jwtcheck has very little configuration. All of it comes from environment
variables with the ``JWTCHECK_`` prefix, since it is used as a library and a
command-line tool rather than a deployed service.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from safir.logging import LogLevel, Profile, configure_logging

from .constants import CORS_PROXY_URL, LOGGER_NAME

__all__ = ["Config"]


class Config(BaseSettings):
    """Configuration for jwtcheck."""

    model_config = SettingsConfigDict(
        env_prefix="JWTCHECK_", extra="forbid", populate_by_name=True
    )

    cors_proxy_url: str = Field(
        CORS_PROXY_URL,
        title="CORS proxy URL prefix",
        description=(
            "Prefix used to retry a failed OpenID Connect metadata or JWKS"
            " request through a CORS proxy. The percent-encoded original URL"
            " is appended to it."
        ),
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Logging level",
        description="Python logging level",
    )

    log_profile: Profile = Field(
        Profile.development,
        title="Logging profile",
        description=(
            "Logging profile: ``production`` for JSON output or"
            " ``development`` for human-readable output"
        ),
    )

    def configure_logging(self) -> None:
        """Configure logging based on the jwtcheck configuration."""
        configure_logging(
            name=LOGGER_NAME,
            profile=self.log_profile,
            log_level=self.log_level,
        )
