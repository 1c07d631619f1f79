"""Test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from safir.logging import LogLevel, Profile, configure_logging

from jwtcheck.config import Config
from jwtcheck.constants import LOGGER_NAME
from jwtcheck.factory import Factory


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear configuration environment variables and configure logging."""
    for name in (
        "JWTCHECK_CORS_PROXY_URL",
        "JWTCHECK_LOG_LEVEL",
        "JWTCHECK_LOG_PROFILE",
        "JWTCHECK_SECRET",
    ):
        monkeypatch.delenv(name, raising=False)
    configure_logging(
        name=LOGGER_NAME,
        profile=Profile.production,
        log_level=LogLevel.DEBUG,
    )


@pytest.fixture
def config() -> Config:
    return Config()


@pytest_asyncio.fixture
async def factory(config: Config) -> AsyncIterator[Factory]:
    """Return a component factory with its own HTTP client."""
    async with Factory.standalone(config) as factory:
        yield factory
