"""Create jwtcheck components."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Self

import structlog
from httpx import AsyncClient
from structlog.stdlib import BoundLogger

from .config import Config
from .constants import LOGGER_NAME
from .fetch import FallbackFetcher
from .providers.oidc import OIDCKeyResolver
from .verify import TokenVerifier

__all__ = ["Factory"]


class Factory:
    """Build jwtcheck components.

    Uses the contents of a `~jwtcheck.config.Config` and a shared HTTP client
    to construct the components used to verify tokens. None of the components
    hold any state between verifications, so the factory may be shared.

    Parameters
    ----------
    config
        jwtcheck configuration.
    http_client
        Shared HTTP client, only used to talk to OpenID Connect providers.
    logger
        Logger to use for errors.
    """

    @classmethod
    @asynccontextmanager
    async def standalone(
        cls, config: Config | None = None
    ) -> AsyncIterator[Self]:
        """Async context manager for jwtcheck components.

        Intended for the command-line interface and other standalone uses.
        Creates its own HTTP client and closes it on exit.

        Parameters
        ----------
        config
            jwtcheck configuration. If not given, it is read from the
            environment.

        Yields
        ------
        Factory
            The factory. Must be used as an async context manager.
        """
        config = config or Config()
        logger = structlog.get_logger(LOGGER_NAME)
        async with AsyncClient(follow_redirects=True) as http_client:
            yield cls(config, http_client, logger)

    def __init__(
        self, config: Config, http_client: AsyncClient, logger: BoundLogger
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._logger = logger

    def create_fetcher(self) -> FallbackFetcher:
        """Create a fetcher with the configured CORS proxy fallback.

        Returns
        -------
        FallbackFetcher
            Newly-created fetcher.
        """
        return FallbackFetcher(
            self._http_client, self._config.cors_proxy_url, self._logger
        )

    def create_oidc_key_resolver(self) -> OIDCKeyResolver:
        """Create a resolver for keys from OpenID Connect providers.

        Returns
        -------
        OIDCKeyResolver
            Newly-created resolver.
        """
        return OIDCKeyResolver(self.create_fetcher(), self._logger)

    def create_token_verifier(self) -> TokenVerifier:
        """Create a token verifier.

        Returns
        -------
        TokenVerifier
            Newly-created verifier.
        """
        return TokenVerifier(self.create_oidc_key_resolver(), self._logger)
