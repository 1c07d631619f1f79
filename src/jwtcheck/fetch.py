"""Fetch issuer metadata with a single CORS proxy fallback.

A failed direct request, most often blocked by CORS when the metadata is
requested from a browser context, is retried once through a CORS proxy.
The attempts for a URL are built up front as a list and tried strictly in
order, which keeps the number of requests bounded at two.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import quote

from httpx import (
    AsyncClient,
    HTTPError,
    HTTPStatusError,
    InvalidURL,
    Response,
)
from structlog.stdlib import BoundLogger

from .exceptions import FetchKeysError

__all__ = [
    "FallbackFetcher",
    "FetchAttempt",
    "PlannedFetch",
    "build_proxy_url",
    "plan_attempts",
]


class FetchAttempt(StrEnum):
    """How a URL is requested."""

    direct = "direct"
    """Request the URL itself."""

    proxy = "proxy"
    """Request the URL through the CORS proxy."""


@dataclass(frozen=True, slots=True)
class PlannedFetch:
    """One request to try."""

    attempt: FetchAttempt
    """Whether this is the direct request or the proxy request."""

    url: str
    """URL to request."""


def build_proxy_url(url: str, proxy_url: str) -> str:
    """Rewrite a URL to go through the CORS proxy.

    The URL is percent-encoded the same way as JavaScript's
    ``encodeURIComponent``.

    Parameters
    ----------
    url
        Original URL.
    proxy_url
        Prefix of the CORS proxy, such as ``https://corsproxy.io/?``.

    Returns
    -------
    str
        The proxied URL.
    """
    return proxy_url + quote(url, safe="!~*'()")


def plan_attempts(
    url: str, *, use_proxy_always: bool, proxy_url: str
) -> list[PlannedFetch]:
    """Build the ordered list of requests to try for a URL.

    Parameters
    ----------
    url
        URL to retrieve.
    use_proxy_always
        If `True`, skip the direct request and only use the proxy.
    proxy_url
        Prefix of the CORS proxy.

    Returns
    -------
    list of PlannedFetch
        Either a direct request followed by a proxy request, or a single
        proxy request.
    """
    proxied = PlannedFetch(FetchAttempt.proxy, build_proxy_url(url, proxy_url))
    if use_proxy_always:
        return [proxied]
    return [PlannedFetch(FetchAttempt.direct, url), proxied]


class FallbackFetcher:
    """Retrieve URLs, falling back on a CORS proxy once.

    Parameters
    ----------
    http_client
        Client to use to make requests.
    proxy_url
        Prefix of the CORS proxy.
    logger
        Logger to use.
    """

    def __init__(
        self, http_client: AsyncClient, proxy_url: str, logger: BoundLogger
    ) -> None:
        self._http_client = http_client
        self._proxy_url = proxy_url
        self._logger = logger

    async def get(
        self,
        url: str,
        *,
        use_proxy_always: bool,
        error: type[FetchKeysError],
    ) -> Response:
        """Retrieve a URL.

        A non-success status and a transport failure are both treated as a
        failed attempt. Only the error from the last attempt is reported.

        Parameters
        ----------
        url
            URL to retrieve.
        use_proxy_always
            If `True`, only request the URL through the proxy.
        error
            Exception class to raise if every attempt fails.

        Returns
        -------
        httpx.Response
            Successful response.

        Raises
        ------
        FetchKeysError
            An instance of ``error``, raised if every attempt failed.
        """
        attempts = plan_attempts(
            url, use_proxy_always=use_proxy_always, proxy_url=self._proxy_url
        )
        message = f"Cannot retrieve {url}"
        last_error: Exception | None = None
        for planned in attempts:
            prefix = f"Cannot retrieve {url} ({planned.attempt})"
            logger = self._logger.bind(
                url=planned.url, attempt=str(planned.attempt)
            )
            try:
                r = await self._http_client.get(planned.url)
                r.raise_for_status()
            except HTTPStatusError as e:
                last_error = e
                reason = f"{e.response.status_code} {e.response.reason_phrase}"
                message = f"{prefix}: {reason}"
            except (HTTPError, InvalidURL) as e:
                last_error = e
                reason = f"{type(e).__name__}: {e!s}"
                message = f"{prefix}: {reason}"
            else:
                logger.debug("Retrieved URL")
                return r
            logger.info("Request failed", error=message)
        raise error(message) from last_error
