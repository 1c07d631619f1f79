"""Constants for jwtcheck."""

from __future__ import annotations

__all__ = [
    "CORS_PROXY_URL",
    "DISCOVERY_PATH",
    "HMAC_ALGORITHMS",
    "LOGGER_NAME",
]

CORS_PROXY_URL = "https://corsproxy.io/?"
"""Default prefix for fetches through the CORS proxy.

The original URL, percent-encoded as a single query component, is appended
to this prefix.
"""

DISCOVERY_PATH = "/.well-known/openid-configuration"
"""Path, relative to the issuer URL, of the OpenID Connect metadata."""

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")
"""Algorithms accepted for verification with a shared secret."""

LOGGER_NAME = "jwtcheck"
"""Name of the structlog logger used throughout jwtcheck."""
