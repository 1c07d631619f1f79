"""Enums used in jwtcheck models.

Notes
-----
These are kept in a separate module because the exception classes need to
refer to them and the models in turn refer to the exceptions.
"""

from __future__ import annotations

from enum import StrEnum

__all__ = ["ErrorKind"]


class ErrorKind(StrEnum):
    """Stable, machine-readable reason why a token did not verify."""

    malformed_token = "malformed_token"
    """The token is not three dot-separated segments."""

    malformed_encoding = "malformed_encoding"
    """A token segment is not valid Base64URL."""

    malformed_json = "malformed_json"
    """The header or payload is not a JSON object."""

    key_format = "key_format"
    """The verification key could not be parsed."""

    algorithm_key_mismatch = "algorithm_key_mismatch"
    """The algorithm cannot be used with the type or curve of the key."""

    unsupported_algorithm = "unsupported_algorithm"
    """The algorithm is missing or not one that jwtcheck supports."""

    unsupported_key_type = "unsupported_key_type"
    """The key is neither an RSA nor an elliptic curve key."""

    signature_mismatch = "signature_mismatch"
    """The signature does not match the key."""

    missing_key_id = "missing_key_id"
    """The token header has no ``kid``."""

    key_not_found = "key_not_found"
    """No key in the issuer's JWKS has the token's ``kid``."""

    issuer_mismatch = "issuer_mismatch"
    """The ``iss`` claim does not match the issuer metadata."""

    discovery_fetch = "discovery_fetch"
    """The OpenID Connect metadata could not be retrieved."""

    discovery_missing_jwks_uri = "discovery_missing_jwks_uri"
    """The OpenID Connect metadata has no ``jwks_uri``."""

    jwks_fetch = "jwks_fetch"
    """The issuer's JWKS could not be retrieved."""

    jwks_parse = "jwks_parse"
    """The issuer's JWKS could not be parsed."""
