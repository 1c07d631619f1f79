"""Exceptions for jwtcheck."""

from __future__ import annotations

from typing import ClassVar

from .models.enums import ErrorKind

__all__ = [
    "AlgorithmKeyMismatchError",
    "DiscoveryFetchError",
    "DiscoveryMissingJwksUriError",
    "FetchKeysError",
    "IssuerMismatchError",
    "JwksFetchError",
    "JwksParseError",
    "KeyFormatError",
    "KeyMaterialError",
    "MalformedEncodingError",
    "MalformedJsonError",
    "MalformedTokenError",
    "MissingKeyIdError",
    "SignatureMismatchError",
    "TokenFormatError",
    "UnknownKeyIdError",
    "UnsupportedAlgorithmError",
    "UnsupportedKeyTypeError",
    "VerifyTokenError",
]


class VerifyTokenError(Exception):
    """Base exception class for failure in verifying a token.

    Every failure that can happen while decoding a token, loading a key,
    retrieving keys from an issuer, or checking a signature is represented
    by a subclass of this exception. The orchestration layer catches it and
    turns it into a failed verification result.
    """

    kind: ClassVar[ErrorKind]
    """The stable error kind reported for this exception."""


class TokenFormatError(VerifyTokenError):
    """The token could not be decoded at all."""


class MalformedTokenError(TokenFormatError):
    """The token is not three non-empty dot-separated segments."""

    kind = ErrorKind.malformed_token


class MalformedEncodingError(TokenFormatError):
    """A token segment is not valid Base64URL."""

    kind = ErrorKind.malformed_encoding


class MalformedJsonError(TokenFormatError):
    """The header or payload is not valid JSON or not a JSON object."""

    kind = ErrorKind.malformed_json


class KeyMaterialError(VerifyTokenError):
    """The key or the requested algorithm is not usable."""


class KeyFormatError(KeyMaterialError):
    """The key material could not be parsed."""

    kind = ErrorKind.key_format


class AlgorithmKeyMismatchError(KeyMaterialError):
    """The algorithm does not match the type or curve of the key."""

    kind = ErrorKind.algorithm_key_mismatch


class UnsupportedAlgorithmError(KeyMaterialError):
    """The algorithm is not one of the supported JWS algorithms."""

    kind = ErrorKind.unsupported_algorithm


class UnsupportedKeyTypeError(KeyMaterialError):
    """The key is of a type that cannot verify JWT signatures."""

    kind = ErrorKind.unsupported_key_type


class SignatureMismatchError(VerifyTokenError):
    """The token signature does not verify with the provided key."""

    kind = ErrorKind.signature_mismatch


class MissingKeyIdError(VerifyTokenError):
    """The token header has no ``kid`` to select a key from the JWKS."""

    kind = ErrorKind.missing_key_id


class UnknownKeyIdError(VerifyTokenError):
    """The requested key ID was not found for an issuer."""

    kind = ErrorKind.key_not_found


class IssuerMismatchError(VerifyTokenError):
    """The ``iss`` claim does not match the issuer's metadata."""

    kind = ErrorKind.issuer_mismatch


class FetchKeysError(VerifyTokenError):
    """Cannot retrieve the keys from an issuer."""


class DiscoveryFetchError(FetchKeysError):
    """Cannot retrieve the OpenID Connect metadata of an issuer."""

    kind = ErrorKind.discovery_fetch


class DiscoveryMissingJwksUriError(FetchKeysError):
    """The OpenID Connect metadata has no ``jwks_uri``."""

    kind = ErrorKind.discovery_missing_jwks_uri


class JwksFetchError(FetchKeysError):
    """Cannot retrieve the JWKS of an issuer."""

    kind = ErrorKind.jwks_fetch


class JwksParseError(FetchKeysError):
    """The JWKS of an issuer is not a valid key set."""

    kind = ErrorKind.jwks_parse
