"""Split and decode the compact serialization of a JWT.

Decoding never checks a signature. Every failure here is a
`~jwtcheck.exceptions.TokenFormatError`, so that callers can tell a string
that is not a JWT at all from a JWT whose signature does not verify.
"""

from __future__ import annotations

import json
from typing import Any

from .exceptions import (
    MalformedEncodingError,
    MalformedJsonError,
    MalformedTokenError,
)
from .models.token import DecodedToken
from .util import base64url_decode

__all__ = [
    "decode_segment",
    "decode_token",
    "format_json",
    "parse_json_object",
    "split_token",
]


def decode_segment(segment: str) -> bytes:
    """Decode one Base64URL segment of a token.

    Parameters
    ----------
    segment
        Base64URL text, normally without padding.

    Returns
    -------
    bytes
        The decoded segment.

    Raises
    ------
    MalformedEncodingError
        Raised if the segment has characters outside the URL-safe alphabet
        or an impossible length.
    """
    try:
        return base64url_decode(segment)
    except ValueError as e:
        raise MalformedEncodingError(f"Invalid base64url encoding: {e}") from e


def split_token(token: str) -> tuple[str, str, str]:
    """Split a token into its header, payload, and signature segments.

    Parameters
    ----------
    token
        Compact serialization of a JWT.

    Returns
    -------
    tuple of str
        The header, payload, and signature segments.

    Raises
    ------
    MalformedTokenError
        Raised if the token is not exactly three non-empty segments separated
        by periods.
    """
    parts = token.strip().split(".")
    if len(parts) != 3 or not all(parts):
        msg = "Invalid JWT format. Expected three parts separated by dots."
        raise MalformedTokenError(msg)
    header, payload, signature = parts
    return header, payload, signature


def parse_json_object(data: bytes) -> dict[str, Any]:
    """Parse a JSON object.

    Parameters
    ----------
    data
        UTF-8 encoded JSON.

    Returns
    -------
    dict
        The parsed object.

    Raises
    ------
    MalformedJsonError
        Raised if the data is not valid JSON, is nested too deeply, contains
        an integer too long to convert, or the top-level value is not an
        object.
    """
    try:
        result = json.loads(data.decode())
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedJsonError(f"Invalid JSON: {e}") from e
    if not isinstance(result, dict):
        kind = type(result).__name__
        raise MalformedJsonError(f"Expected a JSON object, not {kind}")
    return result


def decode_token(token: str) -> DecodedToken:
    """Decode a token without verifying it.

    Parameters
    ----------
    token
        Compact serialization of a JWT.

    Returns
    -------
    DecodedToken
        The decoded header and payload together with the exact signing input
        and the raw signature.

    Raises
    ------
    TokenFormatError
        Raised if the token cannot be split or any segment cannot be decoded.
    """
    header_segment, payload_segment, signature_segment = split_token(token)
    try:
        header = parse_json_object(decode_segment(header_segment))
    except (MalformedEncodingError, MalformedJsonError) as e:
        raise type(e)(f"Token header: {e}") from e
    try:
        payload = parse_json_object(decode_segment(payload_segment))
    except (MalformedEncodingError, MalformedJsonError) as e:
        raise type(e)(f"Token payload: {e}") from e
    try:
        signature = decode_segment(signature_segment)
    except MalformedEncodingError as e:
        raise MalformedEncodingError(f"Token signature: {e}") from e
    signing_input = f"{header_segment}.{payload_segment}".encode()
    return DecodedToken(
        encoded=f"{signing_input.decode()}.{signature_segment}",
        header=header,
        payload=payload,
        signing_input=signing_input,
        signature=signature,
    )


def format_json(data: dict[str, Any]) -> str:
    """Render a decoded header or payload for display."""
    return json.dumps(data, indent=2)
