"""General utility functions."""

from __future__ import annotations

import base64
import re

__all__ = [
    "add_padding",
    "base64_to_number",
    "base64url_decode",
]

_BASE64URL_REGEX = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


def add_padding(encoded: str) -> str:
    """Add padding to base64 encoded bytes.

    Parameters
    ----------
    encoded
        A base64-encoded string, possibly with the padding removed.

    Returns
    -------
    str
        A correctly-padded version of the encoded string.
    """
    underflow = len(encoded) % 4
    if underflow:
        return encoded + ("=" * (4 - underflow))
    else:
        return encoded


def base64url_decode(data: str) -> bytes:
    """Strictly decode URL-safe base64 with optional padding.

    Unlike `base64.urlsafe_b64decode`, this does not silently discard
    characters outside the URL-safe alphabet.

    Parameters
    ----------
    data
        URL-safe base64 text. Trailing padding may be omitted, but if present
        it must be correct.

    Returns
    -------
    bytes
        The decoded data.

    Raises
    ------
    ValueError
        Raised if the text contains characters outside the URL-safe alphabet
        or has a length that no base64 encoding can produce.
    """
    if not _BASE64URL_REGEX.match(data):
        raise ValueError("Invalid character in base64url data")
    if "=" in data and len(data) % 4 != 0:
        raise ValueError("Incorrect base64url padding")
    stripped = data.rstrip("=")
    if len(stripped) % 4 == 1:
        raise ValueError(f"Invalid base64url length {len(stripped)}")
    return base64.urlsafe_b64decode(add_padding(stripped))


def base64_to_number(data: str) -> int:
    """Convert base64-encoded bytes to an integer.

    Parameters
    ----------
    data
        Base64-encoded number, possibly without padding.

    Returns
    -------
    int
        The result converted to a number.  Note that Python ints can be
        arbitrarily large.

    Raises
    ------
    ValueError
        Raised if the data is not valid URL-safe base64.

    Notes
    -----
    Used for converting the modulus and exponent or the curve point
    coordinates in a JWK to integers in preparation for turning them into a
    public key.
    """
    return int.from_bytes(base64url_decode(data), byteorder="big")

