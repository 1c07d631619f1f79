"""Key material for testing."""

from __future__ import annotations

import base64
from typing import Any

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa


__all__ = [
    "EC_KEYS",
    "ED25519_KEY",
    "RSA_KEY",
    "public_key_as_jwk",
    "public_key_as_pem",
]

RSA_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
"""RSA key used for every RSA test.

Generating RSA keys is slow, so generate one at import time and share it.
"""

EC_KEYS = {
    "P-256": ec.generate_private_key(ec.SECP256R1()),
    "P-384": ec.generate_private_key(ec.SECP384R1()),
    "P-521": ec.generate_private_key(ec.SECP521R1()),
}
"""Elliptic curve keys, keyed by JWK curve name."""

ED25519_KEY = ed25519.Ed25519PrivateKey.generate()
"""Key of a type that cannot verify tokens."""

_CURVES = {
    "secp256r1": ("P-256", 32),
    "secp384r1": ("P-384", 48),
    "secp521r1": ("P-521", 66),
}


def public_key_as_pem(
    private_key: rsa.RSAPrivateKey
    | ec.EllipticCurvePrivateKey
    | ed25519.Ed25519PrivateKey,
) -> str:
    """Return the public half of a private key in PEM format."""
    return (
        private_key.public_key()
        .public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )


def public_key_as_jwk(
    private_key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey,
    kid: str,
    *,
    alg: str | None = None,
) -> dict[str, Any]:
    """Return the public half of a private key as a JWK.

    Parameters
    ----------
    private_key
        RSA or elliptic curve private key.
    kid
        Key ID to put in the JWK.
    alg
        If given, the algorithm to put in the JWK.

    Returns
    -------
    dict
        The JWK as it would appear in a JWKS document.
    """
    jwk: dict[str, Any] = {"kid": kid, "use": "sig"}
    if isinstance(private_key, rsa.RSAPrivateKey):
        numbers = private_key.public_key().public_numbers()
        jwk["kty"] = "RSA"
        jwk["n"] = _number_to_base64(numbers.n).decode()
        jwk["e"] = _number_to_base64(numbers.e).decode()
    else:
        crv, size = _CURVES[private_key.curve.name]
        point = private_key.public_key().public_numbers()
        jwk["kty"] = "EC"
        jwk["crv"] = crv
        jwk["x"] = _encode_coordinate(point.x, size)
        jwk["y"] = _encode_coordinate(point.y, size)
    if alg:
        jwk["alg"] = alg
    return jwk


def _encode_coordinate(value: int, size: int) -> str:
    data = value.to_bytes(size, byteorder="big")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _number_to_base64(data: int) -> bytes:
    """Encode an integer as a Base64urlUInt (RFC 7518) without padding."""
    bit_length = data.bit_length()
    byte_length = bit_length // 8 + 1
    data_as_bytes = data.to_bytes(byte_length, byteorder="big", signed=False)
    return base64.urlsafe_b64encode(data_as_bytes).rstrip(b"=")
