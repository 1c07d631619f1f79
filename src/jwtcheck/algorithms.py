"""Supported JWS algorithms and their cryptographic parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .exceptions import UnsupportedAlgorithmError

__all__ = [
    "Algorithm",
    "AlgorithmFamily",
    "ECDSAFamily",
    "HMACFamily",
    "RSAFamily",
    "curve_display_name",
    "parse_algorithm",
]


@dataclass(frozen=True, slots=True)
class HMACFamily:
    """Parameters of an HMAC algorithm."""

    hash_algorithm: type[hashes.HashAlgorithm]
    """Digest used for the HMAC."""


@dataclass(frozen=True, slots=True)
class RSAFamily:
    """Parameters of an RSA signature algorithm."""

    hash_algorithm: type[hashes.HashAlgorithm]
    """Digest of the signing input."""

    pss: bool
    """Whether the padding is RSASSA-PSS rather than PKCS #1 v1.5."""


@dataclass(frozen=True, slots=True)
class ECDSAFamily:
    """Parameters of an ECDSA algorithm."""

    hash_algorithm: type[hashes.HashAlgorithm]
    """Digest of the signing input."""

    curve: type[ec.EllipticCurve]
    """The only curve the algorithm may be used with."""

    coordinate_size: int
    """Length in bytes of each of ``r`` and ``s`` in the signature."""


AlgorithmFamily = HMACFamily | RSAFamily | ECDSAFamily
"""Type of the cryptographic parameters of any supported algorithm."""


class Algorithm(StrEnum):
    """A supported JWS signature algorithm.

    ``none`` is deliberately absent so that an unsigned token can never be
    accepted.
    """

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"

    @property
    def family(self) -> AlgorithmFamily:
        """Cryptographic parameters for this algorithm."""
        return _FAMILIES[self]


_FAMILIES: dict[Algorithm, AlgorithmFamily] = {
    Algorithm.HS256: HMACFamily(hashes.SHA256),
    Algorithm.HS384: HMACFamily(hashes.SHA384),
    Algorithm.HS512: HMACFamily(hashes.SHA512),
    Algorithm.RS256: RSAFamily(hashes.SHA256, pss=False),
    Algorithm.RS384: RSAFamily(hashes.SHA384, pss=False),
    Algorithm.RS512: RSAFamily(hashes.SHA512, pss=False),
    Algorithm.PS256: RSAFamily(hashes.SHA256, pss=True),
    Algorithm.PS384: RSAFamily(hashes.SHA384, pss=True),
    Algorithm.PS512: RSAFamily(hashes.SHA512, pss=True),
    Algorithm.ES256: ECDSAFamily(hashes.SHA256, ec.SECP256R1, 32),
    Algorithm.ES384: ECDSAFamily(hashes.SHA384, ec.SECP384R1, 48),
    Algorithm.ES512: ECDSAFamily(hashes.SHA512, ec.SECP521R1, 66),
}

_CURVE_NAMES = {
    ec.SECP256R1.name: "P-256",
    ec.SECP384R1.name: "P-384",
    ec.SECP521R1.name: "P-521",
}


def curve_display_name(
    curve: ec.EllipticCurve | type[ec.EllipticCurve],
) -> str:
    """Return the JOSE name of a curve, such as ``P-256``.

    Curves without a JOSE name are reported by their OpenSSL name.
    """
    return _CURVE_NAMES.get(curve.name, curve.name)


def parse_algorithm(name: object) -> Algorithm:
    """Convert an algorithm name to an `Algorithm`.

    Parameters
    ----------
    name
        Algorithm name, normally the ``alg`` header of a token. Anything
        other than a string naming a supported algorithm is rejected.

    Returns
    -------
    Algorithm
        The corresponding algorithm.

    Raises
    ------
    UnsupportedAlgorithmError
        Raised if the algorithm is missing or not supported.
    """
    if name is None:
        raise UnsupportedAlgorithmError("Token header has no alg")
    if not isinstance(name, str):
        raise UnsupportedAlgorithmError(f"Invalid algorithm {name!r}")
    try:
        return Algorithm(name)
    except ValueError:
        msg = f"Unsupported algorithm {name}"
        raise UnsupportedAlgorithmError(msg) from None
