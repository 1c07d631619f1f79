"""Load verification keys from PEM, shared secrets, and JWKs."""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import (
    dsa,
    ec,
    ed448,
    ed25519,
    rsa,
    x448,
    x25519,
)
from cryptography.hazmat.primitives.serialization import load_pem_public_key
from cryptography.x509 import load_pem_x509_certificate

from .algorithms import (
    Algorithm,
    ECDSAFamily,
    HMACFamily,
    RSAFamily,
    curve_display_name,
)
from .exceptions import (
    AlgorithmKeyMismatchError,
    KeyFormatError,
    UnsupportedKeyTypeError,
)
from .models.jwk import JWK
from .util import base64_to_number

__all__ = [
    "ECKey",
    "HMACKey",
    "KeyHandle",
    "RSAKey",
    "load_asymmetric_public_key",
    "load_from_jwk",
    "load_symmetric_key",
]

_JWK_CURVES: dict[str, type[ec.EllipticCurve]] = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}


@dataclass(frozen=True, slots=True)
class HMACKey:
    """A shared secret for the HMAC algorithms.

    HMAC keys are just bytes, so the same key works with any digest size.
    """

    secret: bytes

    key_type = "HMAC"

    def check_algorithm(self, algorithm: Algorithm) -> None:
        """Raise an exception if the key cannot be used with the algorithm.

        Raises
        ------
        AlgorithmKeyMismatchError
            Raised if the algorithm is not an HMAC algorithm.
        """
        if not isinstance(algorithm.family, HMACFamily):
            msg = f"Algorithm {algorithm} cannot be used with an HMAC secret"
            raise AlgorithmKeyMismatchError(msg)


@dataclass(frozen=True, slots=True)
class RSAKey:
    """An RSA public key, usable with the RS* and PS* algorithms."""

    public_key: rsa.RSAPublicKey

    key_type = "RSA"

    def check_algorithm(self, algorithm: Algorithm) -> None:
        """Raise an exception if the key cannot be used with the algorithm.

        Raises
        ------
        AlgorithmKeyMismatchError
            Raised if the algorithm is not an RSA algorithm.
        """
        if not isinstance(algorithm.family, RSAFamily):
            msg = f"Algorithm {algorithm} cannot be used with an RSA key"
            raise AlgorithmKeyMismatchError(msg)


@dataclass(frozen=True, slots=True)
class ECKey:
    """An elliptic curve public key, usable with the matching ES* algorithm."""

    public_key: ec.EllipticCurvePublicKey

    key_type = "EC"

    def check_algorithm(self, algorithm: Algorithm) -> None:
        """Raise an exception if the key cannot be used with the algorithm.

        Raises
        ------
        AlgorithmKeyMismatchError
            Raised if the algorithm is not an ECDSA algorithm or requires a
            different curve than the one the key is on.
        """
        family = algorithm.family
        if not isinstance(family, ECDSAFamily):
            msg = f"Algorithm {algorithm} cannot be used with an EC key"
            raise AlgorithmKeyMismatchError(msg)
        if self.public_key.curve.name != family.curve.name:
            expected = curve_display_name(family.curve)
            actual = curve_display_name(self.public_key.curve)
            msg = (
                f"Algorithm {algorithm} requires an EC key on curve"
                f" {expected}, but the key is on curve {actual}"
            )
            raise AlgorithmKeyMismatchError(msg)


KeyHandle = HMACKey | RSAKey | ECKey
"""Type of any key that can verify a token signature."""


def load_asymmetric_public_key(pem: str, algorithm: Algorithm) -> KeyHandle:
    """Load a PEM-encoded public key for verifying a token.

    Parameters
    ----------
    pem
        Public key in SubjectPublicKeyInfo format, or an X.509 certificate
        whose public key should be used.
    algorithm
        Algorithm with which the key will be used.

    Returns
    -------
    KeyHandle
        The loaded key.

    Raises
    ------
    AlgorithmKeyMismatchError
        Raised if the key cannot be used with that algorithm.
    KeyFormatError
        Raised if the PEM data could not be parsed.
    UnsupportedKeyTypeError
        Raised if the key is neither an RSA nor an elliptic curve key.
    """
    data = pem.strip().encode()
    try:
        if data.startswith(b"-----BEGIN CERTIFICATE-----"):
            public_key = load_pem_x509_certificate(data).public_key()
        else:
            public_key = load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyFormatError(f"Invalid PEM public key: {e}") from e

    key: KeyHandle
    if isinstance(public_key, rsa.RSAPublicKey):
        key = RSAKey(public_key)
    elif isinstance(public_key, ec.EllipticCurvePublicKey):
        key = ECKey(public_key)
    else:
        key_type = _jose_key_type(public_key)
        msg = f"Unsupported key type {key_type} for algorithm {algorithm}"
        raise UnsupportedKeyTypeError(msg)
    key.check_algorithm(algorithm)
    return key


def _jose_key_type(public_key: object) -> str:
    """Name a public key by its JOSE key type, as a JWK would."""
    if isinstance(
        public_key,
        ed25519.Ed25519PublicKey
        | ed448.Ed448PublicKey
        | x25519.X25519PublicKey
        | x448.X448PublicKey,
    ):
        return "OKP"
    elif isinstance(public_key, dsa.DSAPublicKey):
        return "DSA"
    else:
        return type(public_key).__name__


def load_symmetric_key(secret: str) -> HMACKey:
    """Load a shared secret for the HMAC algorithms.

    The secret is used as its UTF-8 bytes. No minimum length is enforced
    here, but secrets shorter than the digest size of the algorithm are not
    secure.

    Parameters
    ----------
    secret
        The shared secret.

    Returns
    -------
    HMACKey
        The loaded key.

    Raises
    ------
    KeyFormatError
        Raised if the secret is empty.
    """
    if not secret:
        raise KeyFormatError("Secret key is required")
    return HMACKey(secret.encode())


def load_from_jwk(jwk: JWK) -> KeyHandle:
    """Convert a public JWK to a key.

    Parameters
    ----------
    jwk
        An RSA or elliptic curve public key in JWK form.

    Returns
    -------
    KeyHandle
        The corresponding key.

    Raises
    ------
    KeyFormatError
        Raised if required members are missing or invalid.
    UnsupportedKeyTypeError
        Raised if the key type is neither ``RSA`` nor ``EC``.
    """
    if jwk.kty == "RSA":
        return RSAKey(_build_rsa_public_key(jwk))
    elif jwk.kty == "EC":
        return ECKey(_build_ec_public_key(jwk))
    else:
        msg = f"Unsupported key type {jwk.kty} for kid {jwk.kid}"
        raise UnsupportedKeyTypeError(msg)


def _build_rsa_public_key(jwk: JWK) -> rsa.RSAPublicKey:
    """Convert an exponent and modulus to an RSA public key."""
    if not jwk.n or not jwk.e:
        raise KeyFormatError(f"RSA JWK {jwk.kid} is missing n or e")
    try:
        exponent = base64_to_number(jwk.e)
        modulus = base64_to_number(jwk.n)
        return rsa.RSAPublicNumbers(exponent, modulus).public_key()
    except ValueError as e:
        raise KeyFormatError(f"Invalid RSA JWK {jwk.kid}: {e}") from e


def _build_ec_public_key(jwk: JWK) -> ec.EllipticCurvePublicKey:
    """Convert a curve and point coordinates to an EC public key."""
    if not jwk.crv or not jwk.x or not jwk.y:
        raise KeyFormatError(f"EC JWK {jwk.kid} is missing crv, x, or y")
    if jwk.crv not in _JWK_CURVES:
        raise KeyFormatError(f"Unsupported curve {jwk.crv} in JWK {jwk.kid}")
    curve = _JWK_CURVES[jwk.crv]()
    try:
        x = base64_to_number(jwk.x)
        y = base64_to_number(jwk.y)
        return ec.EllipticCurvePublicNumbers(x, y, curve).public_key()
    except ValueError as e:
        raise KeyFormatError(f"Invalid EC JWK {jwk.kid}: {e}") from e
