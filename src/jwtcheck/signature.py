"""Check JWS signatures."""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import (
    encode_dss_signature,
)

from .algorithms import Algorithm, ECDSAFamily, HMACFamily, RSAFamily
from .keys import ECKey, HMACKey, KeyHandle, RSAKey

__all__ = ["verify_signature"]


def verify_signature(
    key: KeyHandle,
    algorithm: Algorithm,
    signing_input: bytes,
    signature: bytes,
) -> bool:
    """Check the signature of a token.

    Parameters
    ----------
    key
        Key with which to check the signature.
    algorithm
        Algorithm with which the token was signed. This alone determines the
        digest and padding.
    signing_input
        The header and payload segments of the token, joined with a period.
    signature
        The decoded signature segment of the token. For ECDSA, this is the
        fixed-width concatenation of ``r`` and ``s``, not DER.

    Returns
    -------
    bool
        `True` if the signature is valid, `False` otherwise.

    Raises
    ------
    AlgorithmKeyMismatchError
        Raised if the key cannot be used with the algorithm. This is checked
        before any cryptographic operation.
    """
    key.check_algorithm(algorithm)
    family = algorithm.family
    if isinstance(key, HMACKey) and isinstance(family, HMACFamily):
        return _verify_hmac(key, family, signing_input, signature)
    elif isinstance(key, RSAKey) and isinstance(family, RSAFamily):
        return _verify_rsa(key, family, signing_input, signature)
    elif isinstance(key, ECKey) and isinstance(family, ECDSAFamily):
        return _verify_ecdsa(key, family, signing_input, signature)
    else:
        # check_algorithm rejects every other combination.
        raise AssertionError(f"Unreachable {key.key_type} and {algorithm}")


def _verify_hmac(
    key: HMACKey, family: HMACFamily, signing_input: bytes, signature: bytes
) -> bool:
    mac = hmac.HMAC(key.secret, family.hash_algorithm())
    mac.update(signing_input)
    try:
        mac.verify(signature)
    except InvalidSignature:
        return False
    return True


def _verify_rsa(
    key: RSAKey, family: RSAFamily, signing_input: bytes, signature: bytes
) -> bool:
    hash_algorithm = family.hash_algorithm()
    scheme: padding.AsymmetricPadding
    if family.pss:
        scheme = padding.PSS(
            mgf=padding.MGF1(hash_algorithm),
            salt_length=hash_algorithm.digest_size,
        )
    else:
        scheme = padding.PKCS1v15()
    try:
        key.public_key.verify(signature, signing_input, scheme, hash_algorithm)
    except InvalidSignature:
        return False
    return True


def _verify_ecdsa(
    key: ECKey, family: ECDSAFamily, signing_input: bytes, signature: bytes
) -> bool:
    size = family.coordinate_size
    if len(signature) != 2 * size:
        return False
    r = int.from_bytes(signature[:size], byteorder="big")
    s = int.from_bytes(signature[size:], byteorder="big")
    der_signature = encode_dss_signature(r, s)
    try:
        key.public_key.verify(
            der_signature, signing_input, ec.ECDSA(family.hash_algorithm())
        )
    except InvalidSignature:
        return False
    return True
