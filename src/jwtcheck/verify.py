"""Verify a JWT."""

from __future__ import annotations

from structlog.stdlib import BoundLogger

from .algorithms import Algorithm, parse_algorithm
from .codec import decode_token
from .exceptions import (
    AlgorithmKeyMismatchError,
    IssuerMismatchError,
    SignatureMismatchError,
    VerifyTokenError,
)
from .keys import KeyHandle, load_asymmetric_public_key, load_symmetric_key
from .models.result import VerificationResult
from .models.token import DecodedToken
from .providers.oidc import OIDCKeyResolver
from .signature import verify_signature

__all__ = ["TokenVerifier"]


class TokenVerifier:
    """Verifies the validity of a JWT.

    Supports three ways of obtaining the verification key: a public key
    provided by the caller, a shared secret provided by the caller, or the
    key set of an OpenID Connect provider. Every verification pins exactly
    one algorithm before checking the signature, and unsigned tokens are
    never accepted.

    None of the verification methods raise exceptions for invalid tokens.
    Every failure is reported in the returned
    `~jwtcheck.models.result.VerificationResult`.

    Parameters
    ----------
    resolver
        Resolver for keys from OpenID Connect providers.
    logger
        Logger to use to report status information.
    """

    def __init__(self, resolver: OIDCKeyResolver, logger: BoundLogger) -> None:
        self._resolver = resolver
        self._logger = logger

    def decode(self, token: str) -> DecodedToken:
        """Decode a token without verifying it.

        Parameters
        ----------
        token
            Compact serialization of a JWT.

        Returns
        -------
        DecodedToken
            The decoded token.

        Raises
        ------
        TokenFormatError
            Raised if the string is not a JWT.
        """
        return decode_token(token)

    def verify_with_public_key(
        self, token: str, public_key: str, algorithm: str | None = None
    ) -> VerificationResult:
        """Verify a token with an RSA or elliptic curve public key.

        Parameters
        ----------
        token
            Compact serialization of a JWT.
        public_key
            PEM-encoded public key or X.509 certificate.
        algorithm
            Algorithm to verify with. If not given, the ``alg`` header of the
            token is used.

        Returns
        -------
        VerificationResult
            Result of the verification.
        """
        try:
            decoded = decode_token(token)
            alg = parse_algorithm(algorithm or decoded.header.get("alg"))
            key = load_asymmetric_public_key(public_key, alg)
            self._check_signature(decoded, key, alg)
        except VerifyTokenError as e:
            return self._failure(e)
        message = "Token successfully verified with asymmetric key"
        return VerificationResult.success(decoded, message)

    def verify_with_secret(
        self, token: str, secret: str, algorithm: str = Algorithm.HS256
    ) -> VerificationResult:
        """Verify a token with a shared secret.

        Parameters
        ----------
        token
            Compact serialization of a JWT.
        secret
            Shared secret, used as its UTF-8 bytes. Secrets shorter than the
            digest size of the algorithm are accepted but are insecure.
        algorithm
            One of ``HS256``, ``HS384``, or ``HS512``. The ``alg`` header of
            the token must name the same algorithm.

        Returns
        -------
        VerificationResult
            Result of the verification.
        """
        try:
            decoded = decode_token(token)
            alg = parse_algorithm(algorithm)
            key = load_symmetric_key(secret)
            key.check_algorithm(alg)
            declared = parse_algorithm(decoded.header.get("alg"))
            if declared != alg:
                msg = (
                    f"Token declares algorithm {declared}, but it is being"
                    f" verified with {alg}"
                )
                raise AlgorithmKeyMismatchError(msg)
            digest_size = alg.family.hash_algorithm.digest_size
            if len(key.secret) < digest_size:
                self._logger.warning(
                    "Shared secret is shorter than the digest size",
                    algorithm=str(alg),
                    secret_length=len(key.secret),
                    digest_size=digest_size,
                )
            self._check_signature(decoded, key, alg)
        except VerifyTokenError as e:
            return self._failure(e)
        message = "Token successfully verified with symmetric key"
        return VerificationResult.success(decoded, message)

    async def verify_with_oidc(
        self, token: str, issuer_url: str, *, use_proxy_always: bool = False
    ) -> VerificationResult:
        """Verify a token with the keys of an OpenID Connect provider.

        The key is selected from the provider's key set by the ``kid`` header
        of the token and the token is verified with the algorithm in its
        ``alg`` header. The ``iss`` claim must match the issuer in the
        provider's metadata.

        Parameters
        ----------
        token
            Compact serialization of a JWT.
        issuer_url
            Base URL of the OpenID Connect provider.
        use_proxy_always
            If `True`, make all requests through the CORS proxy rather than
            only falling back on it.

        Returns
        -------
        VerificationResult
            Result of the verification.
        """
        try:
            decoded = decode_token(token)
            resolved = await self._resolver.resolve(
                decoded, issuer_url, use_proxy_always=use_proxy_always
            )
            self._check_signature(decoded, resolved.key, resolved.algorithm)
            if decoded.issuer is None or decoded.issuer != resolved.issuer:
                msg = (
                    f"Token issuer {decoded.issuer} does not match issuer"
                    f" {resolved.issuer} from OpenID configuration"
                )
                raise IssuerMismatchError(msg)
        except VerifyTokenError as e:
            return self._failure(e)
        message = "Token successfully verified with OpenID provider"
        return VerificationResult.success(decoded, message)

    def _check_signature(
        self, token: DecodedToken, key: KeyHandle, algorithm: Algorithm
    ) -> None:
        """Verify the signature of a decoded token.

        Raises
        ------
        AlgorithmKeyMismatchError
            Raised if the key cannot be used with the algorithm.
        SignatureMismatchError
            Raised if the signature is not valid.
        """
        declared = token.algorithm
        if declared != algorithm:
            self._logger.debug(
                "Verifying with an algorithm other than the token header",
                algorithm=str(algorithm),
                header_algorithm=declared,
            )
        valid = verify_signature(
            key, algorithm, token.signing_input, token.signature
        )
        if not valid:
            msg = (
                "Signature verification failed: the token was not signed by"
                f" this {key.key_type} key with {algorithm}"
            )
            raise SignatureMismatchError(msg)
        self._logger.debug(
            "Verified token signature",
            algorithm=str(algorithm),
            key_type=key.key_type,
            jti=token.jti,
        )

    def _failure(self, exc: VerifyTokenError) -> VerificationResult:
        """Log a verification failure and convert it to a result."""
        self._logger.debug(
            "Token verification failed", kind=str(exc.kind), error=str(exc)
        )
        return VerificationResult.failure(exc)
