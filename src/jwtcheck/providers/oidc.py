"""Resolve token verification keys from an OpenID Connect provider."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError
from structlog.stdlib import BoundLogger

from ..algorithms import Algorithm, parse_algorithm
from ..constants import DISCOVERY_PATH
from ..exceptions import (
    AlgorithmKeyMismatchError,
    DiscoveryFetchError,
    DiscoveryMissingJwksUriError,
    JwksFetchError,
    JwksParseError,
    MissingKeyIdError,
    UnknownKeyIdError,
)
from ..fetch import FallbackFetcher
from ..keys import KeyHandle, load_from_jwk
from ..models.jwk import JWK, JWKS, OIDCConfiguration
from ..models.token import DecodedToken

__all__ = ["OIDCKeyResolver", "ResolvedKey"]


@dataclass(frozen=True, slots=True)
class ResolvedKey:
    """A key retrieved from an OpenID Connect provider for one token."""

    key: KeyHandle
    """Key with which to verify the token."""

    algorithm: Algorithm
    """Algorithm declared by the token, compatible with the key."""

    issuer: str | None
    """Issuer from the provider metadata, which must match ``iss``."""


class OIDCKeyResolver:
    """Find the key that signed a token issued by an OpenID Connect provider.

    Nothing is cached. The provider metadata and key set are retrieved again
    for every token.

    Parameters
    ----------
    fetcher
        Used to make HTTP requests with the CORS proxy fallback.
    logger
        Logger for any log messages.
    """

    def __init__(self, fetcher: FallbackFetcher, logger: BoundLogger) -> None:
        self._fetcher = fetcher
        self._logger = logger

    async def resolve(
        self,
        token: DecodedToken,
        issuer_url: str,
        *,
        use_proxy_always: bool = False,
    ) -> ResolvedKey:
        """Get the key for a token.

        Parameters
        ----------
        token
            Decoded but unverified token.
        issuer_url
            Base URL of the OpenID Connect provider.
        use_proxy_always
            If `True`, make all requests through the CORS proxy.

        Returns
        -------
        ResolvedKey
            The key, the algorithm to verify with, and the expected issuer.

        Raises
        ------
        AlgorithmKeyMismatchError
            Raised if the token algorithm cannot be used with the key.
        FetchKeysError
            Raised if the provider metadata or key set could not be retrieved
            or parsed.
        KeyFormatError
            Raised if the matching JWK is invalid.
        MissingKeyIdError
            Raised if the token header has no ``kid``.
        UnknownKeyIdError
            Raised if no key in the provider's key set has the token's
            ``kid``.
        UnsupportedAlgorithmError
            Raised if the token header names no supported algorithm.
        UnsupportedKeyTypeError
            Raised if the matching JWK is neither an RSA nor an EC key.
        """
        key_id = token.key_id
        if not key_id:
            msg = "Token header does not contain a key ID (kid)"
            raise MissingKeyIdError(msg)
        algorithm = parse_algorithm(token.header.get("alg"))
        logger = self._logger.bind(
            issuer=issuer_url, kid=key_id, algorithm=str(algorithm)
        )

        logger.debug("Retrieving OpenID Connect configuration")
        config = await self._get_configuration(issuer_url, use_proxy_always)
        logger.debug("Retrieving key set", jwks_uri=config.jwks_uri)
        assert config.jwks_uri
        keys = await self._get_keys(config.jwks_uri, use_proxy_always)

        jwk = self._select_key(keys, key_id, issuer_url)
        if jwk.alg and jwk.alg != algorithm:
            msg = (
                f"Issuer {issuer_url} kid {key_id} has algorithm {jwk.alg},"
                f" but the token uses {algorithm}"
            )
            raise AlgorithmKeyMismatchError(msg)
        key = load_from_jwk(jwk)
        key.check_algorithm(algorithm)
        logger.debug("Found key", key_type=key.key_type)
        return ResolvedKey(key=key, algorithm=algorithm, issuer=config.issuer)

    async def _get_configuration(
        self, issuer_url: str, use_proxy_always: bool
    ) -> OIDCConfiguration:
        """Retrieve the OpenID Connect metadata for an issuer.

        Raises
        ------
        DiscoveryFetchError
            Raised if the metadata could not be retrieved or is not a JSON
            object.
        DiscoveryMissingJwksUriError
            Raised if the metadata has no ``jwks_uri``.
        """
        url = issuer_url.rstrip("/") + DISCOVERY_PATH
        r = await self._fetcher.get(
            url, use_proxy_always=use_proxy_always, error=DiscoveryFetchError
        )
        try:
            config = OIDCConfiguration.model_validate_json(r.content)
        except ValidationError as e:
            msg = f"OpenID configuration at {url} is not valid: {e!s}"
            raise DiscoveryFetchError(msg) from e
        if not config.jwks_uri:
            msg = "JWKS URI not found in OpenID configuration"
            raise DiscoveryMissingJwksUriError(msg)
        return config

    async def _get_keys(self, url: str, use_proxy_always: bool) -> list[JWK]:
        """Fetch the key set for an issuer.

        Raises
        ------
        JwksFetchError
            Raised if the key set could not be retrieved.
        JwksParseError
            Raised if the key set is not valid.
        """
        r = await self._fetcher.get(
            url, use_proxy_always=use_proxy_always, error=JwksFetchError
        )
        try:
            jwks = JWKS.model_validate_json(r.content)
        except ValidationError as e:
            msg = f"No valid keys property in JWKS at {url}: {e!s}"
            raise JwksParseError(msg) from e
        return jwks.keys

    def _select_key(
        self, keys: list[JWK], key_id: str, issuer_url: str
    ) -> JWK:
        """Find the first key with the given key ID.

        Raises
        ------
        UnknownKeyIdError
            Raised if no key has that key ID.
        """
        for jwk in keys:
            if jwk.kid == key_id:
                return jwk
        msg = f"No matching key found for kid: {key_id} at issuer {issuer_url}"
        raise UnknownKeyIdError(msg)
