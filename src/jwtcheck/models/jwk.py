"""Representation of OpenID Connect metadata and JSON Web Keys."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "JWK",
    "JWKS",
    "OIDCConfiguration",
]


class JWK(BaseModel):
    """The schema for a JSON Web Key (RFCs 7517 and 7518).

    Only the members used to build a verification key are modeled. Any other
    members are preserved but ignored.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    kty: str = Field(
        ...,
        title="Key type",
        description="Only `RSA` and `EC` keys can be used for verification",
        examples=["RSA"],
    )

    kid: str | None = Field(
        None,
        title="Key ID",
        description=(
            "A name for the key, also used in the header of a JWT signed by"
            " that key. Allows the signer to have multiple valid keys at a"
            " time and thus support key rotation."
        ),
        examples=["some-key-id"],
    )

    alg: str | None = Field(
        None,
        title="Algorithm",
        description="Algorithm the key is intended for, if restricted",
        examples=["RS256"],
    )

    use: str | None = Field(None, title="Key usage", examples=["sig"])

    n: str | None = Field(
        None,
        title="RSA modulus",
        description=(
            "Big-endian modulus component of the RSA public key encoded in"
            " URL-safe base64 without trailing padding"
        ),
    )

    e: str | None = Field(
        None,
        title="RSA exponent",
        description=(
            "Big-endian exponent component of the RSA public key encoded in"
            " URL-safe base64 without trailing padding"
        ),
        examples=["AQAB"],
    )

    crv: str | None = Field(None, title="Elliptic curve", examples=["P-256"])

    x: str | None = Field(
        None,
        title="Curve point x coordinate",
        description="URL-safe base64 without trailing padding",
    )

    y: str | None = Field(
        None,
        title="Curve point y coordinate",
        description="URL-safe base64 without trailing padding",
    )


class JWKS(BaseModel):
    """The schema for a JSON Web Key Set (RFCs 7517 and 7518)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    keys: list[JWK] = Field(..., title="The keys in the set")


class OIDCConfiguration(BaseModel):
    """Schema for the ``/.well-known/openid-configuration`` endpoint.

    Only the members needed to verify tokens are modeled. Both are optional
    here so that their absence can be reported with a specific error.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    issuer: str | None = Field(
        None,
        title="iss value for JWTs",
        examples=["https://example.com/"],
    )

    jwks_uri: str | None = Field(
        None,
        title="URL to get signing keys",
        description="Endpoint will return a JWKS",
        examples=["https://example.com/.well-known/jwks.json"],
    )
