"""Representation of a decoded JWT."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["DecodedToken"]


class DecodedToken(BaseModel):
    """A JWT split into its parts but not yet verified.

    Notes
    -----
    The header and payload are open-ended mappings since JWT claims are not
    limited to a fixed schema. The properties provide typed access to the
    well-known fields on top of them and return `None` if the field is
    missing or has the wrong type.
    """

    model_config = ConfigDict(frozen=True)

    encoded: str = Field(..., title="The encoded form of the JWT")

    header: dict[str, Any] = Field(..., title="Decoded JOSE header")

    payload: dict[str, Any] = Field(..., title="Decoded claims")

    signing_input: bytes = Field(
        ...,
        title="Signing input",
        description=(
            "The header and payload segments exactly as they appeared in the"
            " token, joined with a period"
        ),
    )

    signature: bytes = Field(..., title="Raw signature bytes")

    @property
    def algorithm(self) -> str | None:
        """The ``alg`` header, which may name an unsupported algorithm."""
        alg = self.header.get("alg")
        return alg if isinstance(alg, str) else None

    @property
    def key_id(self) -> str | None:
        """The ``kid`` header."""
        kid = self.header.get("kid")
        return kid if isinstance(kid, str) else None

    @property
    def issuer(self) -> str | None:
        """The ``iss`` claim."""
        iss = self.payload.get("iss")
        return iss if isinstance(iss, str) else None

    @property
    def jti(self) -> str | None:
        """The ``jti`` claim."""
        jti = self.payload.get("jti")
        return jti if isinstance(jti, str) else None

    @property
    def expires(self) -> datetime | None:
        """The ``exp`` claim as a timezone-aware datetime.

        This is informational only. Token freshness is never checked.
        """
        exp = self.payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            return None
        try:
            return datetime.fromtimestamp(exp, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    @property
    def signature_segment(self) -> str:
        """The third segment of the encoded token."""
        return self.encoded.rsplit(".", 1)[1]
