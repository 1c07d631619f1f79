"""Result of a token verification."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..exceptions import VerifyTokenError
from .enums import ErrorKind
from .token import DecodedToken

__all__ = ["VerificationResult"]


class VerificationResult(BaseModel):
    """Outcome of verifying a token.

    The decoded ``header`` and ``payload`` are only present if the token is
    valid, and ``kind`` is only present if it is not. ``message`` is meant
    for humans and should not be parsed; use ``kind`` instead.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool = Field(..., title="Whether the token verified")

    message: str = Field(
        ...,
        title="Human-readable description of the outcome",
        examples=["Token successfully verified with symmetric key"],
    )

    kind: ErrorKind | None = Field(
        None,
        title="Reason for failure",
        description="Only present if the token is not valid",
        examples=[ErrorKind.signature_mismatch],
    )

    header: dict[str, Any] | None = Field(
        None,
        title="Decoded JOSE header",
        description="Only present if the token is valid",
    )

    payload: dict[str, Any] | None = Field(
        None,
        title="Decoded claims",
        description="Only present if the token is valid",
    )

    @model_validator(mode="after")
    def _check_details(self) -> Self:
        has_details = self.header is not None and self.payload is not None
        if self.valid:
            if not has_details or self.kind is not None:
                msg = "Valid results need header and payload and no kind"
                raise ValueError(msg)
        elif self.header is not None or self.payload is not None:
            raise ValueError("Failed results must not have header or payload")
        elif self.kind is None:
            raise ValueError("Failed results must have a kind")
        return self

    @classmethod
    def success(cls, token: DecodedToken, message: str) -> Self:
        """Build the result for a verified token.

        Parameters
        ----------
        token
            The verified token.
        message
            Description of how it was verified.

        Returns
        -------
        VerificationResult
            A valid result carrying the token header and payload.
        """
        return cls(
            valid=True,
            message=message,
            header=token.header,
            payload=token.payload,
        )

    @classmethod
    def failure(cls, exc: VerifyTokenError) -> Self:
        """Build the result for a token that did not verify."""
        return cls(valid=False, message=str(exc), kind=exc.kind)
