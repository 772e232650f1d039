"""Auth-specific Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """Caller identity extracted from a verified bearer token."""

    sub: str = Field(..., description="Stable subject identifier")
    email: str | None = Field(None, description="Email claim, if present")
    claims: dict[str, Any] = Field(
        default_factory=dict, description="All verified token claims"
    )

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthenticatedUser":
        email = claims.get("email")
        if not email and isinstance(claims.get("emails"), list) and claims["emails"]:
            email = claims["emails"][0]
        return cls(sub=claims["sub"], email=email, claims=claims)
