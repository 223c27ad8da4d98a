"""
RideRelay Backend: Auth Schemas
=================================

What:  The identity claims a client exchanges for a token cookie, the explicit
       auth context handed to protected handlers, and the auth acknowledgement.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.document import normalize_email


class IdentityClaims(BaseModel):
    """
    Body of POST /auth/access-token.

    `email` is required because the bookings ownership check compares
    against it. Any other claim is carried into the token unchanged, except
    that `sub`, `jti` and `iss` must be strings.
    """

    model_config = ConfigDict(extra="allow")

    email: str = Field(description="Caller's email; becomes the token's `email` claim")

    # Registered claims the token library requires to be strings
    sub: Optional[str] = None
    jti: Optional[str] = None
    iss: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class AuthContext(BaseModel):
    """Verified identity, returned by the auth guard and passed to handlers."""

    model_config = ConfigDict(frozen=True)

    email: str
    claims: Dict[str, Any] = Field(default_factory=dict)


class AuthResponse(BaseModel):
    type: str = Field(description="Which auth action ran: access_token or logout")
    success: bool = True
