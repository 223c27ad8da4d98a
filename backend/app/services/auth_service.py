"""
RideRelay Backend: Auth Guard
===============================

What:  Issues, verifies and revokes the signed token carried in the `token`
       cookie, plus the FastAPI dependencies protected routes declare.
How:   PyJWT (HS256 by default) with an `exp` claim 24 hours after issue.
       The guard keeps no session state; the cookie is the only state.
Who:   POST /auth/access-token and /auth/logout use `AuthService` directly.
       Protected handlers declare `Depends(require_identity)` and receive an
       `AuthContext` parameter.

Failure modes (all → UnauthorizedError → 401):
    - cookie absent or empty
    - token not a JWT / signature mismatch / wrong algorithm
    - token expired
    - token lacks an `email` claim
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request, Response

from app.config import Settings
from app.exceptions import ForbiddenError, UnauthorizedError
from app.schemas.auth import AuthContext

logger = logging.getLogger(__name__)

# Registered claims the server owns; client-supplied values are discarded
SERVER_CLAIMS = ("exp", "iat", "nbf", "aud")

# Registered claims that must be strings when present
STRING_CLAIMS = ("sub", "jti", "iss")


class AuthService:
    """Token issuance and verification bound to one application's settings."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.ttl = timedelta(hours=settings.token_ttl_hours)
        self.cookie_name = settings.cookie_name
        self.cookie_secure = settings.cookie_secure
        self.cookie_samesite = settings.cookie_samesite

    def issue_token(self, claims: Dict[str, Any], now: Optional[datetime] = None) -> str:
        """
        Sign `claims` into a token that expires `ttl` after `now`.

        `now` defaults to the current UTC time; tests pass an earlier value
        to mint tokens that are about to expire or already have.
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {k: v for k, v in claims.items() if k not in SERVER_CLAIMS}
        for claim in STRING_CLAIMS:
            value = payload.pop(claim, None)
            if value is not None:
                payload[claim] = str(value)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + self.ttl
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> AuthContext:
        """Decode and check a token; raise UnauthorizedError on any problem."""
        if not token:
            raise UnauthorizedError(context={"reason": "missing_token"})

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthorizedError(context={"reason": "expired_token"})
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected invalid token: %s", str(e))
            raise UnauthorizedError(context={"reason": "invalid_token"})

        email = claims.get("email")
        if not isinstance(email, str) or not email:
            raise UnauthorizedError(context={"reason": "missing_email_claim"})

        return AuthContext(email=email, claims=claims)

    def set_token_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.ttl.total_seconds()),
            httponly=True,
            secure=self.cookie_secure,
            samesite=self.cookie_samesite,
            path="/",
        )

    def clear_token_cookie(self, response: Response) -> None:
        """Expire the cookie immediately (Max-Age=0)."""
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            secure=self.cookie_secure,
            samesite=self.cookie_samesite,
        )


# ── FastAPI Dependencies ──────────────────────────────────────────────────

def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def require_identity(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> AuthContext:
    """Guard for protected routes. Runs before the handler body."""
    return auth.verify(request.cookies.get(auth.cookie_name))


def ensure_owner(identity: AuthContext, email: Optional[str]) -> None:
    """
    Scoped queries may only ask for the caller's own data.

    A missing `email` is treated like a mismatch. Comparison is exact.
    """
    if email is None or email != identity.email:
        logger.warning(
            "Ownership check failed: token email=%s, requested email=%s",
            identity.email,
            email,
        )
        raise ForbiddenError(context={"requested_email": email})
