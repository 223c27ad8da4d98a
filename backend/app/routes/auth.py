"""
RideRelay Backend: Auth Route Handlers
========================================

What:  POST /auth/access-token (issue the `token` cookie) and
       POST /auth/logout (clear it).
How:   Both endpoints are public. They only touch the response cookie; no
       server-side session is created or destroyed.
"""

import logging

from fastapi import APIRouter, Depends, Response

from app.schemas.auth import AuthResponse, IdentityClaims
from app.schemas.common import ErrorResponse
from app.services.auth_service import AuthService, get_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/access-token",
    response_model=AuthResponse,
    responses={422: {"description": "Claims missing or malformed"}},
    summary="Exchange identity claims for a token cookie",
    description=(
        "Signs the posted claims into a token valid for 24 hours and sets it "
        "as the HTTP-only `token` cookie."
    ),
)
async def issue_access_token(
    claims: IdentityClaims,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    token = auth.issue_token(claims.model_dump(exclude_unset=True))
    auth.set_token_cookie(response, token)
    logger.info("Issued access token for %s", claims.email)
    return AuthResponse(type="access_token", success=True)


@router.post(
    "/logout",
    response_model=AuthResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Clear the token cookie",
)
async def logout(
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    auth.clear_token_cookie(response)
    return AuthResponse(type="logout", success=True)
