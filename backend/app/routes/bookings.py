"""
RideRelay Backend: Booking Route Handlers
===========================================

What:  CRUD endpoints for the `bookings` collection. Every route needs a
       valid token; listing additionally requires ?email= to be the token's
       own email (403 otherwise).

Route Inventory:
    GET    /bookings?email=...           token + ownership
    GET    /bookings/{bookingId}         token
    POST   /book-a-service               token
    PUT    /update-booking/{bookingId}   token
    DELETE /delete-booking/{bookingId}   token
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import AuthContext
from app.schemas.common import ErrorResponse
from app.schemas.document import (
    BookingCreate,
    BookingDocument,
    BookingUpdate,
    DeleteAck,
    InsertAck,
    UpdateAck,
)
from app.services.auth_service import ensure_owner, require_identity
from app.services.booking_service import booking_service

router = APIRouter(tags=["Bookings"])

AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}
ID_ERRORS = {400: {"description": "Malformed identifier", "model": ErrorResponse}}


@router.get(
    "/bookings",
    response_model=List[BookingDocument],
    response_model_exclude_unset=True,
    responses={
        **AUTH_ERRORS,
        403: {"description": "email does not match the token", "model": ErrorResponse},
    },
    summary="List the caller's bookings",
)
async def list_bookings(
    email: Optional[str] = Query(default=None, description="Must equal the token's email"),
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
):
    ensure_owner(identity, email)
    return await booking_service.list_for_owner(db, identity.email)


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingDocument,
    response_model_exclude_unset=True,
    responses={
        **AUTH_ERRORS,
        **ID_ERRORS,
        404: {"description": "No such booking", "model": ErrorResponse},
    },
    summary="Get one booking",
)
async def get_booking(
    booking_id: str,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
):
    return await booking_service.get_document(db, booking_id)


@router.post(
    "/book-a-service",
    status_code=201,
    response_model=InsertAck,
    responses=AUTH_ERRORS,
    summary="Create a booking",
)
async def book_a_service(
    body: BookingCreate,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> InsertAck:
    return await booking_service.create_document(
        db, body.model_dump(by_alias=True, exclude_unset=True)
    )


@router.put(
    "/update-booking/{booking_id}",
    response_model=UpdateAck,
    responses={**AUTH_ERRORS, **ID_ERRORS},
    summary="Merge fields into a booking",
)
async def update_booking(
    booking_id: str,
    body: BookingUpdate,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateAck:
    return await booking_service.update_document(
        db, booking_id, body.model_dump(by_alias=True, exclude_unset=True)
    )


@router.delete(
    "/delete-booking/{booking_id}",
    response_model=DeleteAck,
    responses={**AUTH_ERRORS, **ID_ERRORS},
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: str,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteAck:
    return await booking_service.delete_document(db, booking_id)
