"""
RideRelay Backend: Service Route Handlers
===========================================

What:  CRUD endpoints for the `services` collection.
How:   Thin handlers: pull params/body, call `service_catalog`, return its
       result. Errors are raised and translated by the global handlers.

Route Inventory:
    GET    /services                     public, ?sortBy=price&sortOrder=asc|desc
    GET    /services/{serviceId}         public
    POST   /add-new-service              token
    PUT    /update-service/{serviceId}   token
    DELETE /delete-service/{serviceId}   token
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import AuthContext
from app.schemas.common import ErrorResponse
from app.schemas.document import (
    DeleteAck,
    InsertAck,
    ServiceCreate,
    ServiceDocument,
    ServiceUpdate,
    UpdateAck,
)
from app.services.auth_service import require_identity
from app.services.catalog_service import service_catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Services"])

AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}
ID_ERRORS = {400: {"description": "Malformed identifier", "model": ErrorResponse}}


@router.get(
    "/services",
    response_model=List[ServiceDocument],
    response_model_exclude_unset=True,
    responses={400: {"description": "Unsupported sort parameters", "model": ErrorResponse}},
    summary="List all services",
)
async def list_services(
    sort_by: Optional[str] = Query(
        default=None,
        alias="sortBy",
        description="Field to sort by. Only 'price' is supported.",
    ),
    sort_order: Optional[str] = Query(
        default=None,
        alias="sortOrder",
        description="'asc' (cheapest first, default) or 'desc'",
    ),
    db: AsyncSession = Depends(get_db_session),
):
    return await service_catalog.list_services(db, sort_by=sort_by, sort_order=sort_order)


@router.get(
    "/services/{service_id}",
    response_model=ServiceDocument,
    response_model_exclude_unset=True,
    responses={**ID_ERRORS, 404: {"description": "No such service", "model": ErrorResponse}},
    summary="Get one service",
)
async def get_service(
    service_id: str,
    db: AsyncSession = Depends(get_db_session),
):
    return await service_catalog.get_document(db, service_id)


@router.post(
    "/add-new-service",
    status_code=201,
    response_model=InsertAck,
    responses=AUTH_ERRORS,
    summary="Create a service",
)
async def add_new_service(
    body: ServiceCreate,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> InsertAck:
    logger.info("Service create requested by %s", identity.email)
    return await service_catalog.create_document(
        db, body.model_dump(by_alias=True, exclude_unset=True)
    )


@router.put(
    "/update-service/{service_id}",
    response_model=UpdateAck,
    responses={**AUTH_ERRORS, **ID_ERRORS},
    summary="Merge fields into a service",
)
async def update_service(
    service_id: str,
    body: ServiceUpdate,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateAck:
    return await service_catalog.update_document(
        db, service_id, body.model_dump(by_alias=True, exclude_unset=True)
    )


@router.delete(
    "/delete-service/{service_id}",
    response_model=DeleteAck,
    responses={**AUTH_ERRORS, **ID_ERRORS},
    summary="Delete a service",
)
async def delete_service(
    service_id: str,
    identity: AuthContext = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteAck:
    return await service_catalog.delete_document(db, service_id)
