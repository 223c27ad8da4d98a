"""
RideRelay Backend: Liveness & Health Routes
=============================================

What:  GET / (plain banner) and GET /health (dependency-aware status).
How:   /health runs `SELECT 1` through the application's Database. A backend
       that cannot reach its store is reported unhealthy with HTTP 503 so
       load balancers route around it.
Who:   Docker health checks, load balancers, humans with curl.
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from app import __version__
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "RideRelay Server is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    database = request.app.state.database
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
