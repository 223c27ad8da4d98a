"""
RideRelay Backend: FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app(settings)` builds the app, constructs the single Database
       and AuthService it owns, registers middleware, exception handlers and
       routers. Tests call it with their own Settings; uvicorn imports the
       module-level `app` (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes (under API_PREFIX):                         │
    │  /auth/*   /services*   /bookings*   + mutations    │
    │                                                     │
    │  Exception Handlers:                                │
    │  400 Validation │ 401 Unauthorized │ 403 Forbidden  │
    │  404 NotFound   │ 500 Database / unexpected         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config checks → wait for database
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, settings as default_settings
from app.database import Database
from app.exceptions import (
    DatabaseError,
    ForbiddenError,
    InvalidIdentifierError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, bookings, health, services
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure root logging once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate security-sensitive configuration (logged, not fatal)
        3. Wait for the database (tenacity backoff)
    Shutdown:
        1. Dispose the database engine
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("RideRelay Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    try:
        await database.wait_until_ready()
    except Exception as e:
        # Keep serving: /health reports the outage and handlers return 500
        logger.error("Database unreachable at startup: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API prefix: %s", settings.api_prefix or "/")
    logger.info("=" * 60)

    yield

    logger.info("RideRelay Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy to HTTP responses.

    Handler hierarchy:
        InvalidIdentifierError → 400 invalid_identifier
        ValidationError        → 400 validation_error
        UnauthorizedError      → 401 unauthorized
        ForbiddenError         → 403 forbidden
        NotFoundError          → 404 not_found
        DatabaseError          → 500 server_error (generic message)
        Exception (fallback)   → 500 internal_server_error

    5xx bodies never include exception details; those are logged.
    """

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        return _error_response(400, "invalid_identifier", exc.message, exc.context)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        logger.info(
            "[%s] Unauthorized %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            exc.context.get("reason", "unknown"),
        )
        return _error_response(401, "unauthorized", exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        return _error_response(403, "forbidden", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(
            500,
            "server_error",
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The app owns exactly one Database and one AuthService, both built from
    `settings` and exposed on app.state for the request dependencies.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="RideRelay API",
        description=(
            "Ride service catalog and bookings. Mutations and booking reads "
            "require the `token` cookie issued by /auth/access-token."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.auth_service = AuthService(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(services.router, prefix=settings.api_prefix)
    app.include_router(bookings.router, prefix=settings.api_prefix)

    return app


app = create_app()
