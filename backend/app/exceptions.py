"""
RideRelay Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every failure the gateway reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) map them to HTTP status
       codes and a uniform JSON error body.
Who:   Raised by the auth guard and the document services; caught centrally.

Exception Hierarchy:
    RideRelayError (base)
    ├── ValidationError          → 400 Bad Request
    │   └── InvalidIdentifierError → 400 Bad Request
    ├── UnauthorizedError        → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

Route handlers never catch these; they only raise.
"""

from typing import Any, Dict, Optional


class RideRelayError(Exception):
    """
    Base exception for all RideRelay application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only by 4xx handlers)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RideRelayError):
    """
    Raised when client input fails a business rule.

    HTTP: 400 Bad Request. Schema-level body errors stay FastAPI's 422.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(ValidationError):
    """The path identifier cannot be parsed into the store's identifier format."""

    def __init__(self, resource: str, raw_id: str):
        super().__init__(
            message=f"'{raw_id}' is not a valid {resource} identifier",
            field="id",
            context={"resource": resource, "resource_id": raw_id},
        )
        self.resource = resource
        self.raw_id = raw_id


class UnauthorizedError(RideRelayError):
    """
    Raised when the request carries no token, or the token fails verification.

    When:  Missing cookie, bad signature, malformed token, expired token.
    HTTP:  401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Unauthorized access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(RideRelayError):
    """
    Raised when a verified identity asks for data scoped to someone else.

    When:  GET /bookings?email=<other user>
    HTTP:  403 Forbidden (distinct from the unauthenticated 401)
    """

    def __init__(
        self,
        message: str = "Forbidden access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(RideRelayError):
    """
    Raised when a requested document does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that into this exception so the handler maps it to 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(RideRelayError):
    """
    Raised when a store operation fails unexpectedly.

    The message returned to the client is always generic; the driver error
    is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
