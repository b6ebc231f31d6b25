"""
Application error types and their FastAPI handlers.

Every failure raised by the resolver, ledger or profile lookup is an
AppError subclass. The handlers below turn them into one JSON envelope:

    {"error": {"category": ..., "message": ..., "timestamp": ..., "path": ...}}

Nothing here retries; the caller sees the failure once and decides.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    DATABASE = "database_error"
    AUTHENTICATION = "authentication_error"
    PERMISSION = "permission_error"
    NOT_FOUND = "not_found_error"
    CONFLICT = "conflict_error"
    PAYMENT = "payment_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found", details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
            details=details,
        )


class UnauthenticatedError(AppError):
    """
    The action needs a session. `redirect_to` points at the sign-in page
    with a return path so the client can resume the action after login.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        redirect_to: Optional[str] = None,
    ):
        details = {"redirect_to": redirect_to} if redirect_to else {}
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHENTICATION,
            status_code=401,
            details=details,
        )


class ForbiddenError(AppError):
    def __init__(self, message: str = "Not authorized"):
        super().__init__(
            message=message, category=ErrorCategory.PERMISSION, status_code=403
        )


class ConflictError(AppError):
    def __init__(self, message: str, status_code: int = 409, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFLICT,
            status_code=status_code,
            details=details,
        )


class AlreadyRegisteredError(ConflictError):
    def __init__(self, message: str = "Already registered for this masterclass"):
        super().__init__(message=message, status_code=400)


class NotRegisteredError(NotFoundError):
    def __init__(self, message: str = "No registration found for this masterclass"):
        super().__init__(message=message)


class MasterclassFullError(ConflictError):
    def __init__(self, masterclass_id: str):
        super().__init__(
            message="This masterclass has reached its maximum number of participants.",
            details={"masterclass_id": masterclass_id},
        )


class InvalidTransitionError(ConflictError):
    def __init__(self, field: str, current: str, requested: str):
        super().__init__(
            message=f"Cannot change {field} from '{current}' to '{requested}'",
            details={"field": field, "current": current, "requested": requested},
        )


class PaymentRequiredError(AppError):
    def __init__(self, message: str = "A transaction ID is required for paid masterclasses"):
        super().__init__(
            message=message, category=ErrorCategory.PAYMENT, status_code=400
        )


class TransportError(AppError):
    """Unexpected failure talking to the data store."""

    def __init__(self, message: str = "Failed to reach the data store"):
        super().__init__(
            message=message, category=ErrorCategory.DATABASE, status_code=500
        )


def _envelope(request: Request, category: str, message: str, **extra) -> dict:
    return {
        "error": {
            "category": category,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            **extra,
        }
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """FastAPI exception handler for AppError"""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"Application error: {exc.category}",
        extra={
            "category": exc.category,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(request, exc.category, exc.message, **exc.details),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """FastAPI exception handler for validation errors"""
    errors = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"errors": errors, "method": request.method},
    )
    return JSONResponse(
        status_code=400,
        content=_envelope(
            request,
            ErrorCategory.VALIDATION,
            "Request validation failed",
            validation_errors=errors,
        ),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures that escaped the service layer."""
    logger.error(
        f"Database error: {type(exc).__name__}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=_envelope(
            request,
            ErrorCategory.DATABASE,
            "Database operation failed. Please try again.",
            type=type(exc).__name__,
        ),
    )
