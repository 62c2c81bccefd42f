"""
Centralized exception handling for the Eco Wardrobe backend.
Provides the wardrobe error taxonomy and consistent error responses.
"""
import logging
import traceback
from typing import Any, Dict, Optional
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


# =============================================================================
# Custom Exception Classes
# =============================================================================

class WardrobeException(Exception):
    """Base exception for wardrobe application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(message)


class DuplicateIdError(WardrobeException):
    """An entity with the same id is already in the store."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} with id '{entity_id}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            error_code="DUPLICATE_ID",
            details={"entity": entity, "id": entity_id}
        )


class EmptySelectionError(WardrobeException):
    """An outfit was logged without any items selected."""

    def __init__(self, message: str = "Select at least one item to log an outfit"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="EMPTY_SELECTION"
        )


class CollaboratorFailure(WardrobeException):
    """Recognition / recommendation service failed or returned malformed data."""

    def __init__(self, service: str, message: str):
        super().__init__(
            message=f"{service} service error: {message}",
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="COLLABORATOR_FAILURE",
            details={"service": service}
        )


class PersistenceFailure(WardrobeException):
    """Reading from or writing to durable storage failed."""

    def __init__(self, message: str = "Persistence operation failed", key: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="PERSISTENCE_FAILURE",
            details={"key": key} if key else {}
        )


class NotFoundError(WardrobeException):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id}
        )


class ValidationError(WardrobeException):
    """Input validation failed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details={"field": field} if field else {}
        )


# =============================================================================
# Error Response Model
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response format."""
    success: bool = False
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None


# =============================================================================
# Exception Handlers for FastAPI
# =============================================================================

async def wardrobe_exception_handler(request: Request, exc: WardrobeException) -> JSONResponse:
    """Handle wardrobe custom exceptions."""
    logger.error(f"WardrobeException: {exc.error_code} - {exc.message}", extra={"details": exc.details})

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details if exc.details else None
        ).model_dump(exclude_none=True)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPExceptions with consistent format."""
    error_code = "HTTP_ERROR"
    if exc.status_code == 400:
        error_code = "BAD_REQUEST"
    elif exc.status_code == 404:
        error_code = "NOT_FOUND"
    elif exc.status_code == 422:
        error_code = "VALIDATION_ERROR"
    elif exc.status_code >= 500:
        error_code = "SERVER_ERROR"

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=str(exc.detail)
        ).model_dump(exclude_none=True)
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with logging."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method}
    )

    # In production, don't expose internal error details
    from ecowardrobe.config import settings
    is_dev = settings.is_development

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error_code="INTERNAL_ERROR",
            message=str(exc) if is_dev else "An unexpected error occurred",
            details={"traceback": traceback.format_exc()} if is_dev else None
        ).model_dump(exclude_none=True)
    )
