"""Error Handling Middleware for Stormtrooper.

This module provides custom exception classes and exception handlers
for standardized error responses across the API.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel


logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standardized error response schema.

    Attributes:
        error: Error type identifier
        message: Human-readable error message
        details: Additional error details (optional)
        path: Request path that caused the error
        timestamp: ISO 8601 timestamp of the error
        request_id: Unique request identifier (optional)
    """
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    path: Optional[str] = None
    timestamp: Optional[str] = None
    request_id: Optional[str] = None

    def __init__(self, **kwargs):
        if kwargs.get("timestamp") is None:
            kwargs["timestamp"] = datetime.now(timezone.utc).isoformat()
        super().__init__(**kwargs)


class StormtrooperException(Exception):
    """Base exception for all Stormtrooper API errors.

    Attributes:
        status_code: HTTP status code
        error: Error type identifier
        message: Human-readable error message
        details: Additional error details
        headers: Optional response headers
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error: str = "internal_error",
        message: str = "An internal error occurred",
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class NotFoundException(StormtrooperException):
    """Exception for resource not found errors (404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="not_found",
            message=message,
            details=details if details else None,
        )


class UnauthorizedException(StormtrooperException):
    """Exception for authentication errors (401)."""

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="unauthorized",
            message=message,
            details=details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ConflictException(StormtrooperException):
    """Exception for resource conflict errors (409)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        conflicting_field: Optional[str] = None,
    ):
        details = {"conflicting_field": conflicting_field} if conflicting_field else None
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error="conflict",
            message=message,
            details=details,
        )


class ServiceUnavailableException(StormtrooperException):
    """Exception for service unavailable errors (503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        service: Optional[str] = None,
    ):
        details = {"service": service} if service else None
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="service_unavailable",
            message=message,
            details=details,
        )


async def http_exception_handler(
    request: Request,
    exc: StormtrooperException,
) -> JSONResponse:
    """Handle Stormtrooper custom exceptions.

    Args:
        request: The incoming request.
        exc: The StormtrooperException that was raised.

    Returns:
        Standardized JSON error response.
    """
    request_id = request.headers.get("X-Request-ID", None)

    error_response = ErrorResponse(
        error=exc.error,
        message=exc.message,
        details=exc.details,
        path=str(request.url.path),
        request_id=request_id,
    )

    logger.warning(
        f"HTTP {exc.status_code}: {exc.error} - {exc.message}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(exclude_none=True),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request.
        exc: The validation error.

    Returns:
        Standardized JSON error response with validation details.
    """
    request_id = request.headers.get("X-Request-ID", None)

    formatted_errors = []
    for error in exc.errors():
        formatted_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    error_response = ErrorResponse(
        error="validation_error",
        message="Request validation failed",
        details={"validation_errors": formatted_errors},
        path=str(request.url.path),
        request_id=request_id,
    )

    logger.warning(
        f"Validation error on {request.url.path}: {len(formatted_errors)} errors",
        extra={"errors": formatted_errors, "request_id": request_id},
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(exclude_none=True),
    )


async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions.

    Catch-all for anything the other handlers do not cover. Logs the
    stack trace and returns a generic error message.

    Args:
        request: The incoming request.
        exc: The unexpected exception.

    Returns:
        Generic 500 error response.
    """
    request_id = request.headers.get("X-Request-ID", None)

    logger.error(
        f"Unhandled exception on {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
            "exception_type": type(exc).__name__,
        },
    )

    # Don't expose internal error details
    error_response = ErrorResponse(
        error="internal_error",
        message="An internal server error occurred",
        path=str(request.url.path),
        request_id=request_id,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(exclude_none=True),
    )
