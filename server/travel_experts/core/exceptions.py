"""API exceptions rendered as `{ok: false, error, message}` envelopes."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """
    Base exception for errors returned to API callers.

    Every subclass renders the same envelope the front end expects:
    `{"ok": false, "error": <code>, "message": <text>}` plus any extensions.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the API error.

        Args:
            status_code: HTTP status code
            code: Machine-readable error code
            message: Human-readable message safe to show to the caller
            extensions: Additional error-specific fields
            headers: HTTP headers to include in response
        """
        self.status_code = status_code
        self.code = code
        self.message = message
        self.extensions = extensions or {}

        self.body = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        self.body.update(self.extensions)

        super().__init__(
            status_code=status_code,
            detail=self.body,
            headers=headers
        )


class ClientError(ApiError):
    """Exception for missing or invalid request fields."""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "BAD_REQUEST",
        fields: Optional[list[str]] = None,
        status_code: int = 400,
        extensions: Optional[Dict[str, Any]] = None,
    ):
        extensions = dict(extensions or {})
        if fields:
            extensions["fields"] = fields

        super().__init__(
            status_code=status_code,
            code=code,
            message=message,
            extensions=extensions,
        )


class NotFoundError(ClientError):
    """Exception for references that do not resolve to a stored row."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        if not message:
            message = f"{resource_type.capitalize()} not found"

        extensions = {"resource_type": resource_type}
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            message=message,
            code=f"{resource_type.upper()}_NOT_FOUND",
            status_code=404,
            extensions=extensions,
        )


class ConflictError(ApiError):
    """Exception for write conflicts such as a duplicate booking number."""

    def __init__(
        self,
        message: str = "The request conflicts with the current state of the store",
        code: str = "CONFLICT",
        attempts: Optional[int] = None,
    ):
        extensions = {}
        if attempts is not None:
            extensions["attempts"] = attempts

        super().__init__(
            status_code=409,
            code=code,
            message=message,
            extensions=extensions,
        )


class StoreError(ApiError):
    """
    Exception for store failures surfaced as a generic server error.

    The `error_id` is echoed to the caller and written to the log so an
    operator can correlate a failed request without the response leaking
    internal detail.
    """

    def __init__(
        self,
        code: str = "DB_ERROR",
        message: str = "The request could not be completed",
        operation: Optional[str] = None,
        error_id: Optional[str] = None,
    ):
        self.operation = operation
        self.error_id = error_id or str(uuid.uuid4())

        super().__init__(
            status_code=500,
            code=code,
            message=message,
            extensions={
                "error_id": self.error_id,
                "timestamp": datetime.utcnow().isoformat() + "Z",
            },
        )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """
    Exception handler for API errors.

    Args:
        request: FastAPI request object
        exc: API error

    Returns:
        JSONResponse: Error envelope
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.body,
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer undecodable request bodies with a 400 envelope instead of FastAPI's 422."""
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    ]
    error = ClientError(message="Malformed request body", fields=[f for f in fields if f])
    return await api_error_handler(request, error)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to an error envelope.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Error envelope
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception",
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred while processing the request",
            "error_id": error_id,
        },
    )
