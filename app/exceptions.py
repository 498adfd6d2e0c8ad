# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the server.
# Clients receive a short plain-text message; paths, I/O errors and other
# internals are carried in `details` and only ever reach the operator log.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class FormServerException(Exception):
    """
    Base exception for the form server.

    All custom exceptions inherit from this class. `message` is the exact
    text sent to the client, `details` is for the log only.
    """

    def __init__(
        self,
        message: str,
        code: str = "FORM_SERVER_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


# =============================================================================
# Static File Exceptions
# =============================================================================

class InvalidPathError(FormServerException):
    """Raised when a request path does not resolve inside the static root."""

    def __init__(self, request_path: str):
        super().__init__(
            message="400 - Invalid path",
            code="INVALID_PATH",
            status_code=400,
            details={"request_path": request_path}
        )


class FileReadFailureError(FormServerException):
    """Raised when a resolved static file cannot be read."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message="500 - Internal Server Error",
            code="FILE_READ_FAILURE",
            status_code=500,
            details={"path": path, "error": error}
        )


# =============================================================================
# Submission Exceptions
# =============================================================================

class UnsupportedMediaTypeError(FormServerException):
    """Raised when POST /submit does not declare a JSON body."""

    def __init__(self, content_type: str | None):
        super().__init__(
            message="Expected application/json",
            code="UNSUPPORTED_MEDIA_TYPE",
            status_code=415,
            details={"content_type": content_type}
        )


class PayloadTooLargeError(FormServerException):
    """Raised when a request body exceeds the configured cap."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            message="Payload too large",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            details={"size_bytes": size_bytes, "max_bytes": max_bytes}
        )


class RequestTimeoutError(FormServerException):
    """Raised when the client does not deliver its body in time."""

    def __init__(self, timeout_seconds: float):
        super().__init__(
            message="Request timeout",
            code="REQUEST_TIMEOUT",
            status_code=408,
            details={"timeout_seconds": timeout_seconds}
        )


class MalformedBodyError(FormServerException):
    """Raised when the body is not a JSON object with three text fields."""

    def __init__(self, error: str):
        super().__init__(
            message="Invalid form submission",
            code="MALFORMED_BODY",
            status_code=400,
            details={"error": error}
        )


class ValidationFailureError(FormServerException):
    """Raised when a parsed submission breaks a field rule."""

    def __init__(self, reason: str):
        super().__init__(
            message=reason,
            code="VALIDATION_FAILURE",
            status_code=400,
        )


class PersistenceError(FormServerException):
    """Raised when the submission log cannot be opened or written."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message="500 - Internal Server Error",
            code="PERSISTENCE_FAILURE",
            status_code=500,
            details={"path": path, "error": error}
        )


# =============================================================================
# Routing Exceptions
# =============================================================================

class RouteNotFoundError(FormServerException):
    """Raised for any method/path combination the server does not handle."""

    def __init__(self, method: str, path: str):
        super().__init__(
            message="404 - Not Found",
            code="ROUTE_NOT_FOUND",
            status_code=404,
            details={"method": method, "path": path}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def form_server_exception_handler(
    request: Request,
    exc: FormServerException
) -> PlainTextResponse:
    """
    Convert FormServerException to a plain-text response.

    4xx conditions are logged as warnings, 5xx as errors.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> PlainTextResponse:
    """
    Handle routing errors raised by Starlette.

    Unmatched paths (404) and known paths hit with the wrong method (405)
    both answer 404. Anything else keeps its status with a plain-text body.
    """
    if exc.status_code in (404, 405):
        return await form_server_exception_handler(
            request, RouteNotFoundError(request.method, request.url.path)
        )
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)
