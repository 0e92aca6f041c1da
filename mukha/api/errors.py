"""
Error taxonomy shared by the service layer and the HTTP boundary.

Every error carries the HTTP status it is reported with. The handlers
registered by `register_exception_handlers` render all of them, plus
FastAPI's own `HTTPException` and request validation errors, as
``{"error": <message>}``.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class RestrictedEmailError(ValidationError):
    """Email is reserved and may not be used for an account."""
    def __init__(self, message: str = "This email is not allowed"):
        super().__init__(message)
        self.status_code = 403


class UnauthorizedError(AppError):
    """Missing, invalid or expired session, or wrong credentials."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    """Authenticated but not allowed."""
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status_code=403)


class ConflictError(AppError):
    """Duplicate unique key."""
    def __init__(self, message: str = "User already exists"):
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    """Referenced record is absent."""
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class UpstreamFailure(AppError):
    """The generation service failed."""
    def __init__(self, message: str = "Generation service failed"):
        super().__init__(message, status_code=502)


class StoreUnavailableError(AppError):
    """No database is configured."""
    def __init__(self, message: str = "Database is not configured"):
        super().__init__(message, status_code=503)


def _error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return _error_response(400, "; ".join(parts) or "Invalid request")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the ``{"error": ...}`` handlers on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
