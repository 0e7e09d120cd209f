"""
Error taxonomy and FastAPI exception handlers.

Every failure leaves the API as a single-field body: {"error": "<message>"}.

    ValidationError -> 400  malformed/missing input, enum violation
    AuthError       -> 401  bad credentials, role mismatch, no session
    AuthzError      -> 403  authenticated but wrong role
    NotFoundError   -> 404  missing resource OR caller does not own it
    ConflictError   -> 400  duplicate unique field / duplicate application
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto a client-facing response."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please login first"


class AuthzError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a one-line message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Drop the leading "body"/"query"/"path" marker from the location
    loc = [str(part) for part in first.get("loc", ())[1:]]
    field = ".".join(loc)
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")


def setup_error_handlers(app):
    """
    Set up exception handlers for FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(PyMongoError)
    async def database_exception_handler(request: Request, exc: PyMongoError):
        logger.error(
            f"Database error: {request.method} {request.url.path} - {type(exc).__name__}: {exc}",
            exc_info=True
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {request.method} {request.url.path} - {type(exc).__name__}",
            exc_info=True
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")
