"""
Global Exception Handlers for the Application
Renders every failure as `{"error": <message>, "code": <error_code>, ...}` and logs it.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from redis.exceptions import RedisError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from farm_market.core.exceptions import AppException

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: dict = None,
    path: str = None,
    headers: dict = None,
) -> ORJSONResponse:
    """
    Create a standardized error response.

    Args:
        status_code: HTTP status code
        error_code: Application-specific error code
        message: Human-readable error message
        details: Additional error details
        path: Request path where error occurred
        headers: Extra response headers (e.g. WWW-Authenticate)

    Returns:
        ORJSONResponse with the `{"error": message}` body clients expect
    """
    content = {"error": message, "code": error_code}
    if details:
        content["details"] = details
    if path:
        content["path"] = path

    return ORJSONResponse(status_code=status_code, content=content, headers=headers)


def _is_verbose(request: Request) -> bool:
    env = getattr(request.app.state, "environment", "production").lower()
    return env in ("development", "dev", "test")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers for the application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle custom application exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "AppException: %s - %s",
            exc.error_code,
            exc.message,
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_code": exc.error_code,
            },
        )

        return create_error_response(
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
            path=request.url.path,
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle framework HTTP errors (unknown routes, wrong verbs)."""
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return create_error_response(
            status_code=exc.status_code,
            error_code="http_error",
            message=message,
            path=request.url.path,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle request validation errors as 400s."""
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            errors.append(
                {
                    "field": field,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )

        logger.warning(
            "Validation error on %s",
            request.url.path,
            extra={"path": request.url.path, "method": request.method},
        )

        first = errors[0] if errors else None
        message = (
            f"Invalid field '{first['field']}': {first['message']}"
            if first and first["field"]
            else "Request validation failed"
        )
        return create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="validation_error",
            message=message,
            details={"errors": errors},
            path=request.url.path,
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Handle rate limit exceeded errors."""
        client_host = request.client.host if request.client else "unknown"
        logger.warning(
            "Rate limit exceeded for %s",
            client_host,
            extra={"path": request.url.path, "method": request.method},
        )

        return create_error_response(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            error_code="rate_limit_exceeded",
            message="Too many requests. Please try again later.",
            details={"retry_after": str(exc.detail)},
            path=request.url.path,
        )

    @app.exception_handler(RedisError)
    async def storage_exception_handler(request: Request, exc: RedisError):
        """Handle key-value store failures."""
        logger.error(
            "Storage error: %s",
            exc,
            extra={"path": request.url.path, "method": request.method},
            exc_info=True,
        )

        return create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="storage_error",
            message="A storage error occurred. Please try again later.",
            path=request.url.path,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other unhandled exceptions."""
        logger.error(
            "Unhandled exception: %s",
            exc,
            extra={"path": request.url.path, "method": request.method},
            exc_info=True,
        )

        message = "An unexpected error occurred. Please try again later."
        details = {}
        if _is_verbose(request):
            message = str(exc) or message
            details = {
                "error_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n"),
            }

        return create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="internal_error",
            message=message,
            details=details,
            path=request.url.path,
        )
