"""
API error handling utilities.

Provides a decorator for consistent error handling across endpoints and
app-level handlers so that every error body has the same shape:
``{"success": false, "error": ..., "details": ...}``.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal_backend.core.exceptions import (
    ConfigurationError,
    JobNotFoundError,
    MissingCredentialsError,
    PortalBackendError,
    RecordNotFoundError,
    ValidationError,
)
from portal_backend.models.common import ErrorResponse

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def error_response(
    status_code: int,
    error: str,
    details: dict[str, Any] | str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON error response in the common shape."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details or None).model_dump(),
        headers=headers,
    )


def handle_api_errors(failure_message: str = "Internal server error") -> Callable[[F], F]:
    """
    Decorator factory mapping domain exceptions to JSON error responses.

    - ValidationError, MissingCredentialsError -> 400
    - RecordNotFoundError, JobNotFoundError -> 404
    - ConfigurationError -> 500 with its own message
    - anything else -> 500 with ``failure_message``

    Args:
        failure_message: Error text for unexpected and upstream failures
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except (ValidationError, MissingCredentialsError) as e:
                logger.warning("Invalid request", extra={"error": str(e)})
                return error_response(status.HTTP_400_BAD_REQUEST, e.message, e.details)

            except (RecordNotFoundError, JobNotFoundError) as e:
                logger.info("Resource not found", extra={"error": str(e)})
                return error_response(status.HTTP_404_NOT_FOUND, e.message, e.details)

            except ConfigurationError as e:
                logger.error("Server configuration error", extra={"error": str(e)})
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.details
                )

            except PortalBackendError as e:
                logger.exception(failure_message, extra={"error": str(e)})
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message, e.message
                )

            except Exception as e:
                logger.exception(failure_message, extra={"error": str(e)})
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message, str(e)
                )

        return wrapper  # type: ignore

    return decorator


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        "Malformed request body",
        extra={"path": request.url.path, "errors": str(exc.errors())[:500]},
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request",
        {"errors": [error.get("msg", "") for error in exc.errors()]},
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install app-level handlers for framework-raised errors (400 for bad bodies, 404/405)."""
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
