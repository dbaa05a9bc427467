"""
Global error sink for FastAPI.

The single place where raised errors become HTTP responses.
Every error is logged, then mapped to a failure envelope.
No stack traces or internal details are exposed to clients in production.
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    ArgumentError,
    DataError,
    DBAPIError,
    IntegrityError,
    SQLAlchemyError,
    StatementError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from foundation.shared.errors.exceptions import AppError, ValidationError
from foundation.shared.responses import send_error
from foundation.shared.validation import collect_field_errors

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_405 = 405
HTTP_422 = 422
HTTP_500 = 500

DATABASE_OPERATION_FAILED = "Database operation failed"
INVALID_DATA_PROVIDED = "Invalid data provided"
INVALID_JSON_PAYLOAD = "Invalid JSON payload"
UNEXPECTED_ERROR = "An unexpected error occurred"

DB_REQUEST_ERRORS = (IntegrityError, DataError)


def _is_production(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings is not None and settings.is_production)


def _is_db_data_error(exc: Exception) -> bool:
    if isinstance(exc, DBAPIError):
        return False
    return isinstance(exc, (StatementError, ArgumentError))


def _is_json_parse_error(exc: Exception) -> bool:
    if isinstance(exc, json.JSONDecodeError):
        return True
    if isinstance(exc, RequestValidationError):
        return any(issue.get("type") == "json_invalid" for issue in exc.errors())
    return False


def _log_error(exc: Exception) -> None:
    logger.error(
        "Error occurred: %s: %s",
        type(exc).__name__,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
    )


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    """Convert any raised error into a failure envelope.

    Precedence: taxonomy errors, database errors, body parse errors,
    request validation errors, then the generic fallback.
    """
    _log_error(exc)

    if isinstance(exc, ValidationError):
        return send_error(exc.message, exc.status_code, exc.errors)

    if isinstance(exc, AppError):
        return send_error(exc.message, exc.status_code)

    if isinstance(exc, DB_REQUEST_ERRORS):
        return send_error(DATABASE_OPERATION_FAILED, HTTP_400)

    if _is_db_data_error(exc):
        return send_error(INVALID_DATA_PROVIDED, HTTP_400)

    if _is_json_parse_error(exc):
        return send_error(INVALID_JSON_PAYLOAD, HTTP_400)

    if isinstance(exc, RequestValidationError):
        return send_error(
            "Validation failed",
            HTTP_422,
            collect_field_errors(exc.errors(), strip_prefix=True),
        )

    message = UNEXPECTED_ERROR if _is_production(request) else str(exc)
    return send_error(message, HTTP_500)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Map framework HTTP errors, answering unmatched routes with a 404."""
    unmatched = exc.status_code == HTTP_405 or (
        exc.status_code == HTTP_404 and "endpoint" not in request.scope
    )
    if unmatched:
        logger.warning("Route not found: %s %s", request.method, request.url.path)
        return send_error(
            f"Route {request.method} {request.url.path} not found", HTTP_404
        )

    logger.warning("HTTP error %d: %s", exc.status_code, exc.detail)
    message = exc.detail if isinstance(exc.detail, str) and exc.detail else "Request failed"
    response = send_error(message, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Answer errors that no exception handler claimed.

    Registered innermost, so the resulting 500 envelope still passes through
    the security header, CORS and request logging middleware.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_error(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Register the global error sink on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(AppError, handle_error)
    app.add_exception_handler(RequestValidationError, handle_error)
    app.add_exception_handler(json.JSONDecodeError, handle_error)
    app.add_exception_handler(SQLAlchemyError, handle_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    # Fallback for errors raised by middleware outside UnhandledErrorMiddleware.
    app.add_exception_handler(Exception, handle_error)
