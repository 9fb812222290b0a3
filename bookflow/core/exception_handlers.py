"""JSON error bodies for the workflow API.

Every error response has the same shape: {"error", "message", "details"}.
Domain errors carry their own error_code; framework errors use HTTP_ERROR,
VALIDATION_ERROR or INTERNAL_ERROR.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookflow.core.config import get_settings
from bookflow.domain.exceptions import BookflowException

logger = logging.getLogger(__name__)

# Unlisted domain codes are client errors.
STATUS_BY_ERROR_CODE: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "ACTION_EXECUTION_ERROR": 502,
    "TRANSIENT_COLLABORATOR_ERROR": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def error_response(
    status_code: int, error: str, message: Any, details: Any = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "details": details},
    )


def _on_bookflow_error(request: Request, exc: BookflowException) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_ERROR_CODE.get(exc.error_code, 400),
        content=exc.to_dict(),
    )


def _on_invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters: 422 with pydantic's error list."""
    return error_response(
        422, "VALIDATION_ERROR", "Request validation failed", exc.errors()
    )


def _on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, "HTTP_ERROR", exc.detail)


def _on_unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback; the exception text is only returned in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookflowException, _on_bookflow_error)
    app.add_exception_handler(RequestValidationError, _on_invalid_request)
    app.add_exception_handler(StarletteHTTPException, _on_http_error)
    app.add_exception_handler(Exception, _on_unhandled_error)
