"""
Exception Handlers.

Turn exceptions raised while serving a request into the JSON error
envelope (`{"success": false, "data": null, "error": {...}, "metadata": {...}}`).
Access-control and rate-limit rejections never get here; the middleware
answers those in plain text.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notebook.core.exceptions import (
    ApplicationError,
    DatabaseError,
    ValidationError,
)
from notebook.core.logging import get_logger
from notebook.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    DatabaseError: 500,
}


def status_for(exc: ApplicationError) -> int:
    """HTTP status of an application error, looked up along its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    """Request id set by RequestContextMiddleware, else the incoming header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _request_fields(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details or None),
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Answer ValidationError with 400 and every other error with 500."""
    status_code = status_for(exc)
    fields = {"code": exc.code, "status": status_code, **_request_fields(request)}

    if status_code >= 500:
        logger.error(exc.message, extra=fields)
    else:
        logger.warning(exc.message, extra=fields)

    details = exc.details if isinstance(exc, ValidationError) else None
    return _error_response(request, status_code, exc.code, exc.message, details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Answer malformed requests with 422.

    Covers bodies that are not JSON objects, fields of the wrong type and
    non-integer note ids. Blank note content is a ValidationError instead.
    """
    problems = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"error_count": len(problems), **_request_fields(request)},
    )
    return _error_response(
        request,
        422,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        {"validation_errors": problems},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Answer anything unexpected with a generic 500; the traceback goes to the log only."""
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_request_fields(request)},
    )
    return _error_response(
        request,
        500,
        "SYS_INTERNAL_ERROR",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on an application."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
