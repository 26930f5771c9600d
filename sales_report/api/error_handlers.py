"""Error Handlers — map record errors and malformed requests onto JSON responses.

Invariants:
    - SalesReportError → its own to_response() body and http_status
    - RequestValidationError → 400 INVALID_PAYLOAD, one detail per offending field,
      field named as the client sent it (no "body"/"query" location prefix)
    - Anything else → 500 INTERNAL_ERROR, never leaking internal details
    - Every handled error is logged with its record context (entity, record_id, field)

Design Decisions:
    - Log level follows the error's severity: a rejected payload is a warning,
      an unreachable database is an error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sales_report.core.errors import ErrorCategory, ErrorSeverity, SalesReportError
from sales_report.infrastructure.observability import error_log_extra, log_level_for

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path"}


def register_error_handlers(app: FastAPI) -> None:
    """Register the global error handlers on the FastAPI app."""
    app.add_exception_handler(SalesReportError, handle_record_error)
    app.add_exception_handler(RequestValidationError, handle_invalid_request)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_record_error(request: Request, exc: SalesReportError) -> JSONResponse:
    logger.log(
        log_level_for(exc),
        f"{request.method} {request.url.path} rejected: {exc.message}",
        extra=error_log_extra(exc, path=request.url.path),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_invalid_request(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_describe(error) for error in exc.errors()]
    logger.warning(
        f"{request.method} {request.url.path} malformed: "
        + ", ".join(f"{d['field']} ({d['type']})" for d in details),
        extra={
            "error_code": "INVALID_PAYLOAD",
            "field": details[0]["field"] if details else None,
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "INVALID_PAYLOAD",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.WARNING.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _describe(error: dict) -> dict:
    location = [str(part) for part in error["loc"]]
    if len(location) > 1 and location[0] in _LOCATION_PREFIXES:
        location = location[1:]
    return {
        "field": ".".join(location),
        "message": error["msg"],
        "type": error["type"],
    }
