"""Exception handlers producing the API error envelope.

Every error response (except unknown routes) uses the same envelope:

    {"error": "<message>", "timestamp": "<ISO-8601>", "path": "/api/...", "method": "POST"}

Request validation failures (malformed JSON, wrong field types) are answered
with 400 instead of FastAPI's default 422, and unexpected exceptions are logged
in full server-side but answered with a generic 500.
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sigverify.services.exceptions import ServiceError

logger = structlog.get_logger()


def error_envelope(request: Request, error: str, **extra: Any) -> dict[str, Any]:
    """Build the standard error body for a request."""
    return {
        "error": error,
        **extra,
        "timestamp": datetime.now(UTC).isoformat(),
        "path": request.url.path,
        "method": request.method,
    }


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map ServiceError subclasses to their HTTP status."""
    logger.warning(
        "service_error",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content=error_envelope(request, exc.message))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject unparseable or mistyped request bodies with 400."""
    errors = exc.errors()

    if any(error.get("type") == "json_invalid" for error in errors):
        detail = "Malformed JSON in request body"
    elif errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        detail = "Request body could not be validated"

    logger.info(
        "request_validation_failed",
        path=request.url.path,
        method=request.method,
        detail=detail,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(request, "Invalid request body", message=detail),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors and explicit HTTPExceptions."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "Route not found",
                "message": f"Cannot {request.method} {request.url.path}",
                "timestamp": datetime.now(UTC).isoformat(),
            },
            headers=exc.headers,
        )

    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(request, message),
        headers=exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and return a sanitized 500."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(request, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all API exception handlers on the application."""
    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        StarletteHTTPException,
        http_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
