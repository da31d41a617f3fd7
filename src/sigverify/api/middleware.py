"""HTTP middleware for request access logging."""

import time
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response

logger = structlog.get_logger()


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log one access event per request with status and duration.

    Exceptions are re-raised so the 500 handler still builds the response.
    """
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            "http.request",
            method=request.method,
            path=request.url.path,
            status_code=500,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        raise

    logger.info(
        "http.request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        client=request.client.host if request.client else None,
    )
    return response
