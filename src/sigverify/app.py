"""FastAPI application factory."""

import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from sigverify.api.errors import register_exception_handlers
from sigverify.api.middleware import log_requests
from sigverify.api.routes import signatures
from sigverify.core import timezone  # noqa: F401
from sigverify.core.config import Settings, configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Configures logging on startup and logs startup/shutdown events.
    The service holds no connections or background tasks to clean up.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info(
        "application.startup",
        app_env=settings.app_env,
        cors_origins=settings.cors_origins_list,
    )

    yield

    logger.info(
        "application.shutdown",
        uptime_seconds=round(time.monotonic() - app.state.started_at),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Signature Verification API",
        description="Recovers signer addresses from EIP-191 personal message signatures",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # Register API routers
    app.include_router(signatures.router, prefix="/api")

    @app.get("/health")
    async def health_check(request: Request):
        """Liveness check.

        Returns:
            200: {"status": "ok", "timestamp": "<ISO-8601>", "uptime": <seconds>}
        """
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": time.monotonic() - request.app.state.started_at,
        }

    return app


# Create app instance for uvicorn
app = create_app()
