"""FastAPI application entry point.

This module sets up the FastAPI application with middleware, the relay
router, and operational endpoints.
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
import structlog

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import Settings, get_settings
from core.exceptions import ExternalServiceError
from core.logging import register_secret, setup_logging
from core.middleware import CorrelationIDMiddleware, LoggingMiddleware
from core.monitoring import setup_monitoring
from models.common import ErrorResponse, HealthResponse
from proxy.router import router as proxy_router

settings = get_settings()

setup_logging(settings)
logger = structlog.get_logger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        app_settings: Settings to build the app with, defaults to the
            environment-derived settings.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if app_settings is None:
        app_settings = settings
    register_secret(app_settings.upstream_key)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Starting MovieArc proxy",
            version=app_settings.app_version,
            upstream=app_settings.tmdb_api_url,
            key_configured=app_settings.upstream_key is not None,
        )
        setup_monitoring(app_settings)

        yield

        logger.info("Shutting down MovieArc proxy")

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Relays movie queries to TMDB without exposing the API key",
        debug=app_settings.debug,
        lifespan=lifespan,
        docs_url=None if app_settings.is_production else "/docs",
        redoc_url=None if app_settings.is_production else "/redoc",
    )

    # Added last runs first; the correlation ID is bound before request logging.
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(proxy_router, tags=["proxy"])
    app.dependency_overrides[get_settings] = lambda: app_settings

    add_exception_handlers(app)

    @app.get("/health", tags=["health"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=app_settings.app_version)

    if app_settings.metrics_enabled:
        app.mount("/metrics", make_asgi_app())

    return app


def add_exception_handlers(app: FastAPI) -> None:
    """Add global exception handlers to the FastAPI app.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(ExternalServiceError)
    async def external_service_error_handler(
        request: Request, exc: ExternalServiceError
    ) -> JSONResponse:
        """Handle external service errors that escaped the relay."""
        logger.error(
            "External service error",
            error=str(exc),
            path=request.url.path,
            service=exc.service,
        )
        body = ErrorResponse(
            detail="External service error",
            type="external_service_error",
            correlation_id=getattr(request.state, "correlation_id", None),
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=body.model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.exception(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
        )
        body = ErrorResponse(
            detail="Internal server error",
            type="internal_error",
            correlation_id=getattr(request.state, "correlation_id", None),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=1 if settings.reload else settings.workers,
        log_level=settings.log_level.lower(),
    )
