"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import IPurposeError
from shared.logging import configure_logging
from modules.ratelimit.exceptions import RateLimitExceededError
from modules.ratelimit.sweeper import RateLimitSweeper

from .dependencies import get_container
from .models.errors import GUARDED_ROUTE_RESPONSES
from .routes import access, auth, health, onboarding, users

logger = logging.getLogger(__name__)

# 401/403/429 are reserved for the first three kinds
ERROR_STATUS_CODES: dict[str, int] = {
    "UNAUTHENTICATED": 401,
    "FORBIDDEN": 403,
    "RATE_LIMITED": 429,
    "UPSTREAM_UNAVAILABLE": 503,
    "NOT_FOUND": 404,
    "INVALID_REQUEST": 400,
}


def status_code_for(exc: IPurposeError) -> int:
    return ERROR_STATUS_CODES.get(exc.kind, 500)


async def ipurpose_error_handler(request: Request, exc: IPurposeError) -> JSONResponse:
    """Map module exceptions to their HTTP status codes."""
    status_code = status_code_for(exc)
    headers = {}
    if isinstance(exc, RateLimitExceededError):
        headers["Retry-After"] = str(exc.retry_after_seconds)
    if status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Configures logging and runs the rate limit sweeper for the app's lifetime.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.environment, settings.log_level)
    sweeper = RateLimitSweeper(
        get_container().rate_limiter,
        interval_ms=settings.rate_limit_sweep_interval_ms,
    )
    sweeper.start()
    logger.info(f"Starting iPurpose API on {settings.host}:{settings.port}")
    yield
    # Shutdown
    await sweeper.stop()
    logger.info("Shutting down iPurpose API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="iPurpose API",
        description="Session, entitlement and rate limit gating for the iPurpose app",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(IPurposeError, ipurpose_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(
        users.router, prefix="/api", tags=["users"], responses=GUARDED_ROUTE_RESPONSES
    )
    app.include_router(
        onboarding.router,
        prefix="/api/onboarding",
        tags=["onboarding"],
        responses=GUARDED_ROUTE_RESPONSES,
    )
    app.include_router(
        access.router, prefix="/api", tags=["access"], responses=GUARDED_ROUTE_RESPONSES
    )
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

    return app


# Application instance for uvicorn
app = create_app()
