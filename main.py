"""
Main FastAPI application entry point.

This module creates and configures the FastAPI application with
middleware, exception handlers, and route registration.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from brotli_asgi import BrotliMiddleware
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import auth, health
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.core.middleware import (
    ApiVersionHeaderMiddleware,
    LoggingMiddleware,
    SecurityHeadersMiddleware,
)
from app.core.openapi import get_custom_openapi
from app.core.responses import (
    error_response,
    format_validation_errors,
    validation_error_response,
)

# Configure logging
setup_logging()
logger = logging.getLogger("app.main")

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Logs application startup and shutdown along with the active password policy.
    """
    logger.info("Starting up application...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")

    policy = settings.password_policy
    logger.info(
        f"Password policy: length {policy.min_length}-{policy.max_length}, "
        f"at least {policy.min_distinct_categories} of 4 character categories"
    )

    yield

    logger.info("Shutting down application...")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Change the dropdown in the upper right to select different versions.",
        docs_url="/swagger" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    register_routes(app)

    app.openapi = lambda: get_custom_openapi(app)  # type: ignore[method-assign]

    return app


def setup_middleware(app: FastAPI) -> None:
    """Configure application middleware."""

    # Custom middleware (order matters - added first, executed last)
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
    app.add_middleware(ApiVersionHeaderMiddleware, versions=[settings.api_version])
    app.add_middleware(LoggingMiddleware)

    # Response compression: Brotli first, gzip for clients without br
    app.add_middleware(BrotliMiddleware, minimum_size=500, gzip_fallback=True)

    if settings.is_production:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)
        app.add_middleware(HTTPSRedirectMiddleware)
    else:
        # Any origin with credentials; "*" cannot be combined with allow_credentials,
        # so the regex makes the origin be echoed back instead
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure application exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with proper logging."""
        logger.warning(
            f"HTTP {exc.status_code} error on {request.method} {request.url.path}: {exc.detail}"
        )
        return error_response(status_code=exc.status_code, message=str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors with a per-field 400 response."""
        errors = format_validation_errors(exc.errors())

        # Messages only; the raw error dicts carry the submitted input
        logger.warning(f"Request validation error on {request.method} {request.url.path}: {errors}")

        return validation_error_response(
            message="One or more validation errors occurred",
            errors=errors,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors."""
        logger.error(
            f"Unexpected error on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        data = None
        if not settings.is_production:
            data = {"error_type": type(exc).__name__, "error": str(exc)}
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Internal server error",
            data=data,
        )


def register_routes(app: FastAPI) -> None:
    """Register application routes."""

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(auth.router, prefix=API_PREFIX)

    # API info endpoint (JSON format for programmatic access)
    @app.get("/api/info", tags=["Root"])
    async def api_info():
        """Get API information in JSON format for programmatic access."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_versions": [settings.api_version],
            "environment": settings.environment,
            "status": "running",
            "endpoints": {
                "health": f"{API_PREFIX}/health",
                "auth": f"{API_PREFIX}/auth",
                "docs": "/swagger" if settings.docs_enabled else None,
            },
        }


# Create the application instance
app = create_application()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=int(os.getenv("PORT", str(settings.port))),
        reload=not settings.is_production,
        log_level="info" if settings.is_production else "debug",
    )
