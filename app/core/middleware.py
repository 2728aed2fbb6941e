"""
Application middleware for logging, security headers and API version reporting.

This module contains custom middleware classes for handling various
aspects of request/response processing in production environments.
"""

import logging
import time
from collections.abc import Callable, Sequence

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all requests and responses with timing information.

    This middleware logs details about every request including:
    - Request method and path
    - Response status code
    - Processing time
    - Client IP address
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details."""
        start_time = time.time()

        # Get client IP
        client_ip = request.client.host if request.client else "unknown"

        logger.info(f"Request started: {request.method} {request.url.path} from {client_ip}")

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"- Status: {response.status_code} "
                f"- Time: {process_time:.3f}s"
            )

            response.headers["X-Process-Time"] = str(process_time)

            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"- Error: {str(e)} "
                f"- Time: {process_time:.3f}s",
                exc_info=True,
            )
            raise


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.

    Strict-Transport-Security is only sent when ``hsts`` is enabled, which
    the application does in production.
    """

    def __init__(self, app, hsts: bool = False, hsts_max_age: int = 2592000):
        """
        Initialize security headers middleware.

        Args:
            app: FastAPI application
            hsts: Whether to send Strict-Transport-Security
            hsts_max_age: HSTS max-age in seconds (default 30 days)
        """
        super().__init__(app)
        self.hsts = hsts
        self.hsts_max_age = hsts_max_age

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers.update(
            {
                "X-Content-Type-Options": "nosniff",
                "X-Frame-Options": "DENY",
                "Referrer-Policy": "strict-origin-when-cross-origin",
            }
        )
        if self.hsts:
            response.headers["Strict-Transport-Security"] = f"max-age={self.hsts_max_age}"

        return response


class ApiVersionHeaderMiddleware(BaseHTTPMiddleware):
    """Report the supported API versions on every versioned API response."""

    header_name = "api-supported-versions"

    def __init__(self, app, versions: Sequence[str], path_prefix: str = "/api/"):
        super().__init__(app)
        self.versions = ", ".join(versions)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.path_prefix):
            response.headers[self.header_name] = self.versions
        return response
