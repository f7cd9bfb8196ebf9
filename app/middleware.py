"""
HTTP Middleware

- RequestLoggingMiddleware: logs every request with its status and duration
- SecurityHeadersMiddleware: adds protective headers to every response
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log incoming requests and outgoing responses.

    Example log lines:
        Incoming Request: POST /authors
        Outgoing Response: POST /authors 201 - 12ms
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        method = request.method
        path = request.url.path
        started = time.perf_counter()

        logger.info(f"Incoming Request: {method} {path}")

        try:
            response = await call_next(request)
        except Exception as exc:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.error(f"Error Response: {method} {path} - {elapsed_ms}ms - {exc}")
            raise

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Outgoing Response: {method} {path} {response.status_code} - {elapsed_ms}ms"
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all HTTP responses.

    Headers added:
    - X-Frame-Options: Prevents clickjacking attacks
    - X-Content-Type-Options: Prevents MIME type sniffing
    - X-XSS-Protection: Enables XSS filter in older browsers
    - Referrer-Policy: Controls referrer information
    - Strict-Transport-Security: Only when enable_hsts is set (production)
    """

    def __init__(self, app: ASGIApp, enable_hsts: bool = False) -> None:
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if self.enable_hsts:
            # 1 year, applies to subdomains
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response
