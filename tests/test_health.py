"""
Tests for the health and root endpoints and the HTTP middleware.
"""

import logging

from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.requests import Request

from app.services.rate_limiter import (
    RETRY_AFTER_SECONDS,
    get_client_ip,
    rate_limit_exceeded_handler,
)


class TestHealth:
    """Tests for GET /health endpoint."""

    def test_health_reports_database(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == "1.0.0"
        assert data["rate_limiting"]["enabled"] is False

    def test_root_lists_resources(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["docs"] == "/docs"
        assert data["authors"] == "/authors"
        assert data["books"] == "/books"


class TestMiddleware:
    """Security headers and request logging."""

    def test_security_headers_present(self, client):
        response = client.get("/health")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "Strict-Transport-Security" not in response.headers

    def test_security_headers_on_errors(self, client):
        response = client.get("/authors/not-a-uuid")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_requests_are_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="app.middleware")

        client.get("/authors")

        messages = [r.getMessage() for r in caplog.records if r.name == "app.middleware"]
        assert "Incoming Request: GET /authors" in messages
        assert any(m.startswith("Outgoing Response: GET /authors 200 - ") for m in messages)

    def test_client_errors_are_logged_as_warnings(self, client, caplog):
        caplog.set_level(logging.WARNING, logger="app.errors")

        client.get("/books/not-a-uuid")

        warnings = [r for r in caplog.records if r.name == "app.errors"]
        assert warnings
        assert warnings[0].levelno == logging.WARNING
        assert "[GET] /books/not-a-uuid" in warnings[0].getMessage()


def make_request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": ("10.0.0.1", 1234),
    }
    return Request(scope)


class TestClientIp:
    """Tests for the rate limiter's client key."""

    def test_forwarded_for_first_address(self):
        request = make_request({"X-Forwarded-For": "203.0.113.5, 10.0.0.2"})

        assert get_client_ip(request) == "203.0.113.5"

    def test_real_ip_header(self):
        assert get_client_ip(make_request({"X-Real-IP": " 198.51.100.7 "})) == "198.51.100.7"

    def test_direct_connection(self):
        assert get_client_ip(make_request({})) == "10.0.0.1"


def build_limited_app(limit: str) -> FastAPI:
    """App wired like create_app(), but with its own enabled limiter."""
    app = FastAPI()
    app.state.limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[limit],
        storage_uri="memory://",
        strategy="fixed-window",
    )
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    @app.get("/ping")
    def ping() -> dict:
        return {"pong": True}

    return app


class TestRateLimiting:
    """Requests past the limit get a 429 error envelope."""

    def test_limit_exceeded_returns_429_envelope(self):
        client = TestClient(build_limited_app("2/minute"))

        codes = [client.get("/ping").status_code for _ in range(3)]

        assert codes == [200, 200, 429]

        response = client.get("/ping")
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.headers["Retry-After"] == str(RETRY_AFTER_SECONDS)
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 429
        assert body["error"] == "Too Many Requests"
        assert body["message"] == "Too many requests. Please slow down."
        assert body["path"] == "/ping"

    def test_limit_is_per_client(self):
        client = TestClient(build_limited_app("1/minute"))

        first = client.get("/ping", headers={"X-Forwarded-For": "203.0.113.1"})
        second = client.get("/ping", headers={"X-Forwarded-For": "203.0.113.2"})
        repeat = client.get("/ping", headers={"X-Forwarded-For": "203.0.113.1"})

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_200_OK
        assert repeat.status_code == status.HTTP_429_TOO_MANY_REQUESTS
