"""Tests for standardized error responses."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from httpx import AsyncClient, ASGITransport

from stormtrooper.middleware.error_handler import (
    ConflictException,
    ErrorResponse,
    NotFoundException,
    ServiceUnavailableException,
    StormtrooperException,
    UnauthorizedException,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def error_app() -> FastAPI:
    app = FastAPI()
    app.add_exception_handler(StormtrooperException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/conflict")
    async def conflict():
        raise ConflictException("External account is already linked", conflicting_field="id")

    @app.get("/unavailable")
    async def unavailable():
        raise ServiceUnavailableException(service="identity")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    return app


@pytest_asyncio.fixture
async def error_client(error_app):
    transport = ASGITransport(app=error_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestExceptions:

    def test_not_found_details(self):
        exc = NotFoundException(resource_type="user", resource_id="abc")
        assert exc.status_code == 404
        assert exc.details == {"resource_type": "user", "resource_id": "abc"}

    def test_not_found_without_details(self):
        assert NotFoundException().details is None

    def test_unauthorized_sets_header(self):
        exc = UnauthorizedException()
        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_error_response_timestamp(self):
        response = ErrorResponse(error="x", message="y")
        assert response.timestamp is not None


class TestHandlers:

    async def test_domain_exception(self, error_client):
        response = await error_client.get("/conflict", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["details"] == {"conflicting_field": "id"}
        assert body["request_id"] == "req-1"
        assert body["path"] == "/conflict"

    async def test_service_unavailable(self, error_client):
        response = await error_client.get("/unavailable")
        assert response.status_code == 503
        assert response.json()["details"] == {"service": "identity"}

    async def test_unhandled_exception_hides_details(self, error_client, capture_logs):
        response = await error_client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"
        assert "hunter2" not in response.text
        assert "Unhandled exception on /boom" in capture_logs.text
