"""Tests for linkboard/core/exception_handlers.py - unified error bodies."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from linkboard.bio_page.exceptions import PageNameTakenError
from linkboard.core.exception_handlers import register_exception_handlers
from linkboard.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


class Payload(BaseModel):
    name: str
    count: int


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise PageNameTakenError()

    @app.get("/limited")
    async def limited():
        raise RateLimitError(retry_after=42)

    @app.get("/details")
    async def details():
        raise AppException("with details", details={"needs_verification": True})

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    return app


def test_exception_status_codes():
    assert AuthenticationError.status_code == 401
    assert AuthorizationError.status_code == 403
    assert NotFoundError.status_code == 404
    assert ConflictError.status_code == 409
    assert ValidationError.status_code == 400
    assert RateLimitError.status_code == 429
    assert InternalError.status_code == 500


def test_app_exception_renders_type_and_message():
    response = TestClient(_app()).get("/conflict")

    assert response.status_code == 409
    assert response.json() == {
        "type": "page_name_taken",
        "message": PageNameTakenError().message,
    }


def test_details_are_merged_into_body():
    response = TestClient(_app()).get("/details")

    assert response.status_code == 500
    assert response.json()["needs_verification"] is True


def test_rate_limit_sets_retry_after_header():
    response = TestClient(_app()).get("/limited")

    assert response.status_code == 429
    assert response.headers["retry-after"] == "42"


def test_validation_errors_are_400_with_field_messages():
    response = TestClient(_app()).post("/payload", json={"name": "x", "count": "many"})

    assert response.status_code == 400
    body = response.json()
    assert body["type"] == "validation_error"
    assert body["errors"][0]["field"] == "count"
    assert "count" in body["message"]


def test_unknown_route_uses_http_error_shape():
    response = TestClient(_app()).get("/missing")

    assert response.status_code == 404
    assert response.json()["type"] == "http_error"


def test_unhandled_errors_hide_internals():
    response = TestClient(_app(), raise_server_exceptions=False).get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "type": "internal_error",
        "message": "An unexpected error occurred",
    }
