"""Tests for linkboard/core/cors.py - credentialed CORS."""

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from linkboard.core.cors import add_cors_middleware
from linkboard.core.settings import Settings


def _client(cors_origins: str) -> TestClient:
    settings = Settings(
        DATABASE_URL="sqlite://", SESSION_SECRET_KEY="x", CORS_ORIGINS=cors_origins
    )
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    with patch("linkboard.core.cors.get_settings", return_value=settings):
        add_cors_middleware(app)
    return TestClient(app)


def test_wildcard_echoes_origin_with_credentials():
    response = _client("*").get("/ping", headers={"Origin": "https://fan.example"})

    assert response.headers["access-control-allow-origin"] == "https://fan.example"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_explicit_origins_are_allowed():
    response = _client("https://app.example, https://admin.example").get(
        "/ping", headers={"Origin": "https://admin.example"}
    )

    assert response.headers["access-control-allow-origin"] == "https://admin.example"


def test_unlisted_origin_gets_no_cors_headers():
    response = _client("https://app.example").get(
        "/ping", headers={"Origin": "https://evil.example"}
    )

    assert "access-control-allow-origin" not in response.headers
