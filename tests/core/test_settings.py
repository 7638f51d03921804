"""Tests for linkboard/core/settings.py."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from linkboard.core.settings import Settings


def _settings(**env) -> Settings:
    return Settings(DATABASE_URL="sqlite://", SESSION_SECRET_KEY="x", **env)


def test_cors_origins_list_trims_and_drops_empty():
    settings = _settings(CORS_ORIGINS=" https://a.example ,,https://b.example ")

    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize(
    ("env_name", "secure"),
    [("development", False), ("test", False), ("production", True), ("staging", True)],
)
def test_secure_cookie_follows_environment(env_name, secure):
    assert _settings(ENV_NAME=env_name).is_secure_cookie is secure


def test_durations():
    settings = _settings(
        SESSION_EXPIRES_DAYS=3,
        EMAIL_VERIFICATION_EXPIRES_HOURS=12,
        PASSWORD_RESET_EXPIRES_MINUTES=30,
    )

    assert settings.session_expires_in == timedelta(days=3)
    assert settings.email_verification_expires_in == timedelta(hours=12)
    assert settings.password_reset_expires_in == timedelta(minutes=30)


def test_session_lifetime_is_bounded():
    with pytest.raises(ValidationError):
        _settings(SESSION_EXPIRES_DAYS=90)


def test_env_name_is_normalized():
    settings = _settings(ENV_NAME=" Production ")

    assert settings.env_name == "production"
    assert settings.is_secure_cookie is True


def test_client_url_drops_trailing_slash():
    assert _settings(CLIENT_URL="https://linkboard.example/").client_url == (
        "https://linkboard.example"
    )


def test_trusted_proxy_count_defaults_to_zero_and_rejects_negative():
    assert _settings().trusted_proxy_count == 0
    with pytest.raises(ValidationError):
        _settings(TRUSTED_PROXY_COUNT=-1)
