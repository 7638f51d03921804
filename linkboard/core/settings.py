"""Typed configuration read from the environment (and ``.env`` in development).

Only ``DATABASE_URL`` and ``SESSION_SECRET_KEY`` are required; everything
else has a default suitable for local work.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Environments where cookies may travel over plain HTTP.
INSECURE_ENVIRONMENTS = frozenset({"dev", "development", "local", "test"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env_name: str = Field(default="development", alias="ENV_NAME")
    database_url: str = Field(alias="DATABASE_URL")

    # Login sessions, shared by the API cookie and the admin panel
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")
    session_expires_days: int = Field(
        default=7, alias="SESSION_EXPIRES_DAYS", ge=1, le=30
    )
    cookie_domain: str | None = Field(default=None, alias="COOKIE_DOMAIN")

    # Comma separated; "*" echoes any origin
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Outgoing mail goes through Resend; without a key it is only logged
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    client_url: str = Field(default="http://localhost:3000", alias="CLIENT_URL")

    email_verification_expires_hours: int = Field(
        default=24, alias="EMAIL_VERIFICATION_EXPIRES_HOURS", ge=1
    )
    password_reset_expires_minutes: int = Field(
        default=60, alias="PASSWORD_RESET_EXPIRES_MINUTES", ge=1
    )
    password_require_complexity: bool = Field(
        default=False, alias="PASSWORD_REQUIRE_COMPLEXITY"
    )

    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    # Reverse proxies in front of the app; 0 ignores X-Forwarded-For
    trusted_proxy_count: int = Field(default=0, alias="TRUSTED_PROXY_COUNT", ge=0)
    gravatar_enabled: bool = Field(default=True, alias="GRAVATAR_ENABLED")

    @field_validator("env_name")
    @classmethod
    def _normalize_env_name(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("client_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        # Links are built as f"{client_url}/path"
        return value.rstrip("/")

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @computed_field
    @property
    def is_secure_cookie(self) -> bool:
        return self.env_name not in INSECURE_ENVIRONMENTS

    @computed_field
    @property
    def session_expires_in(self) -> timedelta:
        return timedelta(days=self.session_expires_days)

    @computed_field
    @property
    def email_verification_expires_in(self) -> timedelta:
        return timedelta(hours=self.email_verification_expires_hours)

    @computed_field
    @property
    def password_reset_expires_in(self) -> timedelta:
        return timedelta(minutes=self.password_reset_expires_minutes)


@lru_cache
def get_settings() -> Settings:
    return Settings()
