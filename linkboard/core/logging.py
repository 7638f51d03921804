"""Logging setup for the API process.

Everything goes to stdout through one handler on the root logger; Uvicorn,
httpx and SQLAlchemy loggers propagate into it. Configuration comes from
environment variables rather than Settings so it can run before the app
modules (and their settings) are imported.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from datetime import UTC, datetime
from typing import Any

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}

# ``extra=`` keys copied into JSON log lines when present.
LOG_EXTRA_FIELDS = (
    "method",
    "path",
    "query",
    "status_code",
    "duration_ms",
    "client_ip",
    "user_agent",
    "error_type",
    "user_id",
    "profile_id",
)


def env_bool(name: str, *, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, record.__dict__[key])
            for key in LOG_EXTRA_FIELDS
            if key in record.__dict__
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _library_loggers(level: str, uvicorn_access: bool) -> dict[str, dict[str, Any]]:
    levels = {
        "uvicorn": level,
        "uvicorn.error": level,
        # Request lines come from our middleware unless asked otherwise.
        "uvicorn.access": "INFO" if uvicorn_access else "WARNING",
        "httpx": os.getenv("HTTPX_LOG_LEVEL", "WARNING").upper(),
        "sqlalchemy.engine": os.getenv("SQL_LOG_LEVEL", "WARNING").upper(),
    }
    return {name: {"level": lvl, "propagate": True} for name, lvl in levels.items()}


def build_logging_config(
    *, level: str = "INFO", log_json: bool = False, uvicorn_access: bool = False
) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping used by configure_logging."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s"},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json" if log_json else "text",
                "stream": sys.stdout,
            }
        },
        "root": {"handlers": ["stdout"], "level": level},
        "loggers": _library_loggers(level, uvicorn_access),
    }


def configure_logging() -> None:
    """Apply logging configuration from the environment.

    Env vars:
    - LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    - LOG_JSON: emit JSON lines (default: false)
    - LOG_REQUESTS: request logging middleware (default: true)
    - LOG_UVICORN_ACCESS: Uvicorn access lines (default: the opposite of
      LOG_REQUESTS, so each request is logged once)
    - HTTPX_LOG_LEVEL, SQL_LOG_LEVEL: library levels (default: WARNING)
    """
    log_requests = env_bool("LOG_REQUESTS", default=True)
    logging.config.dictConfig(
        build_logging_config(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_json=env_bool("LOG_JSON", default=False),
            uvicorn_access=env_bool("LOG_UVICORN_ACCESS", default=not log_requests),
        )
    )
