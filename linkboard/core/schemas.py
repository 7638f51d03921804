"""Shared response schema bases."""

from datetime import datetime

from pydantic import field_serializer
from sqlmodel import SQLModel

from linkboard.core.mixins import ensure_utc


def format_utc(value: datetime) -> str:
    """``2026-01-19T12:34:56Z``: whole seconds, UTC, ``Z`` suffix.

    Naive values are taken to be UTC already.
    """
    return ensure_utc(value).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


class TimestampRead(SQLModel):
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _as_utc(self, value: datetime) -> str:
        return format_utc(value)
