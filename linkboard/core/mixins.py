"""Timestamp columns shared by the table models, and UTC helpers."""

from datetime import UTC, datetime

from sqlalchemy import text
from sqlmodel import Field


def utc_now() -> datetime:
    return datetime.now(UTC)


def _utc_now() -> datetime:
    return utc_now().replace(microsecond=0)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from the database.

    SQLite drops tzinfo on round-trip; everything stored is UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class TimestampMixin:
    """created_at/updated_at, truncated to whole seconds."""

    created_at: datetime = Field(
        default_factory=_utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=_utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": _utc_now,
        },
    )


class PreciseTimestampMixin:
    """Like TimestampMixin but keeps microseconds on created_at.

    Used where creation time breaks ordering ties (links sharing an order).
    """

    created_at: datetime = Field(
        default_factory=utc_now,
        index=True,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=_utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": _utc_now,
        },
    )
