"""CSV snapshots of the user and profile tables.

Exports are always full and unfiltered, ordered by creation time. Rows are
read eagerly so the request's database session can close before the body
streams; only the CSV formatting is lazy.
"""

import csv
import io
from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime
from typing import Any

from fastapi.responses import StreamingResponse
from sqlmodel import Session, col, select

from linkboard.bio_page.models import Profile
from linkboard.core.mixins import utc_now
from linkboard.core.schemas import format_utc
from linkboard.user.models import User

USER_COLUMNS = (
    "id",
    "email",
    "first_name",
    "last_name",
    "email_verified",
    "is_admin",
    "created_at",
)

PROFILE_COLUMNS = (
    "id",
    "user_id",
    "page_name",
    "display_name",
    "bio",
    "profile_views",
    "link_clicks",
    "is_default",
    "created_at",
)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_utc(value)
    return str(value)


def _csv_line(values: Iterable[Any]) -> str:
    # csv doubles embedded quotes and quotes fields holding commas or newlines.
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\r\n").writerow([_cell(v) for v in values])
    return buffer.getvalue()


def iter_csv(columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> Iterator[str]:
    yield _csv_line(columns)
    for row in rows:
        yield _csv_line(row)


def user_rows(session: Session) -> list[tuple[Any, ...]]:
    users = session.exec(select(User).order_by(col(User.created_at), col(User.id))).all()
    return [tuple(getattr(user, column) for column in USER_COLUMNS) for user in users]


def profile_rows(session: Session) -> list[tuple[Any, ...]]:
    profiles = session.exec(
        select(Profile).order_by(col(Profile.created_at), col(Profile.id))
    ).all()
    return [
        tuple(getattr(profile, column) for column in PROFILE_COLUMNS)
        for profile in profiles
    ]


def csv_response(
    name: str, columns: Sequence[str], rows: list[tuple[Any, ...]]
) -> StreamingResponse:
    filename = f"{name}-{utc_now():%Y%m%d}.csv"
    return StreamingResponse(
        iter_csv(columns, rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
