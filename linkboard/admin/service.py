"""Admin aggregation and privileged mutations.

Everything here skips per-owner checks; callers must already have passed
the admin guard. Self-targeting guards (delete, demote, impersonate) live
here so they hold for single and bulk variants alike.
"""

import logging
import math
import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, time, timedelta
from typing import Any

from sqlalchemy import func, or_, update
from sqlmodel import Session, SQLModel, col, select
from sqlmodel.sql.expression import SelectOfScalar

from linkboard.admin.schemas import (
    ProfileFilter,
    ProfileSort,
    SortOrder,
    UserFilter,
    UserSort,
)
from linkboard.auth.exceptions import AdminRequiredError, ImpersonationError
from linkboard.auth.models import SessionRecord
from linkboard.auth.sessions import SessionStore
from linkboard.bio_page.models import Profile
from linkboard.core.mixins import ensure_utc, utc_now
from linkboard.health.service import database_ok, uptime_seconds
from linkboard.link.models import SocialLink
from linkboard.user.exceptions import SelfModificationError, UserNotFoundError
from linkboard.user.models import User
from linkboard.user.service import delete_users_cascade

logger = logging.getLogger(__name__)

RECENT_USERS_DAYS = 7
GROWTH_DAYS = 30
TOP_LIMIT = 10


def _count(session: Session, model: type[SQLModel], *criteria: Any) -> int:
    return session.exec(select(func.count()).select_from(model).where(*criteria)).one()


def _sum(session: Session, column: Any) -> int:
    return session.exec(select(func.coalesce(func.sum(column), 0))).one()


def _paginate(
    session: Session, statement: SelectOfScalar[Any], page: int, limit: int
) -> tuple[list[Any], dict[str, int]]:
    total = session.exec(
        select(func.count()).select_from(statement.order_by(None).subquery())
    ).one()
    rows = session.exec(statement.offset((page - 1) * limit).limit(limit)).all()
    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit) if total else 0,
    }
    return list(rows), pagination


def _growth_series(session: Session, now: datetime) -> list[dict[str, Any]]:
    """Daily sign-ups and new pages for the last GROWTH_DAYS days, zero-filled."""
    first_day = (now - timedelta(days=GROWTH_DAYS - 1)).date()
    since = datetime.combine(first_day, time.min, tzinfo=UTC)

    users = Counter(
        ensure_utc(created).date()
        for created in session.exec(
            select(User.created_at).where(col(User.created_at) >= since)
        ).all()
    )
    profiles = Counter(
        ensure_utc(created).date()
        for created in session.exec(
            select(Profile.created_at).where(col(Profile.created_at) >= since)
        ).all()
    )

    series = []
    for offset in range(GROWTH_DAYS):
        day = first_day + timedelta(days=offset)
        series.append({"day": day, "users": users[day], "profiles": profiles[day]})
    return series


def get_stats(session: Session) -> dict[str, Any]:
    now = utc_now()
    totals = {
        "users": _count(session, User),
        "profiles": _count(session, Profile),
        "links": _count(session, SocialLink),
        "recent_users": _count(
            session,
            User,
            col(User.created_at) >= now - timedelta(days=RECENT_USERS_DAYS),
        ),
        "total_views": _sum(session, Profile.profile_views),
        "total_clicks": _sum(session, Profile.link_clicks),
    }
    recent_users = session.exec(
        select(User)
        .order_by(col(User.created_at).desc(), col(User.id))
        .limit(TOP_LIMIT)
    ).all()
    top_profiles = session.exec(
        select(Profile)
        .order_by(col(Profile.profile_views).desc(), col(Profile.id))
        .limit(TOP_LIMIT)
    ).all()
    return {
        "stats": totals,
        "recent_users": list(recent_users),
        "top_profiles": list(top_profiles),
        "growth": _growth_series(session, now),
    }


def list_users(
    session: Session,
    *,
    page: int,
    limit: int,
    search: str | None = None,
    filter_by: UserFilter | None = None,
    sort_by: UserSort = UserSort.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> dict[str, Any]:
    statement = select(User)

    if search and search.strip():
        term = f"%{search.strip()}%"
        statement = statement.where(
            or_(
                col(User.first_name).ilike(term),
                col(User.last_name).ilike(term),
                col(User.email).ilike(term),
            )
        )

    if filter_by == UserFilter.ADMIN:
        statement = statement.where(col(User.is_admin).is_(True))
    elif filter_by == UserFilter.VERIFIED:
        statement = statement.where(col(User.email_verified).is_(True))
    elif filter_by == UserFilter.UNVERIFIED:
        statement = statement.where(col(User.email_verified).is_(False))

    if sort_by == UserSort.EMAIL:
        columns = [col(User.email)]
    elif sort_by == UserSort.NAME:
        columns = [col(User.last_name), col(User.first_name)]
    else:
        columns = [col(User.created_at)]
    if sort_order == SortOrder.DESC:
        columns = [c.desc() for c in columns]
    statement = statement.order_by(*columns, col(User.id))

    users, pagination = _paginate(session, statement, page, limit)
    return {"users": users, "pagination": pagination}


_PROFILE_SORT_COLUMNS = {
    ProfileSort.CREATED_AT: Profile.created_at,
    ProfileSort.VIEWS: Profile.profile_views,
    ProfileSort.CLICKS: Profile.link_clicks,
    ProfileSort.PAGE_NAME: Profile.page_name,
}


def list_profiles(
    session: Session,
    *,
    page: int,
    limit: int,
    search: str | None = None,
    filter_by: ProfileFilter | None = None,
    sort_by: ProfileSort = ProfileSort.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> dict[str, Any]:
    statement = select(Profile)

    if search and search.strip():
        term = f"%{search.strip()}%"
        statement = statement.where(
            or_(
                col(Profile.page_name).ilike(term),
                col(Profile.display_name).ilike(term),
                col(Profile.bio).ilike(term),
            )
        )

    if filter_by == ProfileFilter.DEFAULT:
        statement = statement.where(col(Profile.is_default).is_(True))
    elif filter_by == ProfileFilter.SECONDARY:
        statement = statement.where(col(Profile.is_default).is_(False))

    column = col(_PROFILE_SORT_COLUMNS[sort_by])
    if sort_order == SortOrder.DESC:
        column = column.desc()
    statement = statement.order_by(column, col(Profile.id))

    profiles, pagination = _paginate(session, statement, page, limit)
    return {"profiles": profiles, "pagination": pagination}


def delete_user(session: Session, admin: User, user_id: uuid.UUID) -> None:
    """Delete one user with everything they own.

    Raises:
        SelfModificationError: If the admin targets their own account
        UserNotFoundError: If the user does not exist
    """
    if user_id == admin.id:
        raise SelfModificationError("You cannot delete your own account")
    if session.get(User, user_id) is None:
        raise UserNotFoundError()
    delete_users_cascade(session, [user_id])
    logger.info("Admin deleted user %s", user_id, extra={"user_id": str(admin.id)})


def bulk_delete_users(
    session: Session, admin: User, user_ids: Sequence[uuid.UUID]
) -> int:
    """Delete several users in one transaction; unknown ids are skipped.

    Raises:
        SelfModificationError: If the admin's own id is in the set; nothing
            is deleted in that case
    """
    ids = list(dict.fromkeys(user_ids))
    if admin.id in ids:
        raise SelfModificationError("You cannot delete your own account")
    removed = delete_users_cascade(session, ids)
    logger.info("Admin bulk-deleted %d users", removed, extra={"user_id": str(admin.id)})
    return removed


def set_admin(
    session: Session, admin: User, user_id: uuid.UUID, is_admin: bool
) -> User:
    """Grant or revoke the admin flag of one user.

    Raises:
        SelfModificationError: If the admin tries to demote themselves
        UserNotFoundError: If the user does not exist
    """
    if user_id == admin.id and not is_admin:
        raise SelfModificationError("You cannot remove your own admin privileges")

    user = session.get(User, user_id)
    if user is None:
        raise UserNotFoundError()

    user.is_admin = is_admin
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(
        "Admin flag of %s set to %s", user_id, is_admin, extra={"user_id": str(admin.id)}
    )
    return user


def bulk_set_admin(
    session: Session, admin: User, user_ids: Sequence[uuid.UUID], is_admin: bool
) -> int:
    """Set the admin flag on several users with a single UPDATE.

    Raises:
        SelfModificationError: If demoting a set that contains the admin
    """
    ids = list(dict.fromkeys(user_ids))
    if not is_admin and admin.id in ids:
        raise SelfModificationError("You cannot remove your own admin privileges")

    result = session.exec(
        update(User).where(col(User.id).in_(ids)).values(is_admin=is_admin)
    )
    session.commit()
    return result.rowcount or 0


def start_impersonation(
    session: Session,
    store: SessionStore,
    record: SessionRecord,
    admin: User,
    target_id: uuid.UUID,
) -> User:
    """Switch the session's effective user to ``target_id``.

    The admin's id is kept under ``original_admin_id`` so the session can be
    restored. Only one level is allowed.

    Raises:
        ImpersonationError: If already impersonating or targeting yourself
        UserNotFoundError: If the target does not exist
    """
    if record.sess.get("original_admin_id"):
        raise ImpersonationError("Stop the current impersonation first")
    if target_id == admin.id:
        raise ImpersonationError("You cannot impersonate yourself")

    target = session.get(User, target_id)
    if target is None:
        raise UserNotFoundError()

    store.save(
        record,
        {
            **record.sess,
            "user_id": str(target.id),
            "original_admin_id": str(admin.id),
        },
    )
    logger.info("Impersonation started for %s", target.id, extra={"user_id": str(admin.id)})
    return target


def stop_impersonation(
    session: Session, store: SessionStore, record: SessionRecord
) -> User:
    """Restore the admin identity saved by start_impersonation.

    Raises:
        ImpersonationError: If the session is not impersonating
        AdminRequiredError: If the original admin is gone or was demoted;
            the session is destroyed in that case
    """
    original = record.sess.get("original_admin_id")
    if not original:
        raise ImpersonationError("Not currently impersonating")

    admin = session.get(User, uuid.UUID(str(original)))
    if admin is None or not admin.is_admin:
        store.destroy(record.sid)
        raise AdminRequiredError()

    data = {key: value for key, value in record.sess.items() if key != "original_admin_id"}
    data["user_id"] = str(admin.id)
    store.save(record, data)
    logger.info("Impersonation stopped", extra={"user_id": str(admin.id)})
    return admin


def get_system_health(session: Session) -> dict[str, Any]:
    if not database_ok(session):
        return {
            "status": "degraded",
            "database": "error",
            "users": 0,
            "profiles": 0,
            "links": 0,
            "new_users_24h": 0,
            "new_profiles_24h": 0,
            "uptime": uptime_seconds(),
        }

    since = utc_now() - timedelta(hours=24)
    return {
        "status": "ok",
        "database": "ok",
        "users": _count(session, User),
        "profiles": _count(session, Profile),
        "links": _count(session, SocialLink),
        "new_users_24h": _count(session, User, col(User.created_at) >= since),
        "new_profiles_24h": _count(session, Profile, col(Profile.created_at) >= since),
        "uptime": uptime_seconds(),
    }
