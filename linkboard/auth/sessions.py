"""Server-side session store and session cookie helpers.

Sessions are rows in the ``sessions`` table keyed by an opaque id. The
browser receives the id signed with ``SESSION_SECRET_KEY`` (itsdangerous),
so a forged or tampered cookie never reaches the database lookup.

Expiry is sliding: every authenticated request pushes ``expire`` forward,
throttled so a burst of requests does not turn into a burst of writes.
"""

import logging
import secrets
import threading
import time
from datetime import timedelta
from typing import Any

from fastapi import Response
from itsdangerous import BadSignature, Signer
from sqlalchemy import delete
from sqlmodel import Session

from linkboard.auth.models import SessionRecord
from linkboard.core.mixins import ensure_utc, utc_now
from linkboard.core.settings import Settings

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "sid"
_SIGNER_SALT = "linkboard.session"
_TOUCH_INTERVAL = timedelta(minutes=1)

# Sweeps of abandoned sessions run at most this often per process.
PURGE_INTERVAL_SECONDS = 10 * 60
_last_purge_at: float | None = None
_purge_lock = threading.Lock()


class SessionStore:
    """CRUD over session rows bound to one database session."""

    def __init__(self, session: Session, ttl: timedelta) -> None:
        self.session = session
        self.ttl = ttl

    def create(self, data: dict[str, Any]) -> SessionRecord:
        record = SessionRecord(
            sid=secrets.token_urlsafe(32),
            sess=dict(data),
            expire=utc_now() + self.ttl,
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def load(self, sid: str) -> SessionRecord | None:
        """Return the live session for ``sid``.

        Expired rows are deleted and reported as absent.
        """
        record = self.session.get(SessionRecord, sid)
        if record is None:
            return None

        now = utc_now()
        expire = ensure_utc(record.expire)
        if expire <= now:
            self.session.delete(record)
            self.session.commit()
            return None

        if (now + self.ttl) - expire >= _TOUCH_INTERVAL:
            record.expire = now + self.ttl
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record

    def save(self, record: SessionRecord, data: dict[str, Any]) -> SessionRecord:
        # Reassign so the JSON column is flagged as modified.
        record.sess = dict(data)
        record.expire = utc_now() + self.ttl
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def destroy(self, sid: str) -> None:
        record = self.session.get(SessionRecord, sid)
        if record is not None:
            self.session.delete(record)
            self.session.commit()

    def purge_expired(self) -> int:
        """Delete every expired row; returns the number removed."""
        # Naive and aware datetimes cannot be compared in Python, so skip the
        # in-memory sync; the commit below expires loaded rows anyway.
        result = self.session.exec(
            delete(SessionRecord)
            .where(SessionRecord.expire <= utc_now())  # type: ignore[arg-type]
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        removed = result.rowcount or 0
        if removed:
            logger.info("Purged %d expired sessions", removed)
        return removed

    def purge_expired_if_due(self) -> int:
        """Run purge_expired unless another sweep ran in the last interval."""
        global _last_purge_at
        now = time.monotonic()
        with _purge_lock:
            if _last_purge_at is not None and now - _last_purge_at < PURGE_INTERVAL_SECONDS:
                return 0
            _last_purge_at = now
        return self.purge_expired()


def _signer(settings: Settings) -> Signer:
    return Signer(settings.session_secret_key, salt=_SIGNER_SALT)


def sign_session_id(sid: str, settings: Settings) -> str:
    return _signer(settings).sign(sid).decode()


def unsign_session_id(cookie_value: str, settings: Settings) -> str | None:
    """Return the session id from a cookie value, or None if tampered."""
    try:
        return _signer(settings).unsign(cookie_value).decode()
    except BadSignature:
        return None


def set_session_cookie(response: Response, sid: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=sign_session_id(sid, settings),
        max_age=int(settings.session_expires_in.total_seconds()),
        httponly=True,
        secure=settings.is_secure_cookie,
        samesite="lax",
        domain=settings.cookie_domain,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_secure_cookie,
        samesite="lax",
        domain=settings.cookie_domain,
    )
