"""Tests for linkboard/auth/dependencies.py."""

from datetime import timedelta

import pytest
from sqlmodel import Session

from linkboard.auth.dependencies import (
    get_admin_user,
    get_current_session,
    get_current_user,
)
from linkboard.auth.exceptions import AdminRequiredError, InvalidCredentialsError
from linkboard.auth.sessions import SESSION_COOKIE_NAME, SessionStore, sign_session_id


class _CookieRequest:
    def __init__(self, cookies: dict[str, str]):
        self.cookies = cookies


@pytest.fixture(name="store")
def store_fixture(session: Session) -> SessionStore:
    return SessionStore(session, ttl=timedelta(days=1))


def _request_for(sid: str, settings) -> _CookieRequest:
    return _CookieRequest({SESSION_COOKIE_NAME: sign_session_id(sid, settings)})


def test_missing_cookie(store: SessionStore, settings):
    with pytest.raises(InvalidCredentialsError):
        get_current_session(_CookieRequest({}), store, settings)


def test_unsigned_cookie(store: SessionStore, settings):
    record = store.create({"user_id": "abc"})

    with pytest.raises(InvalidCredentialsError):
        get_current_session(
            _CookieRequest({SESSION_COOKIE_NAME: record.sid}), store, settings
        )


def test_session_without_user(store: SessionStore, settings):
    record = store.create({})

    with pytest.raises(InvalidCredentialsError):
        get_current_session(_request_for(record.sid, settings), store, settings)


def test_resolves_user(store: SessionStore, settings, session: Session, owner):
    record = store.create({"user_id": str(owner.id)})

    resolved = get_current_session(_request_for(record.sid, settings), store, settings)

    assert get_current_user(resolved, session).id == owner.id


def test_malformed_user_id(store: SessionStore, session: Session):
    record = store.create({"user_id": "not-a-uuid"})

    with pytest.raises(InvalidCredentialsError):
        get_current_user(record, session)


def test_admin_guard(owner, admin_user):
    assert get_admin_user(admin_user) is admin_user
    with pytest.raises(AdminRequiredError):
        get_admin_user(owner)
