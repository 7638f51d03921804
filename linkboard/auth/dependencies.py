"""Cookie session resolution and the user/admin guards built on it."""

import uuid
from typing import Annotated

from fastapi import Depends, Request

from linkboard.auth.exceptions import AdminRequiredError, InvalidCredentialsError
from linkboard.auth.models import SessionRecord
from linkboard.auth.sessions import SESSION_COOKIE_NAME, SessionStore, unsign_session_id
from linkboard.core.deps import SessionDep, SettingsDep
from linkboard.user.models import User


def get_session_store(session: SessionDep, settings: SettingsDep) -> SessionStore:
    return SessionStore(session, ttl=settings.session_expires_in)


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_current_session(
    request: Request, store: SessionStoreDep, settings: SettingsDep
) -> SessionRecord:
    """Resolve the signed session cookie to a live session row.

    Raises:
        InvalidCredentialsError: If the cookie is missing, tampered or expired
    """
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if not cookie:
        raise InvalidCredentialsError("Not authenticated")

    sid = unsign_session_id(cookie, settings)
    if sid is None:
        raise InvalidCredentialsError("Not authenticated")

    record = store.load(sid)
    if record is None or not record.sess.get("user_id"):
        raise InvalidCredentialsError("Not authenticated")
    return record


CurrentSessionDep = Annotated[SessionRecord, Depends(get_current_session)]


def get_current_user(record: CurrentSessionDep, session: SessionDep) -> User:
    """Return the (effective) user of the current session.

    During impersonation this is the impersonated user; the admin's id is
    kept under ``original_admin_id`` in the session payload.

    Raises:
        InvalidCredentialsError: If the session points at a deleted user
    """
    try:
        user_id = uuid.UUID(str(record.sess["user_id"]))
    except ValueError:
        raise InvalidCredentialsError("Not authenticated") from None

    user = session.get(User, user_id)
    if user is None:
        raise InvalidCredentialsError("Not authenticated")
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Router-level guard for routes that do not need the user object.

    FastAPI resolves CurrentUserDep once per request, so routes that also
    take it pay nothing extra.
    """


def get_admin_user(user: CurrentUserDep) -> User:
    # Checked on every request so a demoted admin loses access immediately
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Router-level admin guard."""
