import uuid
from collections.abc import Callable

from sqladmin.authentication import AuthenticationBackend
from sqlmodel import Session
from starlette.requests import Request

from linkboard.auth.service import get_user_by_email
from linkboard.core.security import verify_password
from linkboard.core.settings import get_settings
from linkboard.db.engine import engine
from linkboard.user.models import User


def _default_session_factory() -> Session:
    return Session(engine)


class AdminAuth(AuthenticationBackend):
    """SQLAdmin auth against admin accounts in the users table.

    The panel keeps its own Starlette session (cookie ``session``), separate
    from the API's ``sid`` cookie. Admin status is re-checked on every
    request so a demoted admin loses panel access immediately.
    """

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        # SQLAdmin signs its session cookie with this secret.
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)
        self.session_factory = session_factory or _default_session_factory

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username", form.get("email", ""))).strip()
        password = str(form.get("password", ""))

        with self.session_factory() as session:
            user = get_user_by_email(session, email)
            ok = (
                user is not None
                and user.is_admin
                and verify_password(password, user.password_hash or "")
            )
            if ok:
                request.session["admin_user_id"] = str(user.id)
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        user_id = request.session.get("admin_user_id")
        if not user_id:
            return False
        try:
            key = uuid.UUID(str(user_id))
        except ValueError:
            return False

        with self.session_factory() as session:
            user = session.get(User, key)
            return user is not None and user.is_admin
