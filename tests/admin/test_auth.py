"""Tests for the SQLAdmin login backend."""

import pytest
from sqlmodel import Session

from linkboard.admin.auth import AdminAuth


class _FakeRequest:
    def __init__(self, form: dict[str, str] | None = None, session: dict | None = None):
        self._form = form or {}
        self.session = session if session is not None else {}

    async def form(self) -> dict[str, str]:
        return self._form


@pytest.fixture(name="backend")
def backend_fixture(engine) -> AdminAuth:
    return AdminAuth(session_factory=lambda: Session(engine))


@pytest.mark.asyncio
async def test_admin_can_log_in(backend: AdminAuth, admin_user, password: str):
    request = _FakeRequest({"username": "ADMIN@example.com", "password": password})

    assert await backend.login(request) is True
    assert request.session["admin_user_id"] == str(admin_user.id)
    assert await backend.authenticate(request) is True


@pytest.mark.asyncio
async def test_wrong_password_is_rejected(backend: AdminAuth, admin_user):
    request = _FakeRequest({"username": admin_user.email, "password": "wrong-one"})

    assert await backend.login(request) is False
    assert "admin_user_id" not in request.session


@pytest.mark.asyncio
async def test_regular_user_cannot_log_in(backend: AdminAuth, owner, password: str):
    request = _FakeRequest({"username": owner.email, "password": password})

    assert await backend.login(request) is False


@pytest.mark.asyncio
async def test_demoted_admin_loses_access(
    backend: AdminAuth, admin_user, session: Session
):
    request = _FakeRequest(session={"admin_user_id": str(admin_user.id)})
    assert await backend.authenticate(request) is True

    admin_user.is_admin = False
    session.add(admin_user)
    session.commit()

    assert await backend.authenticate(request) is False


@pytest.mark.asyncio
async def test_authenticate_without_session(backend: AdminAuth):
    assert await backend.authenticate(_FakeRequest()) is False
    assert await backend.authenticate(_FakeRequest(session={"admin_user_id": "junk"})) is False


@pytest.mark.asyncio
async def test_logout_clears_session(backend: AdminAuth):
    request = _FakeRequest(session={"admin_user_id": "x"})

    assert await backend.logout(request) is True
    assert request.session == {}
