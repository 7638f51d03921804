import inspect
import os
from collections.abc import Callable

# Settings are read when the app modules are imported.
os.environ.setdefault("ENV_NAME", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-key")
os.environ.setdefault("GRAVATAR_ENABLED", "false")

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import linkboard.models  # noqa: E402, F401
from linkboard.bio_page.avatar import NullAvatarResolver, get_avatar_resolver  # noqa: E402
from linkboard.bio_page.models import Profile  # noqa: E402
from linkboard.core.email import get_email_sender  # noqa: E402
from linkboard.core.rate_limit import limiter  # noqa: E402
from linkboard.core.security import hash_password  # noqa: E402
from linkboard.core.settings import Settings, get_settings  # noqa: E402
from linkboard.db.engine import get_session  # noqa: E402
from linkboard.main import app  # noqa: E402
from linkboard.user.models import User  # noqa: E402

TEST_PASSWORD = "correct-horse-1"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


class RecordingEmailSender:
    """Email sender that keeps messages in memory."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []

    def send(self, *, to: str, subject: str, html: str) -> None:
        self.sent.append({"to": to, "subject": subject, "html": html})


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite database shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return Settings(
        ENV_NAME="test",
        DATABASE_URL="sqlite://",
        SESSION_SECRET_KEY="test-secret-key",
        CLIENT_URL="http://localhost:3000",
        RATE_LIMIT_ENABLED=True,
        GRAVATAR_ENABLED=False,
    )


@pytest.fixture(name="email_sender")
def email_sender_fixture() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session) -> Callable[..., User]:
    """Factory for users; verified with TEST_PASSWORD unless told otherwise."""

    def _make_user(
        email: str,
        *,
        password: str | None = TEST_PASSWORD,
        verified: bool = True,
        is_admin: bool = False,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password) if password else None,
            email_verified=verified,
            is_admin=is_admin,
            first_name=first_name,
            last_name=last_name,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture(name="make_profile")
def make_profile_fixture(session: Session) -> Callable[..., Profile]:
    def _make_profile(
        user: User, page_name: str, *, is_default: bool = False, **fields
    ) -> Profile:
        profile = Profile(
            user_id=user.id,
            page_name=page_name,
            display_name=fields.pop("display_name", page_name.title()),
            bio=fields.pop("bio", "Hello there"),
            is_default=is_default,
            **fields,
        )
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    return _make_profile


@pytest.fixture(name="owner")
def owner_fixture(make_user) -> User:
    return make_user("owner@example.com", first_name="Olive", last_name="Owner")


@pytest.fixture(name="other_user")
def other_user_fixture(make_user) -> User:
    return make_user("other@example.com", first_name="Otto")


@pytest.fixture(name="admin_user")
def admin_user_fixture(make_user) -> User:
    return make_user("admin@example.com", is_admin=True, first_name="Ada")


@pytest.fixture(name="owner_profile")
def owner_profile_fixture(make_profile, owner: User) -> Profile:
    return make_profile(owner, "olive", is_default=True, display_name="Olive")


@pytest.fixture(name="client_factory")
def client_factory_fixture(
    session: Session, settings: Settings, email_sender: RecordingEmailSender
):
    """Build TestClients sharing the test database and fakes."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_avatar_resolver] = NullAvatarResolver

    def _client(user: User | None = None, password: str = TEST_PASSWORD) -> TestClient:
        client = TestClient(app)
        if user is not None:
            response = client.post(
                "/api/auth/login", json={"email": user.email, "password": password}
            )
            assert response.status_code == 200, response.text
            # Logins count against the auth rate limit; tests start fresh.
            limiter.reset()
        return client

    yield _client

    app.dependency_overrides.clear()


@pytest.fixture(name="client")
def client_fixture(client_factory) -> TestClient:
    """Anonymous client."""
    return client_factory()


@pytest.fixture(name="owner_client")
def owner_client_fixture(client_factory, owner: User) -> TestClient:
    return client_factory(owner)


@pytest.fixture(name="other_client")
def other_client_fixture(client_factory, other_user: User) -> TestClient:
    return client_factory(other_user)


@pytest.fixture(name="admin_client")
def admin_client_fixture(client_factory, admin_user: User) -> TestClient:
    return client_factory(admin_user)


@pytest.fixture(name="password")
def password_fixture() -> str:
    """Password of every user built by ``make_user``."""
    return TEST_PASSWORD
