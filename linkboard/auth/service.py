"""Account lifecycle: registration, login, verification and password reset.

Email dispatch is best-effort everywhere in this module: a delivery failure
is logged and never fails the request that triggered it.
"""

import logging
from collections.abc import Callable

from sqlmodel import Session, select

from linkboard.auth.exceptions import (
    EmailNotVerifiedError,
    EmailVerificationError,
    InvalidCredentialsError,
    PasswordPolicyError,
    PasswordResetError,
)
from linkboard.bio_page.avatar import AvatarResolver
from linkboard.bio_page.models import Profile
from linkboard.bio_page.service import create_default_bio_page, get_default_profile
from linkboard.core.email import (
    EmailSender,
    send_email_verification_email,
    send_password_reset_email,
    send_welcome_email,
)
from linkboard.core.exceptions import BadRequestError
from linkboard.core.mixins import ensure_utc, utc_now
from linkboard.core.security import (
    generate_token,
    hash_password,
    password_policy_violations,
    verify_password,
)
from linkboard.core.settings import Settings
from linkboard.user.exceptions import EmailExistsError
from linkboard.user.models import User

logger = logging.getLogger(__name__)


def _best_effort(action: str, send: Callable[[], None]) -> None:
    try:
        send()
    except Exception as e:
        # Log for monitoring, but suppress so the account operation still succeeds
        logger.warning("%s email failed: %s", action, e, exc_info=True)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.exec(select(User).where(User.email == normalize_email(email))).first()


def check_password_policy(password: str, settings: Settings) -> None:
    violations = password_policy_violations(
        password, require_complexity=settings.password_require_complexity
    )
    if violations:
        raise PasswordPolicyError(requirements=violations)


def register_user(
    session: Session,
    *,
    email: str,
    password: str,
    first_name: str | None,
    last_name: str | None,
    settings: Settings,
    email_sender: EmailSender,
) -> User:
    """Create an unverified account and send its verification link.

    Raises:
        EmailExistsError: If the email is already registered
        PasswordPolicyError: If the password is out of policy
    """
    check_password_policy(password, settings)
    if get_user_by_email(session, email) is not None:
        raise EmailExistsError()

    token = generate_token()
    user = User(
        email=normalize_email(email),
        password_hash=hash_password(password),
        first_name=first_name or None,
        last_name=last_name or None,
        email_verified=False,
        email_verification_token=token,
        email_verification_expires=utc_now() + settings.email_verification_expires_in,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("User registered", extra={"user_id": str(user.id)})

    _best_effort(
        "Verification",
        lambda: send_email_verification_email(email_sender, user.email, token, settings),
    )
    return user


def authenticate(session: Session, email: str, password: str) -> User:
    """Check credentials for login.

    Unknown email, missing password and wrong password all produce the same
    InvalidCredentialsError so responses do not reveal which accounts exist.

    Raises:
        InvalidCredentialsError: On any credential mismatch
        EmailNotVerifiedError: If the credentials match an unverified account
    """
    user = get_user_by_email(session, email)
    if user is None or not user.password_hash:
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    if not user.email_verified:
        raise EmailNotVerifiedError()
    return user


async def verify_email(
    session: Session,
    token: str,
    *,
    avatar_resolver: AvatarResolver,
    email_sender: EmailSender,
    settings: Settings,
) -> User:
    """Consume a verification token.

    The default bio page is created before the token is cleared, so if page
    creation fails the same link can be used again.

    Raises:
        EmailVerificationError: If the token is unknown or expired
    """
    if not token:
        raise EmailVerificationError("Verification token is required")

    user = session.exec(
        select(User).where(User.email_verification_token == token)
    ).first()
    if user is None or user.email_verification_expires is None:
        raise EmailVerificationError()
    if ensure_utc(user.email_verification_expires) <= utc_now():
        raise EmailVerificationError()

    profile = get_default_profile(session, user.id)
    created_profile = profile is None
    if profile is None:
        profile = await create_default_bio_page(session, user, avatar_resolver)

    user.email_verified = True
    user.email_verification_token = None
    user.email_verification_expires = None
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Email verified", extra={"user_id": str(user.id)})

    if created_profile:
        page_name = profile.page_name
        display_name = profile.display_name
        _best_effort(
            "Welcome",
            lambda: send_welcome_email(
                email_sender, user.email, display_name, page_name, settings
            ),
        )
    return user


def request_password_reset(
    session: Session, email: str, *, settings: Settings, email_sender: EmailSender
) -> None:
    """Issue a reset token and email it; silently does nothing for unknown emails."""
    user = get_user_by_email(session, email)
    if user is None:
        logger.info("Password reset requested for unknown email")
        return

    token = generate_token()
    user.password_reset_token = token
    user.password_reset_expires = utc_now() + settings.password_reset_expires_in
    session.add(user)
    session.commit()

    recipient = user.email
    _best_effort(
        "Password reset",
        lambda: send_password_reset_email(email_sender, recipient, token, settings),
    )


def reset_password(
    session: Session, token: str, new_password: str, *, settings: Settings
) -> User:
    """Set a new password using a reset token; the token is single-use.

    Raises:
        PasswordResetError: If the token is unknown or expired
        PasswordPolicyError: If the new password is out of policy
    """
    user = session.exec(select(User).where(User.password_reset_token == token)).first()
    if user is None or user.password_reset_expires is None:
        raise PasswordResetError()
    if ensure_utc(user.password_reset_expires) <= utc_now():
        raise PasswordResetError()

    check_password_policy(new_password, settings)

    user.password_hash = hash_password(new_password)
    user.password_reset_token = None
    user.password_reset_expires = None
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Password reset completed", extra={"user_id": str(user.id)})
    return user


def resend_verification(
    session: Session, email: str, *, settings: Settings, email_sender: EmailSender
) -> None:
    """Rotate and resend the verification link.

    Unknown and already-verified emails are ignored without side effects.
    """
    user = get_user_by_email(session, email)
    if user is None or user.email_verified:
        return

    token = generate_token()
    user.email_verification_token = token
    user.email_verification_expires = utc_now() + settings.email_verification_expires_in
    session.add(user)
    session.commit()

    recipient = user.email
    _best_effort(
        "Verification",
        lambda: send_email_verification_email(email_sender, recipient, token, settings),
    )


def change_password(
    session: Session,
    user: User,
    current_password: str,
    new_password: str,
    *,
    settings: Settings,
) -> None:
    """Change the password of a logged-in user after re-checking the current one."""
    if not verify_password(current_password, user.password_hash):
        raise BadRequestError("Current password is incorrect")
    check_password_policy(new_password, settings)

    user.password_hash = hash_password(new_password)
    session.add(user)
    session.commit()


def upsert_user(
    session: Session,
    *,
    email: str,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_image_url: str | None = None,
    password: str | None = None,
    is_admin: bool | None = None,
) -> User:
    """Create or update a user keyed by email.

    Used for accounts provisioned outside the signup flow (external identity,
    admin bootstrap). Provisioned accounts are treated as verified.
    """
    user = get_user_by_email(session, email)
    if user is None:
        user = User(email=normalize_email(email), email_verified=True)

    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name
    if profile_image_url is not None:
        user.profile_image_url = profile_image_url
    if password is not None:
        user.password_hash = hash_password(password)
    if is_admin is not None:
        user.is_admin = is_admin

    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def build_current_user_payload(
    session: Session, user: User, *, is_impersonating: bool
) -> dict[str, object]:
    profile: Profile | None = get_default_profile(session, user.id)
    return {"user": user, "profile": profile, "is_impersonating": is_impersonating}
