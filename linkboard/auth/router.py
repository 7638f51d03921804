"""Auth domain router.

Authentication routes for registration, login, logout, email verification
and password management. Handlers stay thin and delegate to
``linkboard.auth.service``.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response

from linkboard.auth import service
from linkboard.auth.dependencies import (
    CurrentSessionDep,
    CurrentUserDep,
    SessionStoreDep,
)
from linkboard.auth.schemas import (
    AuthMessage,
    AuthRegister,
    CurrentUserResponse,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    RegisterResponse,
    ResetPasswordRequest,
    UpdatePasswordRequest,
    VerifyEmailResponse,
)
from linkboard.auth.sessions import (
    SESSION_COOKIE_NAME,
    clear_session_cookie,
    set_session_cookie,
    unsign_session_id,
)
from linkboard.bio_page.avatar import AvatarResolverDep
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import EmailSenderDep, SessionDep, SettingsDep
from linkboard.core.rate_limit import AUTH_RATE_LIMIT, EMAIL_RATE_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST},
)

_GENERIC_RESET_MESSAGE = "If an account with that email exists, a password reset link has been sent"  # noqa: E501
_GENERIC_VERIFICATION_MESSAGE = "If an account with that email exists and is not verified, a verification email has been sent"  # noqa: E501


@router.post(
    "/register",
    response_model=RegisterResponse,
    dependencies=[Depends(AUTH_RATE_LIMIT)],
    responses={**CommonResponses.TOO_MANY_REQUESTS},
)
async def register(
    register_data: AuthRegister,
    session: SessionDep,
    settings: SettingsDep,
    email_sender: EmailSenderDep,
):
    """Register a new user.

    The account stays unverified until the emailed link is followed.
    Email format is validated by Pydantic's EmailStr before this code runs.
    """
    user = service.register_user(
        session,
        email=register_data.email,
        password=register_data.password,
        first_name=register_data.first_name,
        last_name=register_data.last_name,
        settings=settings,
        email_sender=email_sender,
    )
    return RegisterResponse(
        message="Registration successful! Please check your email to verify your account.",  # noqa: E501
        user_id=user.id,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(AUTH_RATE_LIMIT)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.TOO_MANY_REQUESTS,
    },
)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    session: SessionDep,
    store: SessionStoreDep,
    settings: SettingsDep,
):
    """Login with email/password and set the session cookie.

    Raises:
        - InvalidCredentialsError: Unknown email or wrong password
        - EmailNotVerifiedError: Correct credentials, unverified email
    """
    user = service.authenticate(session, payload.email, payload.password)

    # Never reuse a session id issued before authentication
    previous = request.cookies.get(SESSION_COOKIE_NAME)
    previous_sid = unsign_session_id(previous, settings) if previous else None
    if previous_sid:
        store.destroy(previous_sid)

    # Cookies that are never presented again would otherwise keep their rows
    store.purge_expired_if_due()
    record = store.create({"user_id": str(user.id)})
    set_session_cookie(response, record.sid, settings)
    logger.info("User logged in", extra={"user_id": str(user.id)})

    return {"message": "Login successful", "user": user}


@router.post("/logout", response_model=AuthMessage)
async def logout(
    request: Request,
    response: Response,
    store: SessionStoreDep,
    settings: SettingsDep,
):
    """Destroy the server-side session and clear the cookie."""
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    sid = unsign_session_id(cookie, settings) if cookie else None
    if sid:
        store.destroy(sid)

    # Always clear cookie on logout
    clear_session_cookie(response, settings)
    return AuthMessage(message="Logout successful")


@router.get("/verify-email", response_model=VerifyEmailResponse)
async def verify_email(
    session: SessionDep,
    settings: SettingsDep,
    email_sender: EmailSenderDep,
    avatar_resolver: AvatarResolverDep,
    token: str = Query(default=""),
):
    """Verify an email address from the emailed link.

    Creates the user's default bio page on first verification.
    """
    await service.verify_email(
        session,
        token,
        avatar_resolver=avatar_resolver,
        email_sender=email_sender,
        settings=settings,
    )
    return VerifyEmailResponse(
        message="Email verified successfully! You can now log in.",
        redirect_to="/dashboard",
    )


@router.post(
    "/forgot-password",
    response_model=AuthMessage,
    dependencies=[Depends(EMAIL_RATE_LIMIT)],
    responses={**CommonResponses.TOO_MANY_REQUESTS},
)
async def forgot_password(
    payload: EmailRequest,
    session: SessionDep,
    settings: SettingsDep,
    email_sender: EmailSenderDep,
):
    """Request a password reset email.

    Always returns the same message to prevent email enumeration.
    """
    service.request_password_reset(
        session, payload.email, settings=settings, email_sender=email_sender
    )
    return AuthMessage(message=_GENERIC_RESET_MESSAGE)


@router.post(
    "/reset-password",
    response_model=AuthMessage,
    dependencies=[Depends(AUTH_RATE_LIMIT)],
    responses={**CommonResponses.TOO_MANY_REQUESTS},
)
async def reset_password(
    payload: ResetPasswordRequest,
    session: SessionDep,
    settings: SettingsDep,
):
    """Set a new password using the token from the reset email."""
    service.reset_password(
        session, payload.token, payload.new_password, settings=settings
    )
    return AuthMessage(
        message="Password reset successful! You can now log in with your new password."
    )


@router.post(
    "/resend-verification",
    response_model=AuthMessage,
    dependencies=[Depends(EMAIL_RATE_LIMIT)],
    responses={**CommonResponses.TOO_MANY_REQUESTS},
)
async def resend_verification(
    payload: EmailRequest,
    session: SessionDep,
    settings: SettingsDep,
    email_sender: EmailSenderDep,
):
    """Send a fresh verification link.

    Always returns the same message to prevent email enumeration.
    """
    service.resend_verification(
        session, payload.email, settings=settings, email_sender=email_sender
    )
    return AuthMessage(message=_GENERIC_VERIFICATION_MESSAGE)


@router.get(
    "/user",
    response_model=CurrentUserResponse,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def get_current_user_info(
    user: CurrentUserDep, record: CurrentSessionDep, session: SessionDep
):
    """Get the current user with their default bio page."""
    return service.build_current_user_payload(
        session, user, is_impersonating=bool(record.sess.get("original_admin_id"))
    )


@router.post(
    "/update-password",
    response_model=AuthMessage,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def update_password(
    payload: UpdatePasswordRequest,
    user: CurrentUserDep,
    session: SessionDep,
    settings: SettingsDep,
):
    """Update the current user's password.

    Requires the current password for verification.
    """
    service.change_password(
        session,
        user,
        payload.current_password,
        payload.new_password,
        settings=settings,
    )
    return AuthMessage(message="Password updated successfully")
