"""Outbound email: templates, senders and the account emails we send.

Delivery goes through Resend when ``RESEND_API_KEY`` is configured. Without a
key the logging sender records what would have been sent, which keeps local
development and tests free of network calls.
"""

import logging
from functools import lru_cache
from typing import Protocol
from urllib.parse import urlencode

import resend

from linkboard.core.constants import email_templates
from linkboard.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)

APP_NAME = "LinkBoard"


def _render_template(template_name: str, **context: str) -> str:
    """Render an email template.

    Args:
        template_name: Name of the template file
        **context: Template variables

    Returns:
        Rendered HTML
    """
    template = email_templates.get_template(template_name)
    return template.render(app_name=APP_NAME, **context)


class EmailSender(Protocol):
    """Protocol for email delivery backends."""

    def send(self, *, to: str, subject: str, html: str) -> None: ...


class ResendEmailSender:
    """Deliver email through the Resend API."""

    def __init__(self, api_key: str, from_email: str) -> None:
        resend.api_key = api_key
        self.from_email = from_email

    def send(self, *, to: str, subject: str, html: str) -> None:
        resend.Emails.send(
            {
                "from": self.from_email,
                "to": to,
                "subject": subject,
                "html": html,
            }
        )


class LoggingEmailSender:
    """Stand-in sender used when no email provider is configured."""

    def send(self, *, to: str, subject: str, html: str) -> None:
        logger.info("Email not sent (no provider configured): %r to %s", subject, to)


@lru_cache
def get_email_sender() -> EmailSender:
    """Get the configured email sender (cached)."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set; outgoing email will only be logged")
        return LoggingEmailSender()
    return ResendEmailSender(
        api_key=settings.resend_api_key,
        from_email=f"noreply@{settings.app_domain}",
    )


def _client_link(settings: Settings, path: str, **params: str) -> str:
    base = settings.client_url
    query = f"?{urlencode(params)}" if params else ""
    return f"{base}{path}{query}"


def send_email_verification_email(
    sender: EmailSender, to_email: str, token: str, settings: Settings | None = None
) -> None:
    """Send the email address verification link."""
    settings = settings or get_settings()
    verification_url = _client_link(settings, "/verify-email", token=token)
    html_content = _render_template(
        "email-verification.html",
        verification_url=verification_url,
        expires_hours=str(settings.email_verification_expires_hours),
    )
    sender.send(
        to=to_email,
        subject=f"{APP_NAME} - Verify Your Email",
        html=html_content,
    )


def send_password_reset_email(
    sender: EmailSender, to_email: str, token: str, settings: Settings | None = None
) -> None:
    """Send the single-use password reset link."""
    settings = settings or get_settings()
    reset_url = _client_link(settings, "/reset-password", token=token)
    html_content = _render_template(
        "password-reset.html",
        reset_url=reset_url,
        expires_minutes=str(settings.password_reset_expires_minutes),
    )
    sender.send(
        to=to_email,
        subject=f"{APP_NAME} - Reset Your Password",
        html=html_content,
    )


def send_welcome_email(
    sender: EmailSender,
    to_email: str,
    display_name: str,
    page_name: str,
    settings: Settings | None = None,
) -> None:
    """Send the welcome email once the first bio page exists."""
    settings = settings or get_settings()
    html_content = _render_template(
        "welcome.html",
        display_name=display_name,
        page_url=_client_link(settings, f"/{page_name}"),
        dashboard_url=_client_link(settings, "/dashboard"),
    )
    sender.send(
        to=to_email,
        subject=f"Welcome to {APP_NAME}!",
        html=html_content,
    )
