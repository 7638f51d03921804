"""Tests for linkboard/core/email.py - account emails and senders."""

from unittest.mock import patch

from linkboard.core import email as email_module
from linkboard.core.email import (
    APP_NAME,
    LoggingEmailSender,
    ResendEmailSender,
    send_email_verification_email,
    send_password_reset_email,
    send_welcome_email,
)


class _Recorder:
    def __init__(self):
        self.sent = []

    def send(self, *, to, subject, html):
        self.sent.append({"to": to, "subject": subject, "html": html})


def test_verification_email_links_to_client(settings):
    sender = _Recorder()

    send_email_verification_email(sender, "new@example.com", "abc123", settings)

    [message] = sender.sent
    assert message["to"] == "new@example.com"
    assert "Verify" in message["subject"]
    assert "http://localhost:3000/verify-email?token=abc123" in message["html"]
    assert f"{settings.email_verification_expires_hours} hours" in message["html"]


def test_password_reset_email_links_to_client(settings):
    sender = _Recorder()

    send_password_reset_email(sender, "user@example.com", "tok", settings)

    [message] = sender.sent
    assert "http://localhost:3000/reset-password?token=tok" in message["html"]
    assert APP_NAME in message["subject"]


def test_welcome_email_points_at_public_page(settings):
    sender = _Recorder()

    send_welcome_email(sender, "user@example.com", "Olive", "olive", settings)

    [message] = sender.sent
    assert "Hi Olive" in message["html"]
    assert "http://localhost:3000/olive" in message["html"]


def test_templates_escape_user_content(settings):
    sender = _Recorder()

    send_welcome_email(sender, "user@example.com", "<script>x</script>", "olive", settings)

    assert "<script>x</script>" not in sender.sent[0]["html"]


def test_resend_sender_builds_payload():
    sender = ResendEmailSender(api_key="re_test", from_email="noreply@linkboard.test")

    with patch.object(email_module.resend.Emails, "send") as mock_send:
        sender.send(to="user@example.com", subject="Hi", html="<p>Hi</p>")

    mock_send.assert_called_once_with(
        {
            "from": "noreply@linkboard.test",
            "to": "user@example.com",
            "subject": "Hi",
            "html": "<p>Hi</p>",
        }
    )


def test_logging_sender_does_not_raise(caplog):
    with caplog.at_level("INFO", logger="linkboard.core.email"):
        LoggingEmailSender().send(to="user@example.com", subject="Hi", html="")

    assert "user@example.com" in caplog.text
