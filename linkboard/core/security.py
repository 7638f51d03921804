"""Credential helpers: password hashing, verification and one-time tokens."""

import re
import secrets

from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc

_ph = PasswordHasher()

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72
SPECIAL_CHARACTERS = "@$!%*?&"

_PASSWORD_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"[A-Z]"), "at least one uppercase letter"),
    (re.compile(r"[a-z]"), "at least one lowercase letter"),
    (re.compile(r"\d"), "at least one number"),
    (
        re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"),
        f"at least one special character ({SPECIAL_CHARACTERS})",
    ),
]


def hash_password(password: str) -> str:
    """Hash a password with Argon2id.

    Library failures propagate; a user must never be stored without a digest.
    """
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    """Return True when ``password`` matches ``stored_hash``.

    Mismatches and malformed or empty digests yield False instead of raising.
    """
    if not stored_hash:
        return False
    try:
        return _ph.verify(stored_hash, password)
    except (argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def generate_token() -> str:
    """Random single-use token: 32 bytes from the OS CSPRNG, hex encoded."""
    return secrets.token_hex(32)


def password_policy_violations(password: str, *, require_complexity: bool) -> list[str]:
    """List the password requirements ``password`` does not meet.

    Length bounds always apply; character classes only when
    ``require_complexity`` is set.
    """
    violations: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        violations.append(f"at least {PASSWORD_MIN_LENGTH} characters")
    if len(password) > PASSWORD_MAX_LENGTH:
        violations.append(f"at most {PASSWORD_MAX_LENGTH} characters")
    if require_complexity:
        for pattern, requirement in _PASSWORD_RULES:
            if not pattern.search(password):
                violations.append(requirement)
    return violations
