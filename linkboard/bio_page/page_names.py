"""Page name derivation and allocation.

New accounts get a page named after the local part of their email
(``Alice.Smith@x.io`` -> ``alicesmith``); collisions get a numeric suffix
(``alicesmith1``, ``alicesmith2``, ...).
"""

import re
import uuid

from sqlmodel import Session, select

from linkboard.bio_page.models import Profile

PAGE_NAME_MAX_LENGTH = 50
# Leaves room for the collision counter within the column width.
BASE_NAME_MAX_LENGTH = 40

_INVALID_CHARACTERS = re.compile(r"[^a-z0-9_-]")


def derive_base_page_name(email: str) -> str:
    """Lowercased email local part with unsupported characters removed.

    May return an empty string (e.g. ``"...@x.io"``).
    """
    local_part = email.split("@", 1)[0].lower()
    return _INVALID_CHARACTERS.sub("", local_part)[:BASE_NAME_MAX_LENGTH]


def fallback_page_name(user_id: uuid.UUID) -> str:
    return f"user{str(user_id)[-8:]}"


def page_name_exists(
    session: Session, page_name: str, exclude_profile_id: uuid.UUID | None = None
) -> bool:
    statement = select(Profile.id).where(Profile.page_name == page_name)
    if exclude_profile_id is not None:
        statement = statement.where(Profile.id != exclude_profile_id)
    return session.exec(statement).first() is not None


def allocate_page_name(session: Session, email: str, user_id: uuid.UUID) -> str:
    """Return the first free page name for a new account.

    The probe is advisory; the unique index on ``profiles.page_name`` is what
    guarantees uniqueness, so callers retry on IntegrityError.
    """
    base = derive_base_page_name(email) or fallback_page_name(user_id)
    candidate = base
    counter = 1
    while page_name_exists(session, candidate):
        candidate = f"{base}{counter}"
        counter += 1
    return candidate
