"""Theme store.

A profile may keep several saved themes; at most one is active. Profiles
without an active theme render with the first preset.
"""

import logging
import uuid

from sqlalchemy import update
from sqlmodel import Session, col, select

from linkboard.bio_page.ownership import get_owned_profile, require_owner
from linkboard.theme.exceptions import ThemeNotFoundError
from linkboard.theme.models import Theme
from linkboard.theme.presets import default_preset
from linkboard.theme.schemas import ThemeCreate, ThemeRead, ThemeUpdate
from linkboard.user.models import User

logger = logging.getLogger(__name__)


def list_themes(session: Session, profile_id: uuid.UUID) -> list[Theme]:
    statement = (
        select(Theme)
        .where(Theme.profile_id == profile_id)
        .order_by(col(Theme.created_at), col(Theme.id))
    )
    return list(session.exec(statement).all())


def get_active_theme(session: Session, profile_id: uuid.UUID) -> ThemeRead:
    """Return the profile's active theme, or the default preset.

    The preset fallback is synthesized on each call and never written to
    the database; it is flagged with ``is_preset``.
    """
    theme = session.exec(
        select(Theme).where(
            Theme.profile_id == profile_id, col(Theme.is_active).is_(True)
        )
    ).first()
    if theme is not None:
        return ThemeRead.model_validate(theme)

    preset = default_preset()
    return ThemeRead(
        id=uuid.uuid4(),
        profile_id=profile_id,
        name=preset.name,
        is_active=False,
        is_preset=True,
        colors=preset.colors,
        gradients=preset.gradients,
        fonts=preset.fonts,
        layout=preset.layout,
    )


def get_owned_theme(session: Session, theme_id: uuid.UUID, user: User) -> Theme:
    theme = session.get(Theme, theme_id)
    if theme is None:
        raise ThemeNotFoundError()
    require_owner(session, theme, user, "You do not own this theme")
    return theme


def create_theme(session: Session, user: User, data: ThemeCreate) -> Theme:
    """Save a new, inactive theme on one of the caller's profiles."""
    get_owned_profile(session, data.profile_id, user)

    theme = Theme(
        profile_id=data.profile_id,
        name=data.name,
        is_active=False,
        colors=data.colors.model_dump(mode="json"),
        gradients=data.gradients.model_dump(mode="json"),
        fonts=data.fonts.model_dump(mode="json"),
        layout=data.layout.model_dump(mode="json"),
    )
    session.add(theme)
    session.commit()
    session.refresh(theme)
    return theme


def update_theme(session: Session, theme: Theme, patch: ThemeUpdate) -> Theme:
    if patch.name is not None:
        theme.name = patch.name
    # Sub-documents are replaced whole; reassignment marks the JSON column dirty.
    for field in ("colors", "gradients", "fonts", "layout"):
        value = getattr(patch, field)
        if value is not None:
            setattr(theme, field, value.model_dump(mode="json"))

    session.add(theme)
    session.commit()
    session.refresh(theme)
    return theme


def delete_theme(session: Session, theme: Theme) -> None:
    session.delete(theme)
    session.commit()


def activate_theme(session: Session, theme_id: uuid.UUID, profile_id: uuid.UUID) -> None:
    """Make ``theme_id`` the only active theme of ``profile_id``.

    Both steps run in one transaction. If the theme does not belong to the
    profile, the profile is left with no active theme.
    """
    session.exec(
        select(Theme.id).where(Theme.profile_id == profile_id).with_for_update()
    ).all()
    session.exec(
        update(Theme)
        .where(col(Theme.profile_id) == profile_id)
        .values(is_active=False)
    )
    result = session.exec(
        update(Theme)
        .where(col(Theme.id) == theme_id, col(Theme.profile_id) == profile_id)
        .values(is_active=True)
    )
    session.commit()
    if result.rowcount == 0:
        logger.warning(
            "Theme %s does not belong to profile; no theme is active",
            theme_id,
            extra={"profile_id": str(profile_id)},
        )
