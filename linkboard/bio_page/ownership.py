"""Ownership resolution for profile-scoped resources.

Profiles carry ``user_id`` directly; links and themes are owned by whoever
owns their profile. Every owner-only route goes through ``require_owner``
before it mutates anything.
"""

import uuid

from sqlmodel import Session

from linkboard.bio_page.exceptions import NotOwnerError, ProfileNotFoundError
from linkboard.bio_page.models import Profile
from linkboard.link.models import SocialLink
from linkboard.theme.models import Theme
from linkboard.user.models import User

OwnedEntity = Profile | SocialLink | Theme


def resolve_owner(session: Session, entity: OwnedEntity) -> uuid.UUID | None:
    """Return the id of the user owning ``entity`` (None if its profile is gone)."""
    if isinstance(entity, Profile):
        return entity.user_id
    profile = session.get(Profile, entity.profile_id)
    return profile.user_id if profile else None


def require_owner(
    session: Session,
    entity: OwnedEntity,
    user: User,
    message: str = "You do not have access to this resource",
) -> None:
    if resolve_owner(session, entity) != user.id:
        raise NotOwnerError(message)


def get_owned_profile(session: Session, profile_id: uuid.UUID, user: User) -> Profile:
    """Load a profile the caller owns.

    Raises:
        ProfileNotFoundError: If the profile does not exist
        NotOwnerError: If it belongs to someone else
    """
    profile = session.get(Profile, profile_id)
    if profile is None:
        raise ProfileNotFoundError()
    require_owner(session, profile, user, "You do not own this profile")
    return profile
