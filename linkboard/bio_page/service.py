"""Bio page registry.

Owns page-name uniqueness and the one-default-page-per-user rule. Routes
run the ownership guard before calling the mutating functions here.
"""

import logging
import uuid

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from linkboard.bio_page.avatar import AvatarResolver, resolve_avatar
from linkboard.bio_page.exceptions import PageNameTakenError, ProfileNotFoundError
from linkboard.bio_page.models import Profile
from linkboard.bio_page.page_names import allocate_page_name, page_name_exists
from linkboard.bio_page.schemas import BioPageCreate, BioPageUpdate
from linkboard.link.models import SocialLink
from linkboard.theme.models import Theme
from linkboard.user.models import User

logger = logging.getLogger(__name__)

DEFAULT_BIO = "Welcome to my LinkBoard profile!"
# Attempts at allocating a page name when a concurrent insert takes it first.
_ALLOCATION_ATTEMPTS = 5


def list_bio_pages(session: Session, user_id: uuid.UUID) -> list[Profile]:
    statement = (
        select(Profile)
        .where(Profile.user_id == user_id)
        .order_by(col(Profile.created_at), col(Profile.id))
    )
    return list(session.exec(statement).all())


def get_default_profile(session: Session, user_id: uuid.UUID) -> Profile | None:
    statement = select(Profile).where(
        Profile.user_id == user_id, col(Profile.is_default).is_(True)
    )
    return session.exec(statement).first()


def get_profile_by_page_name(session: Session, page_name: str) -> Profile | None:
    return session.exec(select(Profile).where(Profile.page_name == page_name)).first()


def _has_default(session: Session, user_id: uuid.UUID) -> bool:
    return get_default_profile(session, user_id) is not None


def _insert_profile(session: Session, profile: Profile) -> Profile:
    """Insert ``profile``, translating unique-index races.

    A page-name collision becomes PageNameTakenError. A default-flag
    collision (two first pages created at once) is retried as a
    non-default page.
    """
    try:
        session.add(profile)
        session.commit()
    except IntegrityError:
        session.rollback()
        if page_name_exists(session, profile.page_name):
            raise PageNameTakenError() from None
        if profile.is_default and _has_default(session, profile.user_id):
            profile.is_default = False
            return _insert_profile(session, profile)
        raise
    session.refresh(profile)
    return profile


async def create_bio_page(
    session: Session,
    user: User,
    data: BioPageCreate,
    avatar_resolver: AvatarResolver,
) -> Profile:
    """Create a page for ``user``; their first page becomes the default."""
    if page_name_exists(session, data.page_name):
        raise PageNameTakenError()

    image_url = data.profile_image_url
    if not image_url:
        image_url = await resolve_avatar(avatar_resolver, user.email)

    profile = Profile(
        user_id=user.id,
        page_name=data.page_name,
        display_name=data.display_name,
        bio=data.bio,
        profile_image_url=image_url,
        is_default=not _has_default(session, user.id),
    )
    return _insert_profile(session, profile)


def default_display_name(user: User) -> str:
    return user.full_name or user.email.split("@", 1)[0]


async def create_default_bio_page(
    session: Session, user: User, avatar_resolver: AvatarResolver
) -> Profile:
    """Create the first page for a newly verified account.

    The page name comes from the email address; allocation is retried when
    a concurrent signup claims the same name between probe and insert.
    """
    image_url = user.profile_image_url or await resolve_avatar(
        avatar_resolver, user.email
    )

    for attempt in range(_ALLOCATION_ATTEMPTS):
        profile = Profile(
            user_id=user.id,
            page_name=allocate_page_name(session, user.email, user.id),
            display_name=default_display_name(user),
            bio=DEFAULT_BIO,
            profile_image_url=image_url,
            is_default=not _has_default(session, user.id),
        )
        try:
            return _insert_profile(session, profile)
        except PageNameTakenError:
            logger.info(
                "Page name %s claimed concurrently (attempt %d)",
                profile.page_name,
                attempt + 1,
            )
    raise PageNameTakenError("Could not allocate a page name, please try again")


def update_bio_page(session: Session, profile: Profile, patch: BioPageUpdate) -> Profile:
    """Apply a partial update to a page the caller already owns."""
    update_data = patch.model_dump(exclude_unset=True)

    new_name = update_data.get("page_name")
    if new_name is None:
        update_data.pop("page_name", None)
    elif new_name != profile.page_name and page_name_exists(
        session, new_name, exclude_profile_id=profile.id
    ):
        raise PageNameTakenError()

    for field in ("display_name", "bio"):
        if update_data.get(field, "") is None:
            update_data.pop(field)

    for key, value in update_data.items():
        setattr(profile, key, value)

    try:
        session.add(profile)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise PageNameTakenError() from None
    session.refresh(profile)
    return profile


def delete_bio_page(session: Session, profile_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    """Delete a page with its links and themes.

    Returns False when the page does not exist or belongs to someone else.
    If the default page is deleted, the owner's oldest remaining page is
    promoted in the same transaction.
    """
    profile = session.get(Profile, profile_id)
    if profile is None or profile.user_id != user_id:
        return False

    was_default = profile.is_default
    session.exec(delete(SocialLink).where(col(SocialLink.profile_id) == profile_id))
    session.exec(delete(Theme).where(col(Theme.profile_id) == profile_id))
    session.delete(profile)
    session.flush()

    if was_default:
        replacement = session.exec(
            select(Profile)
            .where(Profile.user_id == user_id)
            .order_by(col(Profile.created_at), col(Profile.id))
        ).first()
        if replacement is not None:
            replacement.is_default = True
            session.add(replacement)

    session.commit()
    return True


def set_default_bio_page(
    session: Session, profile_id: uuid.UUID, user_id: uuid.UUID
) -> Profile:
    """Make ``profile_id`` the user's only default page.

    Runs as one transaction holding row locks on the user's pages (where the
    database supports them), so concurrent calls serialize and the user
    never ends up with zero or two defaults.

    Raises:
        ProfileNotFoundError: If the page does not belong to ``user_id``
    """
    session.exec(
        select(Profile.id).where(Profile.user_id == user_id).with_for_update()
    ).all()
    session.exec(
        update(Profile)
        .where(col(Profile.user_id) == user_id)
        .values(is_default=False)
    )
    result = session.exec(
        update(Profile)
        .where(col(Profile.id) == profile_id, col(Profile.user_id) == user_id)
        .values(is_default=True)
    )
    if result.rowcount == 0:
        session.rollback()
        raise ProfileNotFoundError()

    session.commit()
    profile = session.get(Profile, profile_id)
    if profile is None:
        raise ProfileNotFoundError()
    session.refresh(profile)
    return profile


def increment_profile_views(session: Session, profile_id: uuid.UUID) -> bool:
    """Atomically add one view; False when the page does not exist."""
    result = session.exec(
        update(Profile)
        .where(col(Profile.id) == profile_id)
        .values(profile_views=col(Profile.profile_views) + 1)
    )
    session.commit()
    return result.rowcount > 0


def increment_link_clicks(session: Session, profile_id: uuid.UUID) -> bool:
    """Atomically add one click to the page-level counter."""
    result = session.exec(
        update(Profile)
        .where(col(Profile.id) == profile_id)
        .values(link_clicks=col(Profile.link_clicks) + 1)
    )
    session.commit()
    return result.rowcount > 0
