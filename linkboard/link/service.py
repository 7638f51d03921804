"""Link collection manager.

Links are always reached through their profile: the profile decides who may
change them and which counters a click increments.
"""

import logging
import uuid

from sqlalchemy import case, func, update
from sqlmodel import Session, col, select

from linkboard.bio_page.exceptions import NotOwnerError, ProfileNotFoundError
from linkboard.bio_page.models import Profile
from linkboard.bio_page.ownership import get_owned_profile, require_owner
from linkboard.bio_page.service import increment_link_clicks
from linkboard.link.exceptions import LinkNotFoundError
from linkboard.link.models import SocialLink
from linkboard.link.schemas import LinkCreate, LinkUpdate
from linkboard.user.models import User

logger = logging.getLogger(__name__)


def _ordered(statement):
    return statement.order_by(
        col(SocialLink.order), col(SocialLink.created_at), col(SocialLink.id)
    )


def list_links(
    session: Session, profile_id: uuid.UUID, *, active_only: bool = False
) -> list[SocialLink]:
    statement = select(SocialLink).where(SocialLink.profile_id == profile_id)
    if active_only:
        statement = statement.where(col(SocialLink.is_active).is_(True))
    return list(session.exec(_ordered(statement)).all())


def get_owned_link(session: Session, link_id: uuid.UUID, user: User) -> SocialLink:
    """Load a link whose profile the caller owns.

    Raises:
        LinkNotFoundError: If the link does not exist
        NotOwnerError: If its profile belongs to someone else
    """
    link = session.get(SocialLink, link_id)
    if link is None:
        raise LinkNotFoundError()
    require_owner(session, link, user, "You do not own this link")
    return link


def _next_order(session: Session, profile_id: uuid.UUID) -> int:
    current = session.exec(
        select(func.max(SocialLink.order)).where(SocialLink.profile_id == profile_id)
    ).one()
    return (current or 0) + 1


def create_link(session: Session, user: User, data: LinkCreate) -> SocialLink:
    """Append a link to one of the caller's profiles.

    Without an explicit ``order`` the link goes after the current last one.
    """
    get_owned_profile(session, data.profile_id, user)

    payload = data.model_dump()
    if payload["order"] is None:
        payload["order"] = _next_order(session, data.profile_id)

    link = SocialLink(**payload)
    session.add(link)
    session.commit()
    session.refresh(link)
    return link


def update_link(session: Session, link: SocialLink, patch: LinkUpdate) -> SocialLink:
    update_data = patch.model_dump(exclude_unset=True)
    for field in ("platform", "title", "url", "order", "is_active"):
        if update_data.get(field, 0) is None:
            update_data.pop(field)

    for key, value in update_data.items():
        setattr(link, key, value)
    session.add(link)
    session.commit()
    session.refresh(link)
    return link


def delete_link(session: Session, link: SocialLink) -> None:
    session.delete(link)
    session.commit()


def reorder_links(session: Session, user: User, link_ids: list[uuid.UUID]) -> None:
    """Assign ``order = 1..N`` following the position of each id in ``link_ids``.

    Every id is checked before anything is written: an unknown id raises
    LinkNotFoundError and a link on a profile the caller does not own raises
    NotOwnerError, leaving all orders untouched. The write itself is a single
    UPDATE, so the new order is applied entirely or not at all. Callers pass
    each id once (LinkReorderRequest rejects repeats).
    """
    rows = session.exec(
        select(SocialLink.id, Profile.user_id)
        .join(Profile, col(Profile.id) == col(SocialLink.profile_id), isouter=True)
        .where(col(SocialLink.id).in_(link_ids))
    ).all()
    owners = {link_id: owner_id for link_id, owner_id in rows}

    for link_id in link_ids:
        if link_id not in owners:
            raise LinkNotFoundError(f"Link {link_id} not found")
        if owners[link_id] != user.id:
            raise NotOwnerError("You do not own all of these links")

    positions = case(
        *[
            (col(SocialLink.id) == link_id, index)
            for index, link_id in enumerate(link_ids, start=1)
        ],
        else_=col(SocialLink.order),
    )
    session.exec(
        update(SocialLink)
        .where(col(SocialLink.id).in_(link_ids))
        .values(order=positions)
        .execution_options(synchronize_session=False)
    )
    session.commit()
    logger.info("Reordered %d links", len(link_ids), extra={"user_id": str(user.id)})


def record_click(session: Session, link_id: uuid.UUID) -> str:
    """Count a visitor click on the link and its profile; returns the target URL."""
    link = session.get(SocialLink, link_id)
    if link is None:
        raise LinkNotFoundError()

    url = link.url
    profile_id = link.profile_id
    session.exec(
        update(SocialLink)
        .where(col(SocialLink.id) == link_id)
        .values(clicks=col(SocialLink.clicks) + 1)
    )
    if not increment_link_clicks(session, profile_id):
        raise ProfileNotFoundError()
    return url
