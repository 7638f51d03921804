"""User account operations shared by self-service and admin routes."""

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import delete
from sqlmodel import Session, col, select

from linkboard.bio_page.models import Profile
from linkboard.link.models import SocialLink
from linkboard.theme.models import Theme
from linkboard.user.models import User

logger = logging.getLogger(__name__)


def delete_users_cascade(session: Session, user_ids: Sequence[uuid.UUID]) -> int:
    """Delete users with their profiles, links and themes in one transaction.

    Returns the number of user rows removed.
    """
    if not user_ids:
        return 0

    profile_ids = select(Profile.id).where(col(Profile.user_id).in_(user_ids))
    session.exec(delete(SocialLink).where(col(SocialLink.profile_id).in_(profile_ids)))
    session.exec(delete(Theme).where(col(Theme.profile_id).in_(profile_ids)))
    session.exec(delete(Profile).where(col(Profile.user_id).in_(user_ids)))
    result = session.exec(delete(User).where(col(User.id).in_(user_ids)))
    session.commit()

    removed = result.rowcount or 0
    logger.info("Deleted %d users with their pages", removed)
    return removed
