"""Public per-profile counters."""

import uuid

from fastapi import APIRouter

from linkboard.analytics.schemas import AnalyticsResponse, LinkCounters, ProfileCounters
from linkboard.bio_page.exceptions import ProfileNotFoundError
from linkboard.bio_page.models import Profile
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import SessionDep
from linkboard.link.service import list_links

router = APIRouter(
    prefix=Routes.ANALYTICS.prefix,
    tags=[Routes.ANALYTICS.tag],
    responses={**CommonResponses.NOT_FOUND},
)


@router.get("/{profile_id}", response_model=AnalyticsResponse)
async def get_profile_analytics(profile_id: uuid.UUID, session: SessionDep):
    """View and click counters for a profile and each of its links."""
    profile = session.get(Profile, profile_id)
    if profile is None:
        raise ProfileNotFoundError()

    links = list_links(session, profile_id)
    return AnalyticsResponse(
        profile=ProfileCounters(
            views=profile.profile_views, total_clicks=profile.link_clicks
        ),
        links=[
            LinkCounters(
                id=link.id,
                title=link.title,
                platform=link.platform,
                clicks=link.clicks,
                url=link.url,
            )
            for link in links
        ],
    )
