"""Bio page routes.

``/bio-pages`` is the owner's page management API; ``/profile`` serves the
public page and the legacy single-profile update.
"""

import uuid

from fastapi import APIRouter, Depends, status

from linkboard.auth.dependencies import CurrentUserDep, require_auth
from linkboard.bio_page import service
from linkboard.bio_page.avatar import AvatarResolverDep
from linkboard.bio_page.exceptions import ProfileNotFoundError
from linkboard.bio_page.ownership import get_owned_profile
from linkboard.bio_page.schemas import (
    BioPageCreate,
    BioPageUpdate,
    ProfileRead,
    PublicProfileResponse,
)
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import SessionDep
from linkboard.link.service import list_links

router = APIRouter(
    prefix=Routes.BIO_PAGE.prefix,
    tags=[Routes.BIO_PAGE.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)

profile_router = APIRouter(prefix=Routes.PROFILE.prefix, tags=[Routes.PROFILE.tag])

_OWNER_RESPONSES = {**CommonResponses.FORBIDDEN, **CommonResponses.NOT_FOUND}


@router.get("", response_model=list[ProfileRead])
async def list_bio_pages(user: CurrentUserDep, session: SessionDep):
    """List the caller's pages, oldest first."""
    return service.list_bio_pages(session, user.id)


@router.post(
    "",
    response_model=ProfileRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def create_bio_page(
    data: BioPageCreate,
    user: CurrentUserDep,
    session: SessionDep,
    avatar_resolver: AvatarResolverDep,
):
    """Create a page. The caller's first page becomes their default."""
    return await service.create_bio_page(session, user, data, avatar_resolver)


@router.patch(
    "/{profile_id}",
    response_model=ProfileRead,
    responses={**_OWNER_RESPONSES, **CommonResponses.CONFLICT},
)
async def update_bio_page(
    profile_id: uuid.UUID,
    patch: BioPageUpdate,
    user: CurrentUserDep,
    session: SessionDep,
):
    profile = get_owned_profile(session, profile_id, user)
    return service.update_bio_page(session, profile, patch)


@router.delete("/{profile_id}", responses=_OWNER_RESPONSES)
async def delete_bio_page(profile_id: uuid.UUID, user: CurrentUserDep, session: SessionDep):
    """Delete a page with its links and themes.

    If it was the default page, another page of the caller becomes default.
    """
    get_owned_profile(session, profile_id, user)
    if not service.delete_bio_page(session, profile_id, user.id):
        raise ProfileNotFoundError()
    return {"message": "Bio page deleted successfully"}


@router.post(
    "/{profile_id}/set-default", response_model=ProfileRead, responses=_OWNER_RESPONSES
)
async def set_default_bio_page(
    profile_id: uuid.UUID, user: CurrentUserDep, session: SessionDep
):
    get_owned_profile(session, profile_id, user)
    return service.set_default_bio_page(session, profile_id, user.id)


@profile_router.get(
    "/{page_name}",
    response_model=PublicProfileResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_public_profile(page_name: str, session: SessionDep):
    """Public page: profile with its active links. Counts one view."""
    profile = service.get_profile_by_page_name(session, page_name)
    if profile is None:
        raise ProfileNotFoundError()

    service.increment_profile_views(session, profile.id)
    session.refresh(profile)
    return {"profile": profile, "links": list_links(session, profile.id, active_only=True)}


@profile_router.patch(
    "/{profile_id}",
    response_model=ProfileRead,
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **_OWNER_RESPONSES,
        **CommonResponses.CONFLICT,
    },
)
async def update_profile(
    profile_id: uuid.UUID,
    patch: BioPageUpdate,
    user: CurrentUserDep,
    session: SessionDep,
):
    profile = get_owned_profile(session, profile_id, user)
    return service.update_bio_page(session, profile, patch)
