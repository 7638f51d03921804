"""Link routes.

Static paths (``/reorder``, ``/profile/...``) are declared before
``/{link_id}`` so they are not captured by the id parameter.
"""

import uuid

from fastapi import APIRouter, Depends, status

from linkboard.auth.dependencies import CurrentUserDep, require_auth
from linkboard.bio_page.ownership import get_owned_profile
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import SessionDep
from linkboard.link import service
from linkboard.link.schemas import (
    LinkClickResponse,
    LinkCreate,
    LinkRead,
    LinkReorderRequest,
    LinkUpdate,
)

router = APIRouter(
    prefix=Routes.LINK.prefix,
    tags=[Routes.LINK.tag],
    responses={**CommonResponses.NOT_FOUND},
)

_OWNER_ONLY = {
    "dependencies": [Depends(require_auth)],
    "responses": {**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
}


@router.post(
    "", response_model=LinkRead, status_code=status.HTTP_201_CREATED, **_OWNER_ONLY
)
async def create_link(data: LinkCreate, user: CurrentUserDep, session: SessionDep):
    return service.create_link(session, user, data)


@router.patch("/reorder", **_OWNER_ONLY)
async def reorder_links(
    payload: LinkReorderRequest, user: CurrentUserDep, session: SessionDep
):
    """Set the display order to the order of ``link_ids``.

    All-or-nothing: one foreign or unknown id rejects the whole request.
    """
    service.reorder_links(session, user, payload.link_ids)
    return {"message": "Links reordered successfully"}


@router.get("/profile/{profile_id}", response_model=list[LinkRead], **_OWNER_ONLY)
async def list_profile_links(
    profile_id: uuid.UUID, user: CurrentUserDep, session: SessionDep
):
    """All links of an owned profile, including inactive ones."""
    get_owned_profile(session, profile_id, user)
    return service.list_links(session, profile_id)


@router.patch("/{link_id}", response_model=LinkRead, **_OWNER_ONLY)
async def update_link(
    link_id: uuid.UUID, patch: LinkUpdate, user: CurrentUserDep, session: SessionDep
):
    link = service.get_owned_link(session, link_id, user)
    return service.update_link(session, link, patch)


@router.delete("/{link_id}", **_OWNER_ONLY)
async def delete_link(link_id: uuid.UUID, user: CurrentUserDep, session: SessionDep):
    link = service.get_owned_link(session, link_id, user)
    service.delete_link(session, link)
    return {"message": "Link deleted successfully"}


@router.post("/{link_id}/click", response_model=LinkClickResponse)
async def click_link(link_id: uuid.UUID, session: SessionDep):
    """Public click tracking; returns the URL to redirect the visitor to."""
    return LinkClickResponse(url=service.record_click(session, link_id))
