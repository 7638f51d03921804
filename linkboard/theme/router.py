"""Theme routes.

``/presets`` and ``/profile/...`` are declared before ``/{profile_id}``.
"""

import uuid

from fastapi import APIRouter, Depends, status

from linkboard.auth.dependencies import CurrentUserDep, require_auth
from linkboard.bio_page.ownership import get_owned_profile
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import SessionDep
from linkboard.theme import service
from linkboard.theme.presets import list_presets
from linkboard.theme.schemas import ThemeCreate, ThemePreset, ThemeRead, ThemeUpdate

router = APIRouter(
    prefix=Routes.THEME.prefix,
    tags=[Routes.THEME.tag],
    responses={**CommonResponses.NOT_FOUND},
)

_OWNER_ONLY = {
    "dependencies": [Depends(require_auth)],
    "responses": {**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
}


@router.get("/presets", response_model=list[ThemePreset])
async def get_presets():
    return list_presets()


@router.get("/profile/{profile_id}/all", response_model=list[ThemeRead], **_OWNER_ONLY)
async def list_profile_themes(
    profile_id: uuid.UUID, user: CurrentUserDep, session: SessionDep
):
    get_owned_profile(session, profile_id, user)
    return service.list_themes(session, profile_id)


@router.get("/{profile_id}", response_model=ThemeRead)
async def get_active_theme(profile_id: uuid.UUID, session: SessionDep):
    """Public: the theme a profile renders with.

    Falls back to the default preset, also for ids without a profile, so a
    page can always be drawn.
    """
    return service.get_active_theme(session, profile_id)


@router.post(
    "", response_model=ThemeRead, status_code=status.HTTP_201_CREATED, **_OWNER_ONLY
)
async def create_theme(data: ThemeCreate, user: CurrentUserDep, session: SessionDep):
    return service.create_theme(session, user, data)


@router.patch("/{theme_id}", response_model=ThemeRead, **_OWNER_ONLY)
async def update_theme(
    theme_id: uuid.UUID, patch: ThemeUpdate, user: CurrentUserDep, session: SessionDep
):
    theme = service.get_owned_theme(session, theme_id, user)
    return service.update_theme(session, theme, patch)


@router.delete("/{theme_id}", **_OWNER_ONLY)
async def delete_theme(theme_id: uuid.UUID, user: CurrentUserDep, session: SessionDep):
    theme = service.get_owned_theme(session, theme_id, user)
    service.delete_theme(session, theme)
    return {"message": "Theme deleted successfully"}


@router.post("/{theme_id}/activate", response_model=ThemeRead, **_OWNER_ONLY)
async def activate_theme(theme_id: uuid.UUID, user: CurrentUserDep, session: SessionDep):
    theme = service.get_owned_theme(session, theme_id, user)
    profile_id = theme.profile_id
    service.activate_theme(session, theme_id, profile_id)
    return service.get_active_theme(session, profile_id)
