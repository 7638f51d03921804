"""Self-service account routes. Admin user management lives under
``/api/admin``.
"""

from fastapi import APIRouter, Depends, Response, status

from linkboard.auth.dependencies import (
    CurrentSessionDep,
    CurrentUserDep,
    SessionStoreDep,
    require_auth,
)
from linkboard.auth.sessions import clear_session_cookie
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import SessionDep, SettingsDep
from linkboard.user.schemas import UserRead, UserUpdateMe
from linkboard.user.service import delete_users_cascade

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.patch("/me", response_model=UserRead)
async def update_me(
    user: CurrentUserDep, user_update: UserUpdateMe, session: SessionDep
):
    """Change names or picture; other keys in the body are ignored."""
    update_data = user_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(user, key, value)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    user: CurrentUserDep,
    record: CurrentSessionDep,
    store: SessionStoreDep,
    session: SessionDep,
    settings: SettingsDep,
    response: Response,
):
    """Delete current authenticated user with all of their pages and log out."""
    delete_users_cascade(session, [user.id])
    store.destroy(record.sid)
    clear_session_cookie(response, settings)
