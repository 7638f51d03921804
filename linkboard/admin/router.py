"""Admin domain router.

JSON API behind the admin dashboard. Every route requires an admin session
except ``stop-impersonate``: while impersonating, the effective user is the
impersonated one, so that route is guarded by the admin id stored in the
session instead.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from linkboard.admin import export, service
from linkboard.admin.schemas import (
    AdminStats,
    BulkAdminRequest,
    BulkResult,
    BulkUserIds,
    ImpersonationResponse,
    ProfileFilter,
    ProfileListResponse,
    ProfileSort,
    SortOrder,
    SystemHealth,
    UserFilter,
    UserListResponse,
    UserSort,
)
from linkboard.auth.dependencies import (
    AdminUserDep,
    CurrentSessionDep,
    SessionStoreDep,
    require_admin,
)
from linkboard.core.constants import CommonResponses, Routes
from linkboard.core.deps import SessionDep
from linkboard.user.schemas import AdminToggleRequest, UserRead

router = APIRouter(
    prefix=Routes.ADMIN.prefix,
    tags=[Routes.ADMIN.tag],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)

impersonation_router = APIRouter(
    prefix=Routes.ADMIN.prefix,
    tags=[Routes.ADMIN.tag],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)

Page = Annotated[int, Query(ge=1)]
Limit = Annotated[int, Query(ge=1, le=100)]


@router.get("/stats", response_model=AdminStats)
async def get_stats(session: SessionDep):
    """Dashboard totals, recent sign-ups, top pages and a 30-day growth series."""
    return service.get_stats(session)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    session: SessionDep,
    page: Page = 1,
    limit: Limit = 20,
    search: str | None = None,
    filter_by: UserFilter | None = None,
    sort_by: UserSort = UserSort.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
):
    return service.list_users(
        session,
        page=page,
        limit=limit,
        search=search,
        filter_by=filter_by,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/profiles", response_model=ProfileListResponse)
async def list_profiles(
    session: SessionDep,
    page: Page = 1,
    limit: Limit = 20,
    search: str | None = None,
    filter_by: ProfileFilter | None = None,
    sort_by: ProfileSort = ProfileSort.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
):
    return service.list_profiles(
        session,
        page=page,
        limit=limit,
        search=search,
        filter_by=filter_by,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/users/export")
async def export_users(session: SessionDep):
    """Full CSV snapshot of all users. Search and filters do not apply."""
    return export.csv_response("users", export.USER_COLUMNS, export.user_rows(session))


@router.get("/profiles/export")
async def export_profiles(session: SessionDep):
    """Full CSV snapshot of all profiles. Search and filters do not apply."""
    return export.csv_response(
        "profiles", export.PROFILE_COLUMNS, export.profile_rows(session)
    )


@router.post("/users/bulk-delete", response_model=BulkResult)
async def bulk_delete_users(
    payload: BulkUserIds, admin: AdminUserDep, session: SessionDep
):
    count = service.bulk_delete_users(session, admin, payload.user_ids)
    return BulkResult(message=f"Deleted {count} users", count=count)


@router.post("/users/bulk-admin", response_model=BulkResult)
async def bulk_set_admin(
    payload: BulkAdminRequest, admin: AdminUserDep, session: SessionDep
):
    count = service.bulk_set_admin(session, admin, payload.user_ids, payload.is_admin)
    return BulkResult(message=f"Updated {count} users", count=count)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_user(user_id: uuid.UUID, admin: AdminUserDep, session: SessionDep):
    """Delete a user with their pages, links and themes."""
    service.delete_user(session, admin, user_id)


@router.patch(
    "/users/{user_id}/admin",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def set_admin(
    user_id: uuid.UUID,
    payload: AdminToggleRequest,
    admin: AdminUserDep,
    session: SessionDep,
):
    return service.set_admin(session, admin, user_id, payload.is_admin)


@router.post(
    "/users/{user_id}/impersonate",
    response_model=ImpersonationResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def impersonate(
    user_id: uuid.UUID,
    admin: AdminUserDep,
    record: CurrentSessionDep,
    store: SessionStoreDep,
    session: SessionDep,
):
    """Act as another user within the current session."""
    target = service.start_impersonation(session, store, record, admin, user_id)
    return {"message": f"Now impersonating {target.email}", "user": target}


@impersonation_router.post(
    "/users/stop-impersonate",
    response_model=ImpersonationResponse,
    responses={**CommonResponses.BAD_REQUEST},
)
async def stop_impersonate(
    record: CurrentSessionDep, store: SessionStoreDep, session: SessionDep
):
    """Return the session to the admin who started the impersonation."""
    admin = service.stop_impersonation(session, store, record)
    return {"message": "Impersonation stopped", "user": admin}


@router.get("/system/health", response_model=SystemHealth)
async def system_health(session: SessionDep):
    return service.get_system_health(session)


@router.get("/activity", response_model=list[dict])
async def activity():
    """Activity feed; nothing is recorded yet, so it is always empty."""
    return []
