"""Admin dashboard request and response schemas."""

import uuid
from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from linkboard.bio_page.schemas import ProfileRead
from linkboard.user.schemas import UserRead


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserFilter(str, Enum):
    ADMIN = "admin"
    VERIFIED = "verified"
    UNVERIFIED = "unverified"


class UserSort(str, Enum):
    CREATED_AT = "created_at"
    EMAIL = "email"
    NAME = "name"


class ProfileFilter(str, Enum):
    DEFAULT = "default"
    SECONDARY = "secondary"


class ProfileSort(str, Enum):
    CREATED_AT = "created_at"
    VIEWS = "views"
    CLICKS = "clicks"
    PAGE_NAME = "page_name"


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UserListResponse(BaseModel):
    users: list[UserRead]
    pagination: Pagination


class ProfileListResponse(BaseModel):
    profiles: list[ProfileRead]
    pagination: Pagination


class Totals(BaseModel):
    users: int
    profiles: int
    links: int
    recent_users: int
    total_views: int
    total_clicks: int


class GrowthPoint(BaseModel):
    day: date
    users: int
    profiles: int


class AdminStats(BaseModel):
    stats: Totals
    recent_users: list[UserRead]
    top_profiles: list[ProfileRead]
    growth: list[GrowthPoint]


class BulkUserIds(BaseModel):
    user_ids: list[uuid.UUID] = Field(min_length=1)


class BulkAdminRequest(BulkUserIds):
    is_admin: bool


class BulkResult(BaseModel):
    message: str
    count: int


class ImpersonationResponse(BaseModel):
    message: str
    user: UserRead


class SystemHealth(BaseModel):
    status: str
    database: str
    users: int
    profiles: int
    links: int
    new_users_24h: int
    new_profiles_24h: int
    uptime: float
