"""Central API router aggregating all domain routers under ``/api``."""

from fastapi import APIRouter

from linkboard.admin.router import impersonation_router
from linkboard.admin.router import router as admin_router
from linkboard.analytics.router import router as analytics_router
from linkboard.auth.router import router as auth_router
from linkboard.bio_page.router import profile_router
from linkboard.bio_page.router import router as bio_page_router
from linkboard.core.constants import API_PREFIX
from linkboard.link.router import router as link_router
from linkboard.theme.router import router as theme_router
from linkboard.user.router import router as user_router

api_router = APIRouter(prefix=API_PREFIX)

api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(bio_page_router)
api_router.include_router(profile_router)
api_router.include_router(link_router)
api_router.include_router(theme_router)
api_router.include_router(analytics_router)
api_router.include_router(impersonation_router)
api_router.include_router(admin_router)
