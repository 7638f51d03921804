from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqladmin import Admin

from linkboard.admin.auth import AdminAuth
from linkboard.admin.views import ADMIN_VIEWS
from linkboard.core.cors import add_cors_middleware
from linkboard.core.exception_handlers import register_exception_handlers
from linkboard.core.http import close_outbound_client
from linkboard.core.logging import configure_logging
from linkboard.core.request_logging import add_request_logging_middleware
from linkboard.db.engine import engine
from linkboard.health.router import router as health_router
from linkboard.router import api_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    # Cleanup HTTP clients
    await close_outbound_client()


app = FastAPI(title="LinkBoard", version="0.1.0", lifespan=lifespan)

app.include_router(health_router)
app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Mount SQLAdmin UI at /admin; the JSON admin API lives under /api/admin
admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
    title="LinkBoard Admin",
)
for view in ADMIN_VIEWS:
    admin.add_view(view)
