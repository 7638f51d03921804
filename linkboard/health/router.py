"""Health domain router.

Health check endpoint for monitoring and load balancers.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from linkboard.core.constants import Routes
from linkboard.core.deps import SessionDep
from linkboard.core.mixins import utc_now
from linkboard.core.schemas import format_utc
from linkboard.health.service import database_ok, uptime_seconds

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


@router.get("")
async def health(session: SessionDep):
    """Health check endpoint with database connectivity verification."""
    body = {"timestamp": format_utc(utc_now()), "uptime": uptime_seconds()}
    if not database_ok(session):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "error", **body},
        )
    return {"status": "ok", "database": "ok", **body}
