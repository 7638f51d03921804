"""Process and database liveness helpers shared by the health routes."""

import logging
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    """Seconds since this process imported the application."""
    return round(time.monotonic() - _STARTED_AT, 3)


def database_ok(session: Session) -> bool:
    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        return False
    return True
