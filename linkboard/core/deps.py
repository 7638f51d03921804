"""Centralized dependency type aliases for FastAPI routes.

Import shared dependencies from this module:
    from linkboard.core.deps import SessionDep, SettingsDep, EmailSenderDep

Authentication dependencies live in ``linkboard.auth.dependencies``.
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from linkboard.core.email import EmailSender, get_email_sender
from linkboard.core.settings import Settings, get_settings
from linkboard.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Outbound email (Resend, or a logging stand-in without an API key)
EmailSenderDep = Annotated[EmailSender, Depends(get_email_sender)]
