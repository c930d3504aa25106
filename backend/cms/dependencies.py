"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from cms.config import settings
from cms.database import get_db, get_session_factory
from cms.services.program_service import ProgramService
from cms.services.view_counter import ViewCounter


def get_actor(x_user_name: Annotated[str | None, Header()] = None) -> str:
    """Name recorded on writes; requests without an X-User-Name header act as the system."""
    if x_user_name and x_user_name.strip():
        return x_user_name.strip()[:255]
    return settings.default_actor


def get_program_service(db: Annotated[Session, Depends(get_db)]) -> ProgramService:
    return ProgramService(db)


def get_view_counter(session_factory=Depends(get_session_factory)) -> ViewCounter:
    return ViewCounter(session_factory)
