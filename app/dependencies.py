# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import RunMode
from app.exceptions import ServiceUnavailableError
from app.integrations import DB


def get_db_session(request: Request) -> Session:
    """
    Get the database session attached by the database hook.

    Raises:
        ServiceUnavailableError: If the server instance has no database hook
    """
    session = getattr(request.state, DB, None)
    if session is None:
        raise ServiceUnavailableError("database")
    return session


def get_run_mode(request: Request) -> RunMode:
    """Run mode the serving instance was built in (MODE at bootstrap)."""
    return request.app.state.run_mode


# Type alias for dependency injection
DbSession = Annotated[Session, Depends(get_db_session)]
CurrentRunMode = Annotated[RunMode, Depends(get_run_mode)]
