# =============================================================================
# app/integrations.py - Package Integration Hooks
# =============================================================================
# Request hooks that packages contribute to every server instance.
# =============================================================================

import logging

from fastapi import Request

from lib.database import Database

logger = logging.getLogger(__name__)

# Name of the request.state attribute holding the database session
DB = "db"


def database_hook(database: Database):
    """
    Create a hook that gives each request its own database session.

    The session is available as ``request.state.db`` and is closed once the
    response has been produced.
    """

    async def attach_database(request: Request, call_next):
        session = database.session()
        setattr(request.state, DB, session)
        try:
            return await call_next(request)
        finally:
            session.close()

    return attach_database
