# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - env.py: Environment loader (.env file + os.environ lookups)
# - database.py: SQLAlchemy database connector
# - utils.py: Shared error base class
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import Database, DatabaseError
from lib.utils import ApplicationError

__all__ = [
    # Database
    "Database",
    "DatabaseError",
    # Utils
    "ApplicationError",
]
