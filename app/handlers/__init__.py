# =============================================================================
# app/handlers/ - Request Handlers
# =============================================================================
# Endpoint functions registered on the routing table by app/routes.py:
# - home.py: Welcome message
# - health.py: Health, liveness and readiness checks
# =============================================================================

from . import health
from . import home

__all__ = [
    "health",
    "home",
]
