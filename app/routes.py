# =============================================================================
# app/routes.py - Default Route Table
# =============================================================================
# Routes every new application starts with. Add your own in the same way.
# =============================================================================

from app.handlers import health, home
from core.routing import Router


def register_default_routes(router: Router) -> Router:
    router.get("/", home.home_get)
    router.get("/health", health.health_check)
    router.get("/health/live", health.liveness_check)
    router.get("/health/ready", health.readiness_check)
    return router
