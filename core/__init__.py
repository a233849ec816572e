# =============================================================================
# core/ - Framework Registries
# =============================================================================
# This package contains the framework-agnostic building blocks:
# - routing.py: Route definitions and the routing table
# - pkgintegrator.py: Package integration hooks
# - middlewares.py: Middleware hooks
# - container.py: The container bootstrap fills with all of the above
#
# Code in this package should NOT import from FastAPI or uvicorn.
# This keeps the registries testable and reusable.
# =============================================================================

from core.container import Container
from core.middlewares import MiddlewareRegistry
from core.pkgintegrator import PackageIntegrator
from core.routing import HTTPMethod, Route, RouteDefinitionError, Router

__all__ = [
    "Container",
    "HTTPMethod",
    "MiddlewareRegistry",
    "PackageIntegrator",
    "Route",
    "RouteDefinitionError",
    "Router",
]
