# =============================================================================
# core/container.py - Dependency Container
# =============================================================================
# Holds the registries built during bootstrap. The bootstrapper creates one
# Container and passes it to everything that needs a registry, so there is
# no process-wide registry state.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field

from core.middlewares import MiddlewareRegistry
from core.pkgintegrator import PackageIntegrator
from core.routing import Router
from lib.database import Database


@dataclass
class Container:
    """Registries shared by every server instance of one application."""

    integrator: PackageIntegrator = field(default_factory=PackageIntegrator)
    middlewares: MiddlewareRegistry = field(default_factory=MiddlewareRegistry)
    router: Router = field(default_factory=Router)
    database: Database | None = None
