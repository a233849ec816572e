# =============================================================================
# core/pkgintegrator.py - Package Integrator Registry
# =============================================================================
# Collects request hooks contributed by packages (database access, sessions,
# and so on). Every server instance gets all of them attached ahead of its
# routes, first registered runs first.
# =============================================================================

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class PackageIntegrator:
    """Ordered registry of integration hooks."""

    def __init__(self):
        self._integrations: list[Callable] = []

    def integrate(self, hook: Callable) -> None:
        """Register ``hook``. Registering the same hook twice attaches it twice."""
        self._integrations.append(hook)
        logger.debug(f"Integrated package hook: {getattr(hook, '__name__', repr(hook))}")

    def get_integrations(self) -> tuple[Callable, ...]:
        return tuple(self._integrations)
