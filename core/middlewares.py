# =============================================================================
# core/middlewares.py - Middleware Registry
# =============================================================================
# Application-level request hooks. Kept separate from package integrations
# so applications can opt in per server instance.
# =============================================================================

from typing import Callable


class MiddlewareRegistry:
    """Ordered registry of middleware hooks."""

    def __init__(self):
        self._middlewares: list[Callable] = []

    def register(self, middleware: Callable) -> None:
        self._middlewares.append(middleware)

    def get_middlewares(self) -> tuple[Callable, ...]:
        return tuple(self._middlewares)
