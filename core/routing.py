# =============================================================================
# core/routing.py - Routing Table
# =============================================================================
# Holds the ordered list of routes the application exposes. Routes are plain
# data: the HTTP layer (app/bootstrap.py) turns them into engine
# registrations when a server instance is built.
#
# Usage:
#   from core.routing import Router
#
#   router = Router()
#   router.get("/", home)
#   router.post("/items", require_token, create_item)
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from lib.utils import ApplicationError


class RouteDefinitionError(ApplicationError):
    """Raised when a route is declared with an unusable method or handler chain."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message,
            code="ROUTE_DEFINITION_ERROR",
            suggestion=f"Use one of: {', '.join(m.value for m in HTTPMethod)}",
            details=details,
        )


class HTTPMethod(str, Enum):
    """HTTP methods a route can be registered for."""

    GET = "get"
    POST = "post"
    DELETE = "delete"
    PATCH = "patch"
    PUT = "put"
    OPTIONS = "options"
    HEAD = "head"

    @classmethod
    def parse(cls, value: str | HTTPMethod) -> HTTPMethod:
        """
        Normalize a method name (any case) into an HTTPMethod.

        Raises:
            RouteDefinitionError: If the name isn't a supported method
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise RouteDefinitionError(
                f"Unsupported HTTP method: {value!r}",
                details={"method": value},
            ) from None


@dataclass(frozen=True)
class Route:
    """
    A single (method, path, handler chain) entry.

    The last handler is the endpoint; any handlers before it run first, in
    order, for this route only.
    """

    method: HTTPMethod
    path: str
    handlers: tuple[Callable, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "method", HTTPMethod.parse(self.method))
        object.__setattr__(self, "handlers", tuple(self.handlers))
        if not self.handlers:
            raise RouteDefinitionError(
                f"Route {self.method.value.upper()} {self.path} has no handlers",
                details={"path": self.path},
            )


class Router:
    """Ordered collection of routes, in registration order."""

    def __init__(self):
        self._routes: list[Route] = []

    def add(self, method: str | HTTPMethod, path: str, handlers: Sequence[Callable]) -> Route:
        route = Route(method=method, path=path, handlers=tuple(handlers))
        self._routes.append(route)
        return route

    def get(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.GET, path, handlers)

    def post(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.POST, path, handlers)

    def delete(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.DELETE, path, handlers)

    def patch(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.PATCH, path, handlers)

    def put(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.PUT, path, handlers)

    def options(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.OPTIONS, path, handlers)

    def head(self, path: str, *handlers: Callable) -> Route:
        return self.add(HTTPMethod.HEAD, path, handlers)

    def get_routes(self) -> tuple[Route, ...]:
        """Return a snapshot of the registered routes."""
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
