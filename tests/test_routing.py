# =============================================================================
# tests/test_routing.py - Routing Table Tests
# =============================================================================

import pytest

from core.routing import HTTPMethod, Route, RouteDefinitionError, Router


def endpoint():
    return {"ok": True}


def guard():
    return None


# =============================================================================
# HTTPMethod Tests
# =============================================================================

class TestHTTPMethod:
    """Tests for HTTPMethod parsing."""

    @pytest.mark.parametrize("value", ["get", "GET", " Get ", HTTPMethod.GET])
    def test_parse_is_case_insensitive(self, value):
        assert HTTPMethod.parse(value) is HTTPMethod.GET

    def test_all_methods(self):
        """The method set is closed."""
        assert {m.value for m in HTTPMethod} == {
            "get", "post", "delete", "patch", "put", "options", "head",
        }

    @pytest.mark.parametrize("value", ["trace", "connect", "", "gett"])
    def test_unknown_method_raises(self, value):
        with pytest.raises(RouteDefinitionError) as exc_info:
            HTTPMethod.parse(value)

        assert exc_info.value.code == "ROUTE_DEFINITION_ERROR"
        assert exc_info.value.details == {"method": value}
        assert "get" in exc_info.value.suggestion


# =============================================================================
# Route Tests
# =============================================================================

class TestRoute:
    """Tests for Route construction."""

    def test_method_string_is_normalized(self):
        route = Route(method="POST", path="/items", handlers=[endpoint])

        assert route.method is HTTPMethod.POST
        assert route.handlers == (endpoint,)

    def test_unknown_method_rejected_at_construction(self):
        with pytest.raises(RouteDefinitionError):
            Route(method="trace", path="/items", handlers=(endpoint,))

    def test_empty_handler_chain_rejected(self):
        with pytest.raises(RouteDefinitionError) as exc_info:
            Route(method="get", path="/items", handlers=())

        assert "/items" in exc_info.value.message

    def test_route_is_immutable(self):
        route = Route(method="get", path="/", handlers=(endpoint,))

        with pytest.raises(AttributeError):
            route.path = "/other"


# =============================================================================
# Router Tests
# =============================================================================

class TestRouter:
    """Tests for Router registration."""

    def test_routes_kept_in_registration_order(self):
        router = Router()
        router.get("/", endpoint)
        router.post("/items", guard, endpoint)
        router.delete("/items/{id}", endpoint)

        routes = router.get_routes()

        assert [(r.method, r.path) for r in routes] == [
            (HTTPMethod.GET, "/"),
            (HTTPMethod.POST, "/items"),
            (HTTPMethod.DELETE, "/items/{id}"),
        ]
        assert routes[1].handlers == (guard, endpoint)

    @pytest.mark.parametrize("method", list(HTTPMethod))
    def test_shortcut_per_method(self, method):
        router = Router()

        route = getattr(router, method.value)("/x", endpoint)

        assert route.method is method
        assert len(router) == 1

    def test_get_routes_returns_snapshot(self):
        router = Router()
        router.get("/", endpoint)
        snapshot = router.get_routes()

        router.put("/later", endpoint)

        assert len(snapshot) == 1
        assert len(router.get_routes()) == 2

    def test_add_with_bad_method_registers_nothing(self):
        router = Router()

        with pytest.raises(RouteDefinitionError):
            router.add("trace", "/", [endpoint])

        assert router.get_routes() == ()
