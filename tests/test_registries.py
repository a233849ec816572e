# =============================================================================
# tests/test_registries.py - Integration and Middleware Registry Tests
# =============================================================================

from core.container import Container
from core.middlewares import MiddlewareRegistry
from core.pkgintegrator import PackageIntegrator
from core.routing import Router


def hook_a(request, call_next):
    return call_next(request)


def hook_b(request, call_next):
    return call_next(request)


class TestPackageIntegrator:
    """Tests for PackageIntegrator."""

    def test_starts_empty(self):
        assert PackageIntegrator().get_integrations() == ()

    def test_keeps_order(self):
        integrator = PackageIntegrator()
        integrator.integrate(hook_a)
        integrator.integrate(hook_b)

        assert integrator.get_integrations() == (hook_a, hook_b)

    def test_no_deduplication(self):
        integrator = PackageIntegrator()
        integrator.integrate(hook_a)
        integrator.integrate(hook_a)

        assert integrator.get_integrations() == (hook_a, hook_a)


class TestMiddlewareRegistry:
    """Tests for MiddlewareRegistry."""

    def test_register(self):
        registry = MiddlewareRegistry()
        registry.register(hook_b)
        registry.register(hook_a)

        assert registry.get_middlewares() == (hook_b, hook_a)


class TestContainer:
    """Tests for Container defaults."""

    def test_defaults_are_independent(self):
        first = Container()
        second = Container()

        first.router.get("/", lambda: None)

        assert isinstance(second.router, Router)
        assert len(second.router) == 0
        assert first.database is None
