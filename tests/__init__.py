# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for Webcoat:
# - test_routing.py / test_registries.py: core registries
# - test_env.py / test_config.py / test_database.py: lib and settings
# - test_bootstrap.py: bootstrap sequencing, listeners and route dispatch
# - test_secure.py: HTTP -> HTTPS redirect hook
# - test_handlers.py: default routes end to end
#
# Run tests with: pytest
# =============================================================================
