# =============================================================================
# app/ - HTTP Application Package
# =============================================================================
# This package contains the web layer:
# - bootstrap.py: Registry setup and listener lifecycle
# - main.py: Process entry point
# - config.py: Environment variable loading and settings
# - handlers/: Endpoint functions, routes.py registers them
#
# The app layer is thin - it handles HTTP concerns and delegates the
# registries to the core/ package.
# =============================================================================
