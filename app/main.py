# =============================================================================
# app/main.py - Application Entry Point
# =============================================================================
# Bootstraps the application, registers the default routes and starts the
# listeners. The port comes from PORT (default 80); everything else comes
# from the environment / .env file.
#
# Usage:
#   python -m app.main
#   PORT=8080 webcoat
# =============================================================================

from app.bootstrap import App
from app.routes import register_default_routes
from lib import env


def create_app(env_file: str = env.DEFAULT_ENV_FILE) -> App:
    """Bootstrap an App with the default routes registered."""
    application = App(env_file=env_file)
    container = application.bootstrap()
    register_default_routes(container.router)
    return application


def main() -> None:
    application = create_app()
    application.run(env.get("PORT"))


if __name__ == "__main__":
    main()
