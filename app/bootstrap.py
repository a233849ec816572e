# =============================================================================
# app/bootstrap.py - Application Bootstrapper
# =============================================================================
# Sets up the registries once at process start, then builds and starts the
# HTTP listeners:
#
#   - TLS listener on port 443 (background thread) when APP_HTTPS_ON is set
#   - Redirect listener on the plain port when APP_REDIRECT_HTTP_TO_HTTPS is
#     also set
#   - Plain HTTP listener on the plain port (blocks the calling thread)
#
# Usage:
#   application = App()
#   container = application.bootstrap()
#   container.router.get("/", home)
#   application.run("8080")
# =============================================================================

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

import uvicorn
from fastapi import Depends, FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import (
    DEFAULT_PORT,
    HTTPS_PORT,
    ConfigurationError,
    RunMode,
    Settings,
    get_settings,
    resolve_run_mode,
)
from app.exceptions import (
    BootstrapError,
    WebcoatException,
    general_exception_handler,
    webcoat_exception_handler,
)
from app.integrations import database_hook
from app.logs import configure_logging
from app.secure import ssl_redirect_hook
from core.container import Container
from core.middlewares import MiddlewareRegistry
from core.pkgintegrator import PackageIntegrator
from core.routing import HTTPMethod, Route, RouteDefinitionError, Router
from lib import env
from lib.database import Database

logger = logging.getLogger(__name__)

# Plain listeners bind every interface
ALL_INTERFACES = "0.0.0.0"


# =============================================================================
# Listeners
# =============================================================================

@dataclass(frozen=True)
class Listener:
    """One server instance bound to a host and port."""

    name: str
    engine: FastAPI
    host: str
    port: int
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    @property
    def is_tls(self) -> bool:
        return self.ssl_certfile is not None


def serve(listener: Listener) -> None:
    """Run ``listener`` with uvicorn until the server exits."""
    config = uvicorn.Config(
        listener.engine,
        host=listener.host,
        port=listener.port,
        ssl_certfile=listener.ssl_certfile,
        ssl_keyfile=listener.ssl_keyfile,
        # Logging is already configured by configure_logging()
        log_config=None,
    )
    logger.info(
        f"Starting {listener.name} listener on {listener.host}:{listener.port} "
        f"tls={listener.is_tls}"
    )
    uvicorn.Server(config).run()


def attach_hooks(engine: FastAPI, hooks: Iterable[Callable]) -> FastAPI:
    """
    Attach request hooks to ``engine`` so the first hook runs first.

    Starlette wraps each added middleware around the ones added before it,
    so hooks are added in reverse.
    """
    for hook in reversed(tuple(hooks)):
        engine.add_middleware(BaseHTTPMiddleware, dispatch=hook)
    return engine


def parse_port(port_number: str) -> int:
    """
    Convert a port string into an int, "" meaning the default port.

    Raises:
        ConfigurationError: If the value isn't a valid TCP port
    """
    value = port_number or DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        port = -1
    if not 0 < port < 65536:
        raise ConfigurationError(
            f"Invalid port number: {value!r}",
            suggestion="Pass a port between 1 and 65535",
            details={"port": value},
        )
    return port


# =============================================================================
# App
# =============================================================================

class App:
    """
    Application bootstrapper.

    Call bootstrap() exactly once, register routes on the returned
    container's router, then call run().
    """

    def __init__(
        self,
        env_file: str | Path = env.DEFAULT_ENV_FILE,
        serve_listener: Callable[[Listener], None] = serve,
    ):
        self.env_file = env_file
        self.mode = RunMode.DEBUG
        self.container: Container | None = None
        self.tls_thread: threading.Thread | None = None
        self._serve = serve_listener

    # -------------------------------------------------------------------------
    # Bootstrap
    # -------------------------------------------------------------------------

    def bootstrap(self, database: Database | None = None) -> Container:
        """
        Initialize the registries in a fixed order.

        1. run mode from MODE
        2. .env file into the environment
        3. package integrator
        4. middleware registry
        5. routing table
        6. database connector (unless one is passed in)
        7. database hook registered as a package integration

        Args:
            database: Pre-built connector, mainly for tests

        Returns:
            Container: The registries, also kept on ``self.container``

        Raises:
            BootstrapError: If called twice
        """
        if self.container is not None:
            raise BootstrapError(
                "Application is already bootstrapped",
                suggestion="Create a new App for a second application",
            )

        self.mode = resolve_run_mode()
        env.load(self.env_file)

        integrator = PackageIntegrator()
        middlewares = MiddlewareRegistry()
        router = Router()

        if database is None:
            settings = get_settings()
            database = Database.new(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

        # TODO: support more than one database connection
        integrator.integrate(database_hook(database))

        self.container = Container(
            integrator=integrator,
            middlewares=middlewares,
            router=router,
            database=database,
        )
        logger.info(f"Application bootstrapped in {self.mode.value} mode")
        return self.container

    def _require_container(self) -> Container:
        if self.container is None:
            raise BootstrapError(
                "Application has not been bootstrapped",
                suggestion="Call App.bootstrap() before App.run()",
            )
        return self.container

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def run(self, port_number: str = "") -> None:
        """
        Configure logging and start the listeners.

        Blocks until the plain listener exits. Raises ConfigurationError or
        LogSetupError before any listener starts if the configuration is
        unusable.
        """
        self._require_container()
        port = parse_port(port_number)
        settings = get_settings()
        log_path = configure_logging(settings.LOG_FILE, self.mode)
        logger.info(f"Logging to {log_path} and stdout")

        https_on = settings.APP_HTTPS_ON
        redirect_to_https = settings.APP_REDIRECT_HTTP_TO_HTTPS

        if https_on:
            self._start_tls(self.build_tls_listener(settings))

        if https_on and redirect_to_https:
            # Blocks; the plain listener below only starts after it returns
            self._serve(self.build_redirect_listener(settings, port))

        self._serve(self.build_http_listener(settings, port))

    def _start_tls(self, listener: Listener) -> None:
        def _run():
            try:
                self._serve(listener)
            except SystemExit as e:
                logger.error(f"TLS listener exited with status {e.code}")
            except Exception:
                logger.exception("TLS listener stopped with an error")

        self.tls_thread = threading.Thread(target=_run, name="tls-listener", daemon=True)
        self.tls_thread.start()

    # -------------------------------------------------------------------------
    # Server instances
    # -------------------------------------------------------------------------

    def new_engine(self, settings: Settings) -> FastAPI:
        """Create an empty server instance with the error handlers attached."""
        release = self.mode == RunMode.RELEASE
        engine = FastAPI(
            title=settings.APP_NAME,
            debug=self.mode == RunMode.DEBUG,
            docs_url=None if release else "/docs",
            redoc_url=None if release else "/redoc",
            openapi_url=None if release else "/openapi.json",
        )
        engine.state.run_mode = self.mode
        engine.add_exception_handler(WebcoatException, webcoat_exception_handler)
        engine.add_exception_handler(Exception, general_exception_handler)
        return engine

    def build_server(self, settings: Settings) -> FastAPI:
        """Create a server instance with integration hooks and all routes."""
        container = self._require_container()
        engine = self.new_engine(settings)
        engine = self.integrate_packages(engine)
        engine = self.register_routes(engine, container.router)
        return engine

    def build_tls_listener(self, settings: Settings) -> Listener:
        """
        Build the TLS listener on port 443.

        Raises:
            ConfigurationError: If the certificate or key file doesn't exist
        """
        cert_file = settings.APP_HTTPS_CERT_FILE_PATH
        key_file = settings.APP_HTTPS_KEY_FILE_PATH
        for name, path in (
            ("APP_HTTPS_CERT_FILE_PATH", cert_file),
            ("APP_HTTPS_KEY_FILE_PATH", key_file),
        ):
            if not path or not Path(path).is_file():
                raise ConfigurationError(
                    f"{name} does not point to a file: {path!r}",
                    suggestion="Set both certificate and key paths when APP_HTTPS_ON is true",
                    details={"setting": name, "path": path},
                )

        return Listener(
            name="https",
            engine=self.build_server(settings),
            host=self.get_https_host(settings),
            port=HTTPS_PORT,
            ssl_certfile=cert_file,
            ssl_keyfile=key_file,
        )

    def build_redirect_listener(self, settings: Settings, port: int) -> Listener:
        """Build a listener whose only hook redirects to the HTTPS host."""
        engine = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
        hook = ssl_redirect_hook(
            f"{self.get_https_host(settings)}:{HTTPS_PORT}",
            allowed_hosts=settings.allowed_hosts_list,
        )
        attach_hooks(engine, [hook])
        return Listener(name="redirect", engine=engine, host=ALL_INTERFACES, port=port)

    def build_http_listener(self, settings: Settings, port: int) -> Listener:
        return Listener(
            name="http",
            engine=self.build_server(settings),
            host=ALL_INTERFACES,
            port=port,
        )

    # -------------------------------------------------------------------------
    # Hooks and routes
    # -------------------------------------------------------------------------

    def integrate_packages(self, engine: FastAPI) -> FastAPI:
        """Attach every package integration hook, once each."""
        return attach_hooks(engine, self._require_container().integrator.get_integrations())

    def use_middlewares(self, engine: FastAPI) -> FastAPI:
        """Attach every registered middleware hook, once each."""
        return attach_hooks(engine, self._require_container().middlewares.get_middlewares())

    def register_routes(self, engine: FastAPI, router: Router) -> FastAPI:
        for route in router.get_routes():
            self.handle_route(route, engine)
        return engine

    def handle_route(self, route: Route, engine: FastAPI) -> None:
        """
        Register ``route`` on ``engine`` using the matching method call.

        Handlers before the last one become route dependencies and run
        first, in order. Anything with a method outside HTTPMethod is
        skipped with a warning.
        """
        try:
            method = HTTPMethod.parse(route.method)
        except RouteDefinitionError:
            logger.warning(f"Skipping route {route.path} with unsupported method {route.method!r}")
            return

        registrars = {
            HTTPMethod.GET: engine.get,
            HTTPMethod.POST: engine.post,
            HTTPMethod.DELETE: engine.delete,
            HTTPMethod.PATCH: engine.patch,
            HTTPMethod.PUT: engine.put,
            HTTPMethod.OPTIONS: engine.options,
            HTTPMethod.HEAD: engine.head,
        }
        dependencies = [Depends(handler) for handler in route.handlers[:-1]]
        registrars[method](route.path, dependencies=dependencies)(route.handlers[-1])

    @staticmethod
    def get_https_host(settings: Settings) -> str:
        """HTTPS host: APP_HTTPS_HOST, else APP_HTTP_HOST, else "localhost"."""
        return settings.https_host
