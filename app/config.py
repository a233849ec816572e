# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.APP_HTTPS_ON)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. The .env file bootstrap loads into the process environment (lib/env.py)
#
# Settings are built when the application starts serving, after bootstrap has
# loaded the .env file, and are not re-read while the process runs.
# =============================================================================

import os
from enum import Enum

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from lib.utils import ApplicationError

DEFAULT_PORT = "80"
HTTPS_PORT = 443


class ConfigurationError(ApplicationError):
    """Raised when settings are present but unusable."""

    def __init__(self, message: str, suggestion: str | None = None, details: dict | None = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            suggestion=suggestion,
            details=details,
        )


class RunMode(str, Enum):
    """Execution mode of the HTTP engine."""

    DEBUG = "debug"
    TEST = "test"
    RELEASE = "release"


def resolve_run_mode(value: str | None = None) -> RunMode:
    """
    Map the MODE variable to a RunMode.

    Anything other than "release" or "test" (including unset) means debug.
    """
    if value is None:
        value = os.environ.get("MODE", "")
    if value == RunMode.RELEASE.value:
        return RunMode.RELEASE
    if value == RunMode.TEST.value:
        return RunMode.TEST
    return RunMode.DEBUG


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types (boolean flags must look like booleans)
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    APP_NAME: str = Field(
        default="Webcoat",
        description="Name shown in the welcome message and API docs"
    )

    LOG_FILE: str = Field(
        default="logs/app.log",
        description="File that receives a copy of all log output"
    )

    # -------------------------------------------------------------------------
    # HTTP / HTTPS
    # -------------------------------------------------------------------------

    APP_HTTP_HOST: str = Field(
        default="",
        description="Host name the plain HTTP listener is reachable at"
    )

    APP_HTTPS_ON: bool = Field(
        default=False,
        description="Start a TLS listener on port 443"
    )

    APP_REDIRECT_HTTP_TO_HTTPS: bool = Field(
        default=False,
        description="Answer plain HTTP with redirects to the HTTPS host"
    )

    APP_HTTPS_HOST: str = Field(
        default="",
        description="Host name advertised for HTTPS (falls back to APP_HTTP_HOST)"
    )

    APP_ALLOWED_HOSTS: str = Field(
        default="",
        description="Host names the redirect listener accepts (comma-separated, empty accepts any)"
    )

    APP_HTTPS_CERT_FILE_PATH: str = Field(
        default="",
        description="PEM certificate used by the TLS listener"
    )

    APP_HTTPS_KEY_FILE_PATH: str = Field(
        default="",
        description="PEM private key used by the TLS listener"
    )

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------

    DATABASE_URL: str = Field(
        default="sqlite:///./app.db",
        description="SQLAlchemy database URL"
    )

    DATABASE_ECHO: bool = Field(
        default=False,
        description="Log every SQL statement"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # No env_file: lib.env loads the chosen .env into os.environ, which is
        # the only source read here
        #
        # Empty values fall back to defaults, so APP_HTTPS_ON="" means off
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def https_host(self) -> str:
        """
        Host advertised for HTTPS.

        Prefers APP_HTTPS_HOST, then APP_HTTP_HOST, then "localhost".
        """
        return self.APP_HTTPS_HOST or self.APP_HTTP_HOST or "localhost"

    @property
    def allowed_hosts_list(self) -> list[str] | None:
        """
        Parse APP_ALLOWED_HOSTS into a list, or None when unset.

        Example: "example.com, www.example.com" -> ["example.com", "www.example.com"]
        """
        hosts = [host.strip() for host in self.APP_ALLOWED_HOSTS.split(",") if host.strip()]
        return hosts or None


def get_settings() -> Settings:
    """
    Build Settings from the current environment.

    Not cached: settings are read once per run, after bootstrap has loaded
    the .env file.

    Raises:
        ConfigurationError: If a value can't be parsed (e.g. APP_HTTPS_ON=maybe)
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration value for: {', '.join(fields)}",
            suggestion="Boolean flags accept true/false, 1/0, yes/no or on/off",
            details={"fields": fields},
        ) from e
