# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Every test runs in its own working directory with a clean environment
# - Root logging is restored after tests that reconfigure it
# - Listeners are recorded instead of started
# =============================================================================

import logging

import pytest

from app.bootstrap import App
from lib.database import Database

# Variables the application reads; cleared before every test
APP_ENV_VARS = (
    "MODE",
    "PORT",
    "APP_NAME",
    "LOG_FILE",
    "APP_HTTP_HOST",
    "APP_HTTPS_ON",
    "APP_REDIRECT_HTTP_TO_HTTPS",
    "APP_HTTPS_HOST",
    "APP_ALLOWED_HOSTS",
    "APP_HTTPS_CERT_FILE_PATH",
    "APP_HTTPS_KEY_FILE_PATH",
    "DATABASE_URL",
    "DATABASE_ECHO",
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test in an empty directory with no application variables set."""
    for name in APP_ENV_VARS:
        # setenv first so monkeypatch also undoes values a .env file loads
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging() so tests don't leak handlers."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def database():
    """In-memory SQLite connector."""
    db = Database.new("sqlite://")
    yield db
    db.close()


@pytest.fixture
def served():
    """List of listeners passed to the fake serve function."""
    return []


@pytest.fixture
def application(served):
    """App that records listeners instead of starting uvicorn."""
    return App(serve_listener=served.append)


@pytest.fixture
def bootstrapped(application, database):
    """Bootstrapped App backed by the in-memory database."""
    application.bootstrap(database=database)
    return application


@pytest.fixture
def tls_files(tmp_path):
    """Placeholder certificate and key files."""
    cert = tmp_path / "cert.pem"
    key = tmp_path / "key.pem"
    cert.write_text("certificate")
    key.write_text("key")
    return str(cert), str(key)
