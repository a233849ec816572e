# =============================================================================
# lib/database.py - Database Connector
# =============================================================================
# Creates the SQLAlchemy engine and session factory the application shares.
# The bootstrapper opens the connector once and exposes it to request
# handlers through the database integration hook (see app/integrations.py).
#
# Usage:
#   from lib.database import Database
#   database = Database.new("sqlite:///./app.db")
#   with database.session() as session:
#       session.execute(text("SELECT 1"))
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lib.utils import ApplicationError

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

logger = logging.getLogger(__name__)

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}


class DatabaseError(ApplicationError):
    """Raised when the database connector cannot be created or used."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code=kwargs.pop("code", "DATABASE_ERROR"), **kwargs)


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given URL points at a SQLite database."""
    return make_url(str(url)).get_backend_name() in SQLITE_NAMES


def is_memory_sqlite(url: str | URL) -> bool:
    """Return True for SQLite URLs without a file path (``sqlite://``)."""
    u = make_url(str(url))
    return is_sqlite(u) and u.database in (None, "", ":memory:")


class Database:
    """
    Wrapper around a SQLAlchemy engine and its session factory.

    One instance is created during bootstrap and handed to whatever needs
    a connection. Nothing here is global; tests build their own instance.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessionmaker = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def new(cls, url: str | URL, *, echo: bool = False) -> Database:
        """
        Open a connector for ``url``.

        SQLite connections get ``foreign_keys=ON``. In-memory SQLite uses a
        single shared connection so every session sees the same database.

        Raises:
            DatabaseError: If the URL is malformed or the driver is missing
        """
        kwargs = {}
        try:
            if is_memory_sqlite(url):
                kwargs = {
                    "connect_args": {"check_same_thread": False},
                    "poolclass": StaticPool,
                }
            engine = create_engine(url, echo=echo, **kwargs)
        except (ArgumentError, ImportError) as e:
            raise DatabaseError(
                f"Failed to create database engine: {e}",
                code="ENGINE_INIT_FAILED",
                suggestion="Check DATABASE_URL and that the matching driver is installed",
            ) from e

        if is_sqlite(url):

            @event.listens_for(engine, "connect")
            def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # noqa: ARG001
                cur = dbapi_conn.cursor()
                cur.execute("PRAGMA foreign_keys=ON;")
                cur.close()

        logger.info(f"Database engine created for backend: {engine.url.get_backend_name()}")
        return cls(engine)

    def resolve(self) -> Engine:
        """Return the underlying engine."""
        return self.engine

    def session(self) -> Session:
        """Open a new ORM session. Callers are responsible for closing it."""
        return self._sessionmaker()

    def ping(self) -> bool:
        """
        Check that the database answers a trivial query.

        Returns:
            bool: True if ``SELECT 1`` succeeded
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def close(self) -> None:
        """Dispose of all pooled connections."""
        self.engine.dispose()
