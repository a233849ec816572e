# =============================================================================
# tests/test_database.py - Database Connector and Hook Tests
# =============================================================================

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.bootstrap import App, attach_hooks
from app.config import get_settings
from app.dependencies import DbSession
from app.integrations import DB, database_hook
from lib.database import Database, DatabaseError, is_memory_sqlite, is_sqlite


# =============================================================================
# Connector Tests
# =============================================================================

class TestDatabase:
    """Tests for the Database connector."""

    def test_url_helpers(self):
        assert is_sqlite("sqlite:///./app.db")
        assert not is_memory_sqlite("sqlite:///./app.db")
        assert is_memory_sqlite("sqlite://")
        assert not is_sqlite("postgresql://user@localhost/db")

    def test_ping(self, database):
        assert database.ping() is True

    def test_resolve_returns_engine(self, database):
        assert database.resolve() is database.engine

    def test_sessions_share_memory_database(self, database):
        with database.session() as session:
            session.execute(text("CREATE TABLE items (id INTEGER PRIMARY KEY)"))
            session.execute(text("INSERT INTO items (id) VALUES (1)"))
            session.commit()

        with database.session() as session:
            assert session.execute(text("SELECT count(*) FROM items")).scalar() == 1

    def test_file_database(self, clean_env):
        db = Database.new(f"sqlite:///{clean_env / 'app.db'}")
        try:
            assert db.ping() is True
            assert (clean_env / "app.db").exists()
        finally:
            db.close()

    def test_malformed_url(self):
        with pytest.raises(DatabaseError) as exc_info:
            Database.new("not a url")

        assert exc_info.value.code == "ENGINE_INIT_FAILED"
        assert "DATABASE_URL" in exc_info.value.suggestion


# =============================================================================
# Hook Tests
# =============================================================================

class TestDatabaseHook:
    """Tests for the request hook that attaches a session."""

    def _engine(self, hooks):
        engine = App().new_engine(get_settings())
        attach_hooks(engine, hooks)

        @engine.get("/one")
        def one(db: DbSession):
            return {"value": db.execute(text("SELECT 1")).scalar()}

        return engine

    def test_session_available_to_handlers(self, database):
        client = TestClient(self._engine([database_hook(database)]))

        response = client.get("/one")

        assert response.status_code == 200
        assert response.json() == {"value": 1}

    def test_session_closed_after_request(self, database):
        sessions = []
        original = database.session

        def tracking_session():
            session = original()
            sessions.append(session)
            return session

        database.session = tracking_session
        client = TestClient(self._engine([database_hook(database)]))

        client.get("/one")

        assert len(sessions) == 1
        assert not sessions[0].in_transaction()

    def test_missing_hook_is_service_unavailable(self):
        client = TestClient(self._engine([]))

        response = client.get("/one")

        assert response.status_code == 503
        assert response.json()["code"] == "SERVICE_UNAVAILABLE"

    def test_state_key(self, database):
        seen = {}
        engine = FastAPI()
        attach_hooks(engine, [database_hook(database)])

        @engine.get("/state")
        def state(request: Request):
            seen["db"] = getattr(request.state, DB)
            return {}

        TestClient(engine).get("/state")

        assert isinstance(seen["db"], Session)
