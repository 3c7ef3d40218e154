"""Tests for leadcheck.database — session factory + pool lifecycle."""
from unittest.mock import MagicMock

from sqlalchemy.orm import Session

from leadcheck.database import DatabaseLifecycle, get_session


class TestGetSession:

    def test_returns_new_session_each_call(self):
        first = get_session()
        second = get_session()
        try:
            assert isinstance(first, Session)
            assert first is not second
        finally:
            first.close()
            second.close()


class TestDatabaseLifecycle:

    def test_shutdown_disposes_engine(self):
        engine = MagicMock()
        lifecycle = DatabaseLifecycle(engine)
        lifecycle.shutdown()
        engine.dispose.assert_called_once()
        assert lifecycle.closed is True

    def test_second_shutdown_is_noop(self):
        engine = MagicMock()
        lifecycle = DatabaseLifecycle(engine)
        lifecycle.shutdown()
        lifecycle.shutdown()
        engine.dispose.assert_called_once()

    def test_failed_dispose_leaves_lifecycle_open(self):
        engine = MagicMock()
        engine.dispose.side_effect = RuntimeError("socket closed")
        lifecycle = DatabaseLifecycle(engine)
        lifecycle.shutdown()
        assert lifecycle.closed is False

    def test_defaults_to_module_engine(self):
        from leadcheck.database import engine
        assert DatabaseLifecycle().engine is engine

    def test_starts_open(self):
        assert DatabaseLifecycle(MagicMock()).closed is False
