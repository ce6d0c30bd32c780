"""
==============================================================================
Database Initialization Tests
==============================================================================
"""

import pytest

from product_search.core.exceptions import StoreError
from product_search.db import DatabaseInitializer, DatabaseManager


class TestDatabaseStartup:
    """Tests for connection retries and initialization."""

    def test_wait_for_connection_succeeds(self, db_manager: DatabaseManager):
        assert db_manager.wait_for_connection(retries=2, delay=0) is True

    def test_wait_for_connection_retries_then_gives_up(self, db_manager: DatabaseManager, monkeypatch):
        attempts = []

        def unreachable() -> bool:
            attempts.append(1)
            return False

        monkeypatch.setattr(db_manager, "verify_connection", unreachable)

        assert db_manager.wait_for_connection(retries=3, delay=0) is False
        assert len(attempts) == 3

    def test_wait_for_connection_with_zero_retries_makes_no_attempt(self, db_manager: DatabaseManager, monkeypatch):
        attempts = []

        def reachable() -> bool:
            attempts.append(1)
            return True

        monkeypatch.setattr(db_manager, "verify_connection", reachable)

        assert db_manager.wait_for_connection(retries=0, delay=0) is False
        assert attempts == []

    def test_initialize_fails_when_database_unreachable(self, db_manager: DatabaseManager, monkeypatch):
        monkeypatch.setattr(db_manager, "wait_for_connection", lambda: False)

        with pytest.raises(StoreError):
            DatabaseInitializer(db_manager).initialize()
