"""
==============================================================================
Database Initialization Module
==============================================================================

Initialization Flow:
-------------------
1. Wait for the database to accept connections (bounded retries)
2. Create all tables from ORM models
3. Log initialization status

Usage:
------
    from product_search.db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from product_search.config import get_settings
from product_search.core.exceptions import StoreError
from product_search.db.database import DatabaseManager


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Attributes:
        _db_manager: DatabaseManager instance
        _settings: Application settings

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._db_manager = db_manager or DatabaseManager()
        self._settings = get_settings()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables from ORM models (idempotent)."""
        logger.info("Creating database tables...")
        self._db_manager.create_tables()
        logger.info("✅ Database tables created successfully")

    def reset(self) -> None:
        """
        Reset the database to initial state.

        WARNING: This deletes all data. Use only for development/testing.
        """
        if self._settings.is_production:
            logger.error("Cannot reset database in production!")
            raise RuntimeError("Database reset not allowed in production")

        logger.warning("RESETTING DATABASE - ALL DATA WILL BE LOST")
        self._db_manager.reset_database()

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """
        Perform full database initialization.

        Raises:
            StoreError: If the database never became reachable
        """
        logger.info("Initializing database...")

        if not self._db_manager.wait_for_connection():
            raise StoreError("Failed to connect to database", "connect")

        self.create_tables()
        logger.info("Database initialization complete")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def init_db() -> None:
    """Initialize the database at application startup."""
    initializer = DatabaseInitializer()
    initializer.initialize()
