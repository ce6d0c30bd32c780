"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - ProductRow ORM model
└── init_db.py    - DatabaseInitializer for setup

==============================================================================
"""

from .database import DatabaseManager, Base, get_database_manager, get_db
from .models import ProductRow
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "get_database_manager",
    "get_db",
    # Models
    "ProductRow",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
