"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK, AUTOINCREMENT, never reused)                   │
    │ name (TEXT, NOT NULL)                                           │
    │ category (TEXT, NOT NULL)                                       │
    └─────────────────────────────────────────────────────────────────┘

==============================================================================
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from product_search.db.database import Base


class ProductRow(Base):
    """
    Persisted product record.

    The identifier is assigned by the database on insert and is never
    handed out again after the row is deleted.
    """

    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Store-assigned product identifier"
    )

    name: str = Column(
        Text,
        nullable=False,
        doc="Product display name (indexed for search)"
    )

    category: str = Column(
        Text,
        nullable=False,
        doc="Product category"
    )

    def __repr__(self) -> str:
        return f"ProductRow(id={self.id!r}, name={self.name!r})"
