"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException hierarchy and error factory functions
- locks: ReadWriteLock used to guard the product cache

Usage:
------
    from product_search.core import AppException, NotFoundError

    from product_search.core import exceptions
    raise exceptions.invalid_product_id("abc")

==============================================================================
"""

from .exceptions import (
    AppException,
    InvalidQueryError,
    NotFoundError,
    SearchIndexError,
    StoreError,
    register_exception_handlers,
)
from .locks import ReadWriteLock

__all__ = [
    # Exceptions
    "AppException",
    "InvalidQueryError",
    "NotFoundError",
    "SearchIndexError",
    "StoreError",
    "register_exception_handlers",
    # Locks
    "ReadWriteLock",
]
