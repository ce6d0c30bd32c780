"""
==============================================================================
Catalog Package - Product Search
==============================================================================

Searchable, cached product catalog backed by the database.

Classes:
--------
- Product: Pydantic model for products
- ProductStore: SQLAlchemy persistence
- SearchIndex: In-memory name index
- ProductCache: LRU cache with reader/writer locking
- ProductResolver: Concurrent cache-aside candidate resolution
- ProductMutator: Create/delete across store, index and cache
- ProductCatalog: Facade over all of the above

==============================================================================
"""

from .models import Product
from .store import ProductStore
from .index import SearchIndex, analyze
from .cache import ProductCache
from .resolver import ProductResolver
from .mutator import ProductMutator
from .catalog import ProductCatalog, build_catalog

__all__ = [
    "Product",
    "ProductStore",
    "SearchIndex",
    "analyze",
    "ProductCache",
    "ProductResolver",
    "ProductMutator",
    "ProductCatalog",
    "build_catalog",
]
