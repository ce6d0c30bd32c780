"""
==============================================================================
Product Catalog Module
==============================================================================

Facade owning the store, search index, cache, resolver and mutator.

One catalog is built at startup, populated from the store's current
contents, kept on the application state and closed at shutdown.

Read path:
---------
    query ──▶ SearchIndex.query ──▶ ProductResolver.resolve ──▶ products

Write path:
----------
    create / delete ──▶ ProductMutator

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from product_search.catalog.cache import ProductCache
from product_search.catalog.index import SearchIndex
from product_search.catalog.models import Product
from product_search.catalog.mutator import ProductMutator
from product_search.catalog.resolver import ProductResolver
from product_search.catalog.store import ProductStore
from product_search.config import Settings, get_settings
from product_search.core.exceptions import InvalidQueryError, SearchIndexError, StoreError


# Module logger
logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Searchable, cached product catalog.

    Attributes:
        store: Durable product store
        index: In-memory name index
        cache: LRU product cache
        default_limit: Result bound used when search gets none

    Example:
        >>> catalog = ProductCatalog(store, cache_size=1000)
        >>> catalog.bootstrap()
        >>> laptop = catalog.create("Pro Laptop", "Computers")
        >>> [p.id for p in catalog.search("pro")]
        [1]
    """

    def __init__(
        self,
        store,
        cache_size: int = 10000,
        max_workers: int = 16,
        default_limit: int = 50,
        index: Optional[SearchIndex] = None,
    ) -> None:
        self.store = store
        self.index = index or SearchIndex()
        self.cache = ProductCache(cache_size)
        self.default_limit = default_limit
        self._resolver = ProductResolver(self.store, self.cache, max_workers)
        self._mutator = ProductMutator(self.store, self.index, self.cache)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def bootstrap(self) -> int:
        """
        Index every product currently in the store.

        Returns:
            Number of products indexed

        Raises:
            SearchIndexError: If the store could not be scanned or a row
                could not be read as a product
        """
        try:
            products = self.store.list_all()
        except (StoreError, ValidationError) as e:
            raise SearchIndexError(f"Failed to load search index: {e}") from e

        return self.index.build(products)

    def close(self) -> None:
        """Release the resolver worker pool."""
        self._resolver.close()

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def search(self, query: str, limit: Optional[int] = None) -> List[Product]:
        """
        Find products whose names match the query.

        Args:
            query: Free-text search
            limit: Maximum results (default_limit if None)

        Returns:
            Best-effort list of at most limit products

        Raises:
            InvalidQueryError: If query is empty
        """
        if not query or not query.strip():
            raise InvalidQueryError()

        limit = self.default_limit if limit is None else limit
        candidates = self.index.query(query, limit)
        return self._resolver.resolve(candidates, limit)

    def create(self, name: str, category: str) -> Product:
        """Create a product; see ProductMutator.create."""
        return self._mutator.create(name, category)

    def delete(self, product_id: int) -> None:
        """Delete a product; see ProductMutator.delete."""
        self._mutator.delete(product_id)

    def stats(self) -> Dict:
        """Index and cache statistics."""
        return {
            "indexed_products": len(self.index),
            "cache": self.cache.stats(),
        }


# =============================================================================
# FACTORY
# =============================================================================

def build_catalog(
    session_factory: Callable[[], Session],
    settings: Optional[Settings] = None
) -> ProductCatalog:
    """
    Create and populate the catalog for a database.

    Args:
        session_factory: SQLAlchemy session factory for the store
        settings: Application settings (global settings if None)

    Returns:
        Bootstrapped ProductCatalog
    """
    settings = settings or get_settings()

    catalog = ProductCatalog(
        ProductStore(session_factory),
        cache_size=settings.cache_size,
        max_workers=settings.resolver_max_workers,
        default_limit=settings.search_default_limit,
    )
    try:
        count = catalog.bootstrap()
    except SearchIndexError:
        catalog.close()
        raise

    logger.info(
        f"✅ Catalog ready: {count} products indexed, "
        f"cache capacity {settings.cache_size}"
    )
    return catalog
