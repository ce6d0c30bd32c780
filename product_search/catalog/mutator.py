"""
==============================================================================
Product Mutator Module
==============================================================================

Write path shared by the store, the search index and the cache.

    create: store.insert → index.upsert → cache.put
    delete: store.delete_by_id → index.remove → cache.remove

The store is the source of truth. Its errors reach the caller and stop
the sequence before the index or cache is touched. Once the store write
has committed, index and cache failures are logged only; the next
read-through miss repairs the cache and the resolver skips identifiers
the store no longer has.

==============================================================================
"""

from __future__ import annotations

import logging

from product_search.catalog.cache import ProductCache
from product_search.catalog.index import SearchIndex
from product_search.catalog.models import Product


# Module logger
logger = logging.getLogger(__name__)


class ProductMutator:
    """
    Applies create and delete across store, index and cache.

    No lock spans the three; concurrent writes to the same identifier
    are ordered by the store alone.

    Example:
        >>> mutator = ProductMutator(store, index, cache)
        >>> product = mutator.create("Pro Laptop", "Computers")
        >>> mutator.delete(product.id)
    """

    def __init__(self, store, index: SearchIndex, cache: ProductCache) -> None:
        self._store = store
        self._index = index
        self._cache = cache

    def create(self, name: str, category: str) -> Product:
        """
        Persist a product, then make it searchable and cached.

        Returns:
            The created product with its store-assigned identifier

        Raises:
            StoreError: If the insert failed (index and cache untouched)
        """
        product_id = self._store.insert(name, category)
        product = Product(id=product_id, name=name, category=category)

        try:
            self._index.upsert(product.id, product.name)
        except Exception:
            logger.exception(f"Index update failed for new product {product.id}")

        try:
            self._cache.put(product.id, product)
        except Exception:
            logger.exception(f"Cache update failed for new product {product.id}")

        logger.info(f"✅ Product created: {product.id} ({product.name})")
        return product

    def delete(self, product_id: int) -> None:
        """
        Delete a product from the store, then from index and cache.

        Raises:
            NotFoundError: If the store has no such product
            StoreError: If the delete failed
        """
        self._store.delete_by_id(product_id)

        try:
            self._index.remove(product_id)
        except Exception:
            logger.exception(f"Index removal failed for product {product_id}")

        try:
            self._cache.remove(product_id)
        except Exception:
            logger.exception(f"Cache removal failed for product {product_id}")

        logger.info(f"🗑️ Product deleted: {product_id}")
