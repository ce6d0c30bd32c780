"""
==============================================================================
Product Resolver Module
==============================================================================

Turns ranked candidate identifiers into products, cache first.

Per candidate (one task each, on a bounded worker pool):

    ┌───────────┐  hit   ┌──────────────┐
    │ cache.get │ ─────▶ │  contribute  │
    └─────┬─────┘        └──────────────┘
          │ miss                 ▲
    ┌─────▼──────────┐  found   │
    │ store.get_by_id│ ─▶ cache.put
    └─────┬──────────┘
          │ not found / lookup error
          ▼
        skip

All tasks are joined before the results are merged. Each result is
stored under the candidate's rank, so the merged list keeps index order.
Two concurrent misses on one identifier may both read the store and
both fill the cache; the last write wins.

==============================================================================
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Sequence

from product_search.catalog.cache import ProductCache
from product_search.catalog.models import Product
from product_search.core.exceptions import NotFoundError, StoreError


# Module logger
logger = logging.getLogger(__name__)


class ProductResolver:
    """
    Concurrent cache-aside resolver for search candidates.

    Attributes:
        _store: Product store (point lookups)
        _cache: Shared product cache
        _executor: Worker pool bounding the fan-out

    Example:
        >>> resolver = ProductResolver(store, cache, max_workers=8)
        >>> resolver.resolve([3, 1, 7], limit=50)
        [Product(id=3, ...), Product(id=1, ...)]
    """

    def __init__(self, store, cache: ProductCache, max_workers: int = 16) -> None:
        self._store = store
        self._cache = cache
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="resolver",
        )

    def resolve(self, candidate_ids: Sequence[int], limit: int) -> List[Product]:
        """
        Resolve candidates concurrently and merge the results.

        Candidates missing from the store, or whose lookup fails for any
        reason, are left out without raising. A failed cache fill still
        returns the product.

        Args:
            candidate_ids: Identifiers in rank order
            limit: Maximum number of products returned

        Returns:
            Resolved products in candidate order, at most limit of them
        """
        if limit <= 0 or not candidate_ids:
            return []

        resolved: Dict[int, Product] = {}
        resolved_lock = threading.Lock()

        def resolve_candidate(rank: int, product_id: int) -> None:
            product = self._resolve_one(product_id)
            if product is not None:
                with resolved_lock:
                    resolved[rank] = product

        futures = [
            self._executor.submit(resolve_candidate, rank, product_id)
            for rank, product_id in enumerate(candidate_ids)
        ]
        wait(futures)
        for future in futures:
            future.result()

        products = [resolved[rank] for rank in sorted(resolved)]
        if len(products) > limit:
            products = products[:limit]

        logger.debug(
            f"Resolved {len(products)} of {len(candidate_ids)} candidates"
        )
        return products

    def _resolve_one(self, product_id: int) -> Optional[Product]:
        product, found = self._cache.get(product_id)
        if found:
            return product

        try:
            product = self._store.get_by_id(product_id)
        except NotFoundError:
            logger.debug(f"Skipping stale candidate {product_id}")
            return None
        except StoreError as e:
            logger.warning(f"Lookup failed for candidate {product_id}: {e}")
            return None
        except Exception:
            logger.exception(f"Unexpected error resolving candidate {product_id}")
            return None

        try:
            self._cache.put(product.id, product)
        except Exception:
            logger.exception(f"Cache fill failed for product {product_id}")
        return product

    def close(self) -> None:
        """Stop the worker pool after in-flight lookups finish."""
        self._executor.shutdown(wait=True)
