"""
==============================================================================
Product Cache Module
==============================================================================

Bounded LRU cache of products keyed by identifier.

Locking:
-------
- get / stats: shared lock, plus a recency mutex
- put / remove: exclusive lock

A hit moves the entry to the most-recent end, so gets take the recency
mutex for the whole lookup and run one at a time. The shared lock only
lets them overlap with len() and keeps them out while a put or remove
holds the exclusive side.

Absence from the cache says nothing about the store: entries can be
evicted at any time.

==============================================================================
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Dict, Optional, Tuple

from product_search.catalog.models import Product
from product_search.core.locks import ReadWriteLock


# Module logger
logger = logging.getLogger(__name__)


class ProductCache:
    """
    Thread-safe least-recently-used product cache.

    Attributes:
        capacity: Maximum number of entries held

    Example:
        >>> cache = ProductCache(capacity=2)
        >>> cache.put(1, product)
        >>> cache.get(1)
        (Product(id=1, ...), True)
        >>> cache.get(99)
        (None, False)
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("Cache capacity must be positive")

        self.capacity = capacity
        self._entries: "OrderedDict[int, Product]" = OrderedDict()
        self._lock = ReadWriteLock()
        self._recency_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def get(self, product_id: int) -> Tuple[Optional[Product], bool]:
        """
        Look up a product without touching the store.

        Returns:
            (product, True) on hit, (None, False) on miss
        """
        with self._lock.read_locked():
            with self._recency_lock:
                product = self._entries.get(product_id)
                if product is None:
                    self._misses += 1
                    return None, False
                self._entries.move_to_end(product_id)
                self._hits += 1
                return product, True

    def put(self, product_id: int, product: Product) -> None:
        """Insert or replace an entry, evicting the oldest when full."""
        with self._lock.write_locked():
            self._entries[product_id] = product
            self._entries.move_to_end(product_id)
            while len(self._entries) > self.capacity:
                evicted_id, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted product {evicted_id} from cache")

    def remove(self, product_id: int) -> None:
        """Drop an entry; unknown ids are ignored."""
        with self._lock.write_locked():
            self._entries.pop(product_id, None)

    def stats(self) -> Dict[str, int]:
        """Current size, capacity and hit/miss counters."""
        with self._lock.read_locked():
            with self._recency_lock:
                return {
                    "size": len(self._entries),
                    "capacity": self.capacity,
                    "hits": self._hits,
                    "misses": self._misses,
                }
