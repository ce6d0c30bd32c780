"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides a throwaway SQLite database, a test client, and an in-memory
call-counting product store.

==============================================================================
"""

import os
import tempfile
import threading

# Point settings at a scratch database before the application is imported
_TEST_DB_DIR = tempfile.mkdtemp(prefix="product-search-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR}/test.db"
os.environ["DB_CONNECT_RETRY_DELAY"] = "0"
os.environ["DEBUG"] = "false"

import pytest
from typing import Dict, Generator, List, Set
from fastapi.testclient import TestClient

from product_search.main import app
from product_search.catalog import Product, ProductCatalog, ProductStore
from product_search.core.exceptions import NotFoundError, StoreError
from product_search.db import DatabaseInitializer, DatabaseManager


# ============================================================================
# STUB STORE
# ============================================================================

class CountingStore:
    """
    Dictionary-backed store recording every call it receives.

    Identifiers listed in fail_ids raise StoreError on lookup; setting
    fail_inserts makes insert raise StoreError.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: Dict[int, Product] = {}
        self._next_id = 1
        self.fail_ids: Set[int] = set()
        self.fail_inserts = False
        self.get_calls: List[int] = []

    def insert(self, name: str, category: str) -> int:
        with self._lock:
            if self.fail_inserts:
                raise StoreError("Store insert failed", "insert")
            product_id = self._next_id
            self._next_id += 1
            self._rows[product_id] = Product(id=product_id, name=name, category=category)
            return product_id

    def get_by_id(self, product_id: int) -> Product:
        with self._lock:
            self.get_calls.append(product_id)
            if product_id in self.fail_ids:
                raise StoreError("Store get failed", "get")
            product = self._rows.get(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return product

    def delete_by_id(self, product_id: int) -> None:
        with self._lock:
            if self._rows.pop(product_id, None) is None:
                raise NotFoundError(product_id)

    def list_all(self) -> List[Product]:
        with self._lock:
            return [self._rows[key] for key in sorted(self._rows)]

    def calls_for(self, product_id: int) -> int:
        with self._lock:
            return self.get_calls.count(product_id)


@pytest.fixture
def counting_store() -> CountingStore:
    """Empty call-counting store."""
    return CountingStore()


@pytest.fixture
def catalog(counting_store: CountingStore) -> Generator[ProductCatalog, None, None]:
    """Catalog over the call-counting store."""
    product_catalog = ProductCatalog(counting_store, cache_size=100, max_workers=4)
    product_catalog.bootstrap()
    try:
        yield product_catalog
    finally:
        product_catalog.close()


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def db_manager() -> DatabaseManager:
    """Database manager with freshly recreated tables."""
    manager = DatabaseManager()
    DatabaseInitializer(manager).reset()
    return manager


@pytest.fixture
def store(db_manager: DatabaseManager) -> ProductStore:
    """SQLAlchemy product store over the scratch database."""
    return ProductStore(db_manager.session_factory)


@pytest.fixture(scope="function")
def client(db_manager: DatabaseManager) -> Generator[TestClient, None, None]:
    """Test client; the lifespan builds the catalog from the empty database."""
    with TestClient(app) as test_client:
        yield test_client
