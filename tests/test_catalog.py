"""
==============================================================================
Product Catalog Tests
==============================================================================

Write-path consistency across store, index and cache, and the search
flow built on top of it.

==============================================================================
"""

import pytest

from product_search.catalog import Product, ProductCatalog, ProductStore
from product_search.core.exceptions import (
    InvalidQueryError,
    NotFoundError,
    SearchIndexError,
    StoreError,
)


class TestCreate:
    """Tests for ProductCatalog.create."""

    def test_create_updates_store_index_and_cache(self, catalog: ProductCatalog, counting_store):
        product = catalog.create("Pro Laptop", "Computers")

        assert counting_store.get_by_id(product.id) == product
        assert product.id in catalog.index
        assert catalog.cache.get(product.id) == (product, True)

    def test_created_product_is_searchable(self, catalog: ProductCatalog):
        product = catalog.create("Pro Laptop", "Computers")
        assert product.id in [p.id for p in catalog.search("Pro")]

    def test_store_failure_leaves_index_and_cache_untouched(self, catalog: ProductCatalog, counting_store):
        counting_store.fail_inserts = True

        with pytest.raises(StoreError):
            catalog.create("Pro Laptop", "Computers")

        assert len(catalog.index) == 0
        assert catalog.cache.stats()["size"] == 0

    def test_index_failure_does_not_fail_create(self, catalog: ProductCatalog, counting_store, monkeypatch):
        def broken_upsert(product_id, name):
            raise RuntimeError("index unavailable")

        monkeypatch.setattr(catalog.index, "upsert", broken_upsert)

        product = catalog.create("Pro Laptop", "Computers")

        assert counting_store.get_by_id(product.id) == product
        assert catalog.cache.get(product.id) == (product, True)


class TestDelete:
    """Tests for ProductCatalog.delete."""

    def test_delete_removes_from_all_three(self, catalog: ProductCatalog, counting_store):
        product = catalog.create("Widget", "Tools")

        catalog.delete(product.id)

        with pytest.raises(NotFoundError):
            counting_store.get_by_id(product.id)
        assert product.id not in catalog.index
        assert catalog.cache.get(product.id) == (None, False)

    def test_delete_absent_id_raises_and_keeps_index_and_cache(self, catalog: ProductCatalog, counting_store):
        product = catalog.create("Widget", "Tools")
        counting_store._rows.pop(product.id)

        with pytest.raises(NotFoundError):
            catalog.delete(product.id)

        assert product.id in catalog.index
        assert catalog.cache.get(product.id) == (product, True)

    def test_deleted_product_not_returned_from_stale_index(self, catalog: ProductCatalog):
        product = catalog.create("Widget", "Tools")
        catalog.delete(product.id)

        # Simulate an index that has not caught up with the delete
        catalog.index.upsert(product.id, product.name)

        assert product.id not in [p.id for p in catalog.search("widget")]

    def test_cache_and_index_remove_absent_ids(self, catalog: ProductCatalog):
        product = catalog.create("Widget", "Tools")

        catalog.cache.remove(12345)
        catalog.index.remove(12345)

        assert catalog.cache.get(product.id) == (product, True)
        assert [p.id for p in catalog.search("widget")] == [product.id]


class TestSearch:
    """Tests for ProductCatalog.search."""

    def test_iphone_airpods_scenario(self, catalog: ProductCatalog):
        iphone = catalog.create("iPhone 15 Pro", "Electronics")
        airpods = catalog.create("AirPods Pro", "Audio")
        assert (iphone.id, airpods.id) == (1, 2)

        results = catalog.search("pro", limit=50)
        assert len(results) == 2
        assert {p.id for p in results} == {1, 2}

        catalog.delete(1)

        assert catalog.search("pro", limit=50) == [airpods]

    @pytest.mark.parametrize("query", ["", "  "])
    def test_empty_query_raises(self, catalog: ProductCatalog, query: str):
        with pytest.raises(InvalidQueryError):
            catalog.search(query)

    def test_default_limit_applies(self, counting_store):
        small = ProductCatalog(counting_store, cache_size=10, max_workers=2, default_limit=3)
        try:
            for n in range(6):
                small.create(f"Cable {n}", "Accessories")
            assert len(small.search("cable")) == 3
        finally:
            small.close()

    def test_search_served_from_cache_after_first_read(self, catalog: ProductCatalog, counting_store):
        product_id = counting_store.insert("Desk Lamp", "Home")
        catalog.index.upsert(product_id, "Desk Lamp")

        catalog.search("lamp")
        catalog.search("lamp")

        assert counting_store.calls_for(product_id) == 1


class TestBootstrap:
    """Tests for building the index from the store."""

    def test_bootstrap_indexes_existing_products(self, counting_store):
        counting_store.insert("Mechanical Keyboard", "Computers")
        counting_store.insert("Wireless Mouse", "Computers")

        product_catalog = ProductCatalog(counting_store, cache_size=10, max_workers=2)
        try:
            assert product_catalog.bootstrap() == 2
            assert [p.name for p in product_catalog.search("keyboard")] == ["Mechanical Keyboard"]
        finally:
            product_catalog.close()

    def test_bootstrap_store_failure_raises_index_error(self, counting_store, monkeypatch):
        def broken_scan():
            raise StoreError("Store scan failed", "scan")

        monkeypatch.setattr(counting_store, "list_all", broken_scan)
        product_catalog = ProductCatalog(counting_store, cache_size=10, max_workers=2)
        try:
            with pytest.raises(SearchIndexError):
                product_catalog.bootstrap()
        finally:
            product_catalog.close()

    def test_bootstrap_unreadable_row_raises_index_error(self, counting_store, monkeypatch):
        def corrupt_scan():
            return [Product(id="not-a-number", name="Broken", category="Misc")]

        monkeypatch.setattr(counting_store, "list_all", corrupt_scan)
        product_catalog = ProductCatalog(counting_store, cache_size=10, max_workers=2)
        try:
            with pytest.raises(SearchIndexError):
                product_catalog.bootstrap()
        finally:
            product_catalog.close()


class TestDatabaseBackedCatalog:
    """Catalog over the SQLAlchemy store."""

    def test_create_with_empty_name_returns_stored_product(self, store: ProductStore):
        product_catalog = ProductCatalog(store, cache_size=10, max_workers=2)
        try:
            product = product_catalog.create("", "Misc")

            assert store.get_by_id(product.id) == product
            assert product_catalog.cache.get(product.id) == (product, True)
        finally:
            product_catalog.close()

    def test_bootstrap_tolerates_rows_with_empty_names(self, store: ProductStore):
        store.insert("", "Misc")
        store.insert("Wireless Mouse", "Computers")

        product_catalog = ProductCatalog(store, cache_size=10, max_workers=2)
        try:
            assert product_catalog.bootstrap() == 2
            assert [p.name for p in product_catalog.search("mouse")] == ["Wireless Mouse"]
        finally:
            product_catalog.close()
