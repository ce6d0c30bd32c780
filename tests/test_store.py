"""
==============================================================================
Product Store Tests
==============================================================================

SQLAlchemy-backed store against the scratch SQLite database.

==============================================================================
"""

import pytest
from sqlalchemy.exc import OperationalError

from product_search.catalog import ProductStore
from product_search.core.exceptions import NotFoundError, StoreError


class TestProductStore:
    """Tests for ProductStore."""

    def test_insert_assigns_increasing_ids(self, store: ProductStore):
        first = store.insert("iPhone 15 Pro", "Electronics")
        second = store.insert("AirPods Pro", "Audio")
        assert (first, second) == (1, 2)

    def test_get_by_id(self, store: ProductStore):
        product_id = store.insert("iPhone 15 Pro", "Electronics")

        product = store.get_by_id(product_id)

        assert product.id == product_id
        assert product.name == "iPhone 15 Pro"
        assert product.category == "Electronics"

    def test_get_missing_raises_not_found(self, store: ProductStore):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_by_id(42)
        assert exc_info.value.status_code == 404

    def test_delete(self, store: ProductStore):
        product_id = store.insert("Widget", "Tools")

        store.delete_by_id(product_id)

        with pytest.raises(NotFoundError):
            store.get_by_id(product_id)

    def test_delete_missing_raises_not_found(self, store: ProductStore):
        with pytest.raises(NotFoundError):
            store.delete_by_id(42)

    def test_ids_are_not_reused_after_delete(self, store: ProductStore):
        product_id = store.insert("Widget", "Tools")
        store.delete_by_id(product_id)

        assert store.insert("Gadget", "Tools") == product_id + 1

    def test_list_all(self, store: ProductStore):
        store.insert("Widget", "Tools")
        store.insert("Gadget", "Tools")

        assert [p.name for p in store.list_all()] == ["Widget", "Gadget"]

    def test_driver_failure_becomes_store_error(self):
        class BrokenSession:
            def get(self, *args, **kwargs):
                raise OperationalError("SELECT", {}, Exception("connection lost"))

            def rollback(self):
                pass

            def close(self):
                pass

        broken_store = ProductStore(lambda: BrokenSession())

        with pytest.raises(StoreError) as exc_info:
            broken_store.get_by_id(1)
        assert exc_info.value.code == "STORE_ERROR"
