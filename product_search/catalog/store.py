"""
==============================================================================
Product Store Module
==============================================================================

Durable key-value-by-identifier persistence for products.

Every operation runs in its own short-lived session taken from the
shared session factory, so one store instance may be used from many
threads at once. SQLAlchemy failures surface as StoreError; missing
rows surface as NotFoundError.

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Generator, List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from product_search.catalog.models import Product
from product_search.core.exceptions import NotFoundError, StoreError
from product_search.db.models import ProductRow


# Module logger
logger = logging.getLogger(__name__)


class ProductStore:
    """
    SQLAlchemy-backed product store.

    Attributes:
        _session_factory: Callable returning a new Session

    Example:
        >>> store = ProductStore(DatabaseManager().session_factory)
        >>> product_id = store.insert("Pro Laptop", "Computers")
        >>> store.get_by_id(product_id).name
        'Pro Laptop'
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Generator[Session, None, None]:
        """Transactional scope that maps driver failures to StoreError."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError(f"Store {operation} failed", operation) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def insert(self, name: str, category: str) -> int:
        """
        Persist a new product.

        Returns:
            The identifier assigned by the database

        Raises:
            StoreError: If the insert failed
        """
        with self._session("insert") as session:
            row = ProductRow(name=name, category=category)
            session.add(row)
            session.flush()
            product_id = row.id

        logger.debug(f"Inserted product {product_id}")
        return product_id

    def get_by_id(self, product_id: int) -> Product:
        """
        Point lookup by identifier.

        Raises:
            NotFoundError: If no row has this identifier
            StoreError: If the lookup failed
        """
        with self._session("get") as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise NotFoundError(product_id)
            return Product.model_validate(row)

    def delete_by_id(self, product_id: int) -> None:
        """
        Delete a product by identifier.

        Raises:
            NotFoundError: If no row has this identifier
            StoreError: If the delete failed
        """
        with self._session("delete") as session:
            result = session.execute(
                delete(ProductRow).where(ProductRow.id == product_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(product_id)

        logger.debug(f"Deleted product {product_id}")

    def list_all(self) -> List[Product]:
        """Load every product, used to build the search index at startup."""
        with self._session("scan") as session:
            rows = session.scalars(select(ProductRow).order_by(ProductRow.id))
            return [Product.model_validate(row) for row in rows]
