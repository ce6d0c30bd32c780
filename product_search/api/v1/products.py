"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Search, create and delete products.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from product_search.catalog.catalog import ProductCatalog
from product_search.catalog.models import Product
from product_search.config import get_settings
from product_search.core import exceptions
from product_search.core.dependencies import get_catalog
from product_search.schemas.product import (
    CatalogStatsResponse,
    ProductCreate,
    ProductSearchResponse,
)


router = APIRouter(prefix="/products", tags=["Products"])

_settings = get_settings()


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, catalog: ProductCatalog):
        self._catalog = catalog

    def search(self, query: Optional[str], limit: Optional[int]) -> ProductSearchResponse:
        """Search products by name."""
        if not query or not query.strip():
            raise exceptions.InvalidQueryError()

        products = self._catalog.search(query, limit)
        return ProductSearchResponse(
            query=query,
            total=len(products),
            products=products
        )

    def create(self, data: ProductCreate) -> Product:
        """Create a product."""
        return self._catalog.create(data.name, data.category)

    def delete(self, raw_id: str) -> None:
        """Delete a product by its identifier."""
        try:
            product_id = int(raw_id)
        except ValueError:
            raise exceptions.invalid_product_id(raw_id) from None

        self._catalog.delete(product_id)

    def get_stats(self) -> CatalogStatsResponse:
        """Get index and cache statistics."""
        stats = self._catalog.stats()
        cache = stats["cache"]
        return CatalogStatsResponse(
            indexed_products=stats["indexed_products"],
            cache_size=cache["size"],
            cache_capacity=cache["capacity"],
            cache_hits=cache["hits"],
            cache_misses=cache["misses"],
        )


@router.get("/search", response_model=ProductSearchResponse)
def search_products(
    q: Optional[str] = Query(None, description="Search text"),
    limit: Optional[int] = Query(None, ge=1, le=_settings.search_max_limit),
    catalog: ProductCatalog = Depends(get_catalog)
):
    """Search products by name."""
    controller = ProductController(catalog)
    return controller.search(q, limit)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    catalog: ProductCatalog = Depends(get_catalog)
):
    """Create a product and make it searchable."""
    controller = ProductController(catalog)
    return controller.create(data)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    catalog: ProductCatalog = Depends(get_catalog)
):
    """Delete a product."""
    controller = ProductController(catalog)
    controller.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats", response_model=CatalogStatsResponse)
def get_catalog_stats(catalog: ProductCatalog = Depends(get_catalog)):
    """Get index and cache statistics."""
    controller = ProductController(catalog)
    return controller.get_stats()
