"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency Hierarchy:
--------------------
    ┌──────────────────────┐
    │ app.state.catalog    │ (built in the lifespan startup)
    └──────────┬───────────┘
               │
    ┌──────────▼───────────┐
    │    get_catalog()     │
    └──────────────────────┘

Tests replace the catalog with app.dependency_overrides[get_catalog].

==============================================================================
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from product_search.catalog.catalog import ProductCatalog
from product_search.core import exceptions


def get_catalog_optional(request: Request) -> Optional[ProductCatalog]:
    """Return the application's catalog, or None before startup finished."""
    return getattr(request.app.state, "catalog", None)


def get_catalog(request: Request) -> ProductCatalog:
    """
    FastAPI dependency yielding the application's catalog.

    Raises:
        AppException: CATALOG_NOT_LOADED if startup has not built it
    """
    catalog = get_catalog_optional(request)
    if catalog is None:
        raise exceptions.catalog_not_loaded()
    return catalog
