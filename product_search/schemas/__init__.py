"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

==============================================================================
"""

from .product import ProductCreate, ProductSearchResponse, CatalogStatsResponse

__all__ = [
    "ProductCreate",
    "ProductSearchResponse",
    "CatalogStatsResponse",
]
