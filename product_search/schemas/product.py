"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for the product endpoints.

==============================================================================
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from product_search.catalog.models import Product


class ProductCreate(BaseModel):
    """Body of POST /products."""

    name: str = Field(..., min_length=1, max_length=500, description="Product name")
    category: str = Field(..., max_length=200, description="Product category")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Reject names that are only whitespace."""
        value = value.strip()
        if not value:
            raise ValueError("Product name cannot be blank")
        return value

    @field_validator("category")
    @classmethod
    def normalize_category(cls, value: str) -> str:
        return value.strip()


class ProductSearchResponse(BaseModel):
    """Search results wrapper."""

    success: bool = Field(default=True)
    query: str
    total: int = Field(ge=0)
    products: List[Product]


class CatalogStatsResponse(BaseModel):
    """Index and cache statistics."""

    success: bool = Field(default=True)
    indexed_products: int = Field(ge=0)
    cache_size: int = Field(ge=0)
    cache_capacity: int = Field(ge=1)
    cache_hits: int = Field(ge=0)
    cache_misses: int = Field(ge=0)
