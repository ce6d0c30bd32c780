"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalog records.

==============================================================================
"""

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    Product record as stored, cached and returned by search.

    Instances are immutable so a cached product can be handed to any
    number of concurrent readers.

    Attributes:
        id: Store-assigned identifier
        name: Product display name (the only indexed field)
        category: Product category (opaque to search)
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = Field(..., description="Store-assigned product identifier")
    name: str = Field(..., description="Product name")
    category: str = Field(..., description="Product category")
