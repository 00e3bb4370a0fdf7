"""
Cart schemas for request/response validation
Request bodies use the camelCase keys the storefront client sends
"""

from pydantic import BaseModel, Field
from typing import List
import uuid

from .product import ProductSnapshot

class CartItemCreate(BaseModel):
    """Schema for adding item to cart"""
    product_id: uuid.UUID = Field(..., alias="productId")
    quantity: int = 1

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {"productId": "0b7f6c1e-3f55-4d0a-9a53-7d1b0c2f1a10", "quantity": 2}
        }
    }

class CartItemUpdate(BaseModel):
    """Schema for setting a cart line quantity"""
    quantity: int

class CartMergeItem(BaseModel):
    """One guest cart line submitted for merging"""
    product_id: uuid.UUID = Field(..., alias="productId")
    quantity: int
    price_at_addition: float = Field(..., alias="priceAtAddition")

    model_config = {"populate_by_name": True}

class CartMergeRequest(BaseModel):
    """Guest cart snapshot"""
    items: List[CartMergeItem]

class CartMergeResponse(BaseModel):
    message: str
    items_merged: int

class CartItemResponse(BaseModel):
    """Cart line as returned to the client

    ``id`` is the product id: a cart holds at most one line per product.
    """
    id: uuid.UUID
    product_id: uuid.UUID
    product: ProductSnapshot
    quantity: int
    price_at_addition: float
