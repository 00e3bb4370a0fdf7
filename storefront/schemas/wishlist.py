"""Wishlist schemas"""

from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from .product import ProductSnapshot

class WishlistItemCreate(BaseModel):
    product_id: uuid.UUID = Field(..., alias="productId")

    model_config = {"populate_by_name": True}

class WishlistItemResponse(BaseModel):
    """Saved product"""
    id: uuid.UUID
    wishlist_id: uuid.UUID
    product_id: uuid.UUID
    product: ProductSnapshot
    added_at: datetime

    class Config:
        from_attributes = True
