"""Client-side data models, matching the API's JSON"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ProductImage(BaseModel):
    url: str
    alt: Optional[str] = None


class ProductSnapshot(BaseModel):
    """Product details carried by cart and wishlist lines"""
    id: str
    name: str
    price: float
    images: Optional[List[ProductImage]] = None
    description: Optional[str] = None
    stock_quantity: Optional[int] = None

    model_config = {"extra": "ignore"}


class CartItem(BaseModel):
    """Cart line, keyed by product id"""
    id: str
    product_id: str
    product: ProductSnapshot
    quantity: int
    price_at_addition: Optional[float] = None

    @property
    def unit_price(self) -> float:
        """Captured price, or the product's price when none was captured"""
        if self.price_at_addition is not None:
            return self.price_at_addition
        return self.product.price


class CartItemForMerge(BaseModel):
    """Guest cart line as submitted to the merge endpoint"""
    product_id: str = Field(..., alias="productId")
    quantity: int
    price_at_addition: float = Field(..., alias="priceAtAddition")

    model_config = {"populate_by_name": True}


class WishlistItem(BaseModel):
    id: str
    wishlist_id: str
    product_id: str
    product: ProductSnapshot
    added_at: datetime
