"""Shared request/response schemas"""

from .product import (
    ProductImage,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductSnapshot,
)
from .cart import (
    CartItemCreate,
    CartItemUpdate,
    CartMergeItem,
    CartMergeRequest,
    CartMergeResponse,
    CartItemResponse,
)
from .common import MessageResponse
from .wishlist import WishlistItemCreate, WishlistItemResponse
from .order import (
    ShippingDetails,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
)

__all__ = [
    "ProductImage",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "ProductSnapshot",
    "CartItemCreate",
    "CartItemUpdate",
    "CartMergeItem",
    "CartMergeRequest",
    "CartMergeResponse",
    "CartItemResponse",
    "MessageResponse",
    "WishlistItemCreate",
    "WishlistItemResponse",
    "ShippingDetails",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "OrderResponse",
]
