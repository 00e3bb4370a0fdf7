"""Models package initialization"""

from .base import Base
from .user import User, UserRole
from .product import Product
from .cart import Cart, CartItem
from .wishlist import Wishlist, WishlistItem
from .order import Order, OrderItem, OrderStatus

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Product",
    "Cart",
    "CartItem",
    "Wishlist",
    "WishlistItem",
    "Order",
    "OrderItem",
    "OrderStatus",
]
