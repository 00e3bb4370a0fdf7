"""
Storefront client: cart and wishlist state kept in step with the API
"""

from .api import StorefrontAPI
from .cart import CartMode, CartStore
from .errors import RemoteError, UnauthorizedError, NotFoundError, ConflictError, NetworkError
from .models import CartItem, CartItemForMerge, ProductSnapshot, WishlistItem
from .session import AuthSession, AuthStatus, StorefrontSession
from .storage import LocalStorage, MemoryStorage, FileStorage, StorageError, StorageQuotaExceeded
from .wishlist import WishlistStore

__all__ = [
    "StorefrontAPI",
    "CartMode",
    "CartStore",
    "RemoteError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "NetworkError",
    "CartItem",
    "CartItemForMerge",
    "ProductSnapshot",
    "WishlistItem",
    "AuthSession",
    "AuthStatus",
    "StorefrontSession",
    "LocalStorage",
    "MemoryStorage",
    "FileStorage",
    "StorageError",
    "StorageQuotaExceeded",
    "WishlistStore",
]
