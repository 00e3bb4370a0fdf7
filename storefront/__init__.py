"""Storefront: cart and wishlist API with a reconciling client"""

__version__ = "1.0.0"
