"""API v1 routes aggregation"""

from fastapi import APIRouter

from .auth.router import router as auth_router
from .products.router import router as products_router
from .cart.router import router as cart_router
from .wishlist.router import router as wishlist_router
from .orders.router import router as orders_router
from .admin.router import router as admin_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(products_router, prefix="/products", tags=["Products"])
api_router.include_router(cart_router, prefix="/cart", tags=["Cart"])
api_router.include_router(wishlist_router, prefix="/wishlist", tags=["Wishlist"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])

# Export router
router = api_router
