"""Wishlist API routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from storefront.core.database import get_db
from storefront.models import User
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.schemas.common import MessageResponse
from storefront.schemas.wishlist import WishlistItemCreate, WishlistItemResponse
from .services import WishlistService

router = APIRouter()

@router.get("", response_model=List[WishlistItemResponse])
async def get_wishlist(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get saved products, newest first"""
    service = WishlistService(db)
    return await service.get_items(current_user.id)

@router.post(
    "/items",
    response_model=WishlistItemResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_to_wishlist(
    item_data: WishlistItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Save product to wishlist"""
    service = WishlistService(db)
    return await service.add_item(current_user.id, item_data.product_id)

@router.delete("/items/{product_id}", response_model=MessageResponse)
async def remove_from_wishlist(
    product_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Remove product from wishlist"""
    service = WishlistService(db)
    await service.remove_item(current_user.id, product_id)
    return MessageResponse(message="Item removed from wishlist")
