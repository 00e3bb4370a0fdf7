"""Cart API routes, authenticated users only"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from storefront.core.database import get_db
from storefront.models import User
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.schemas.cart import (
    CartItemCreate,
    CartItemUpdate,
    CartItemResponse,
    CartMergeRequest,
    CartMergeResponse
)
from storefront.schemas.common import MessageResponse
from .services import CartService

router = APIRouter()

@router.get("", response_model=List[CartItemResponse])
async def get_cart(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get cart contents"""
    service = CartService(db)
    return await service.get_items(current_user.id)

@router.post(
    "",
    response_model=CartItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add to cart",
    description="Add product to cart; quantities add up for a product already in the cart"
)
async def add_to_cart(
    item_data: CartItemCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add item to cart"""
    service = CartService(db)

    line, created = await service.add_item(
        user_id=current_user.id,
        product_id=item_data.product_id,
        quantity=item_data.quantity
    )

    if not created:
        response.status_code = status.HTTP_200_OK

    return line

@router.delete("", response_model=MessageResponse)
async def clear_cart(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Clear entire cart"""
    service = CartService(db)
    await service.clear(current_user.id)
    return MessageResponse(message="Cart cleared")

@router.put("/items/{product_id}", response_model=CartItemResponse)
async def update_cart_item(
    product_id: uuid.UUID,
    update_data: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update cart item quantity"""
    service = CartService(db)
    return await service.set_quantity(
        user_id=current_user.id,
        product_id=product_id,
        quantity=update_data.quantity
    )

@router.delete("/items/{product_id}", response_model=MessageResponse)
async def remove_from_cart(
    product_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Remove item from cart"""
    service = CartService(db)
    await service.remove_item(current_user.id, product_id)
    return MessageResponse(message="Item removed from cart")

@router.post("/merge", response_model=CartMergeResponse)
async def merge_carts(
    request: CartMergeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Merge guest cart with user cart after login"""
    if not request.items:
        return CartMergeResponse(message="No items to merge", items_merged=0)

    service = CartService(db)
    merged_count = await service.merge(current_user.id, request.items)

    return CartMergeResponse(
        message="Cart merged successfully",
        items_merged=merged_count
    )
