"""
Order API routes
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.models import User
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.schemas.order import OrderCreate, OrderResponse
from .services import OrderService

router = APIRouter()

@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Checkout",
    description="Create an order from the current cart and empty the cart"
)
async def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create order from cart"""
    service = OrderService(db)
    return await service.create_order(current_user.id, order_data)

@router.get("", response_model=List[OrderResponse])
async def list_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the current user's orders, newest first"""
    service = OrderService(db)
    return await service.list_orders(user_id=current_user.id, skip=skip, limit=limit)

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one of the current user's orders"""
    service = OrderService(db)
    return await service.get_order(order_id, user_id=current_user.id)
