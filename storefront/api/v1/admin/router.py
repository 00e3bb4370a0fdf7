"""Admin management endpoints"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.models import User, OrderStatus
from storefront.api.v1.auth.dependencies import require_admin
from storefront.api.v1.products.services import ProductService
from storefront.api.v1.orders.services import OrderService
from storefront.schemas.common import MessageResponse
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from storefront.schemas.order import OrderResponse, OrderStatusUpdate

router = APIRouter()

@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_product(
    data: ProductCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create product"""
    service = ProductService(db)
    return await service.create_product(data)

@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    data: ProductUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update product fields"""
    service = ProductService(db)
    return await service.update_product(product_id, data)

@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: uuid.UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete product"""
    service = ProductService(db)
    await service.delete_product(product_id)
    return MessageResponse(message="Product deleted")

@router.get("/orders", response_model=List[OrderResponse])
async def list_all_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """List every order, newest first"""
    service = OrderService(db)
    return await service.list_orders(status=status_filter, skip=skip, limit=limit)

@router.patch("/orders/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: uuid.UUID,
    data: OrderStatusUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Change order status"""
    service = OrderService(db)
    return await service.update_order_status(order_id, data.status)
