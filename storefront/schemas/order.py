"""Order Pydantic schemas"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import uuid

from storefront.models.order import OrderStatus


class ShippingDetails(BaseModel):
    """Shipping address captured at checkout"""
    full_name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class OrderCreate(BaseModel):
    """Checkout request, lines come from the server cart"""
    shipping_details: ShippingDetails
    payment_method: str = Field(..., min_length=1, max_length=50)
    payment_reference: Optional[str] = Field(None, max_length=200)


class OrderStatusUpdate(BaseModel):
    """Admin status change"""
    status: OrderStatus


class OrderItemResponse(BaseModel):
    """Order item response"""
    id: uuid.UUID
    product_id: Optional[uuid.UUID] = None
    product_name_snapshot: str
    quantity: int
    price_at_purchase: float

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Order response"""
    id: uuid.UUID
    user_id: uuid.UUID
    status: OrderStatus
    total_amount: float
    shipping_address: ShippingDetails
    payment_method: str
    payment_reference: Optional[str] = None
    items: List[OrderItemResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
