"""Product Pydantic schemas"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
import uuid


class ProductImage(BaseModel):
    """Product image reference"""
    url: str = Field(..., min_length=1)
    alt: Optional[str] = None


class ProductBase(BaseModel):
    """Base product schema"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    price: Decimal = Field(..., ge=0)
    sku: Optional[str] = Field(None, max_length=50)
    category: Optional[str] = Field(None, max_length=100)
    is_featured: bool = Field(default=False)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        if v is not None:
            # Ensure price has at most 2 decimal places
            return round(v, 2)
        return v


class ProductCreate(ProductBase):
    """Schema for creating a product

    Only the first entry of ``image_urls`` is kept; a placeholder image is
    generated when none is given.
    """
    image_urls: List[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Schema for updating a product"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[Decimal] = Field(None, ge=0)
    sku: Optional[str] = Field(None, max_length=50)
    category: Optional[str] = Field(None, max_length=100)
    is_featured: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    image_urls: Optional[List[str]] = None

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        if v is not None:
            return round(v, 2)
        return v


class ProductResponse(BaseModel):
    """Schema for product response"""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: float
    sku: Optional[str] = None
    category: Optional[str] = None
    is_featured: bool = False
    stock_quantity: Optional[int] = None
    tags: Optional[List[str]] = None
    images: Optional[List[ProductImage]] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    """Schema for paginated product list response"""
    items: List[ProductResponse]
    total: int
    page: int
    size: int
    pages: int


class ProductSnapshot(BaseModel):
    """Product details embedded in cart and wishlist lines"""
    id: uuid.UUID
    name: str
    price: float
    images: Optional[List[ProductImage]] = None
    description: Optional[str] = None
    stock_quantity: Optional[int] = None

    class Config:
        from_attributes = True
