"""Products API router"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.schemas.product import ProductResponse, ProductListResponse
from .services import ProductService

router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def get_products(
    category: Optional[str] = Query(None, description="Category filter"),
    featured: Optional[bool] = Query(None, description="Only featured (or non-featured) products"),
    q: Optional[str] = Query(None, min_length=1, description="Search in name and description"),
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Number of items to return"),
    db: AsyncSession = Depends(get_db)
):
    """Get products with pagination"""
    service = ProductService(db)
    products, total = await service.list_products(
        category=category,
        featured=featured,
        q=q,
        skip=skip,
        limit=limit
    )

    # Calculate pagination
    pages = (total + limit - 1) // limit if total > 0 else 0
    page = (skip // limit) + 1

    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        size=limit,
        pages=pages
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get product by ID"""
    service = ProductService(db)
    return await service.get_product(product_id)
