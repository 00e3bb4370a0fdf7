"""
Product service layer
Handles business logic for products
"""

from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete, update, or_, desc
import uuid
import logging

from storefront.models import Product, CartItem, WishlistItem, OrderItem
from storefront.core.exceptions import NotFoundException, DuplicateResourceException, ValidationException
from storefront.schemas.product import ProductCreate, ProductUpdate
from storefront.utils.images import images_from_urls

logger = logging.getLogger(__name__)

class ProductService:
    """Product service for business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(
        self,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        q: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Product], int]:
        """
        List products with optional filters

        Returns:
            Tuple of (products, total matching)
        """
        conditions = []
        if category:
            conditions.append(Product.category == category)
        if featured is not None:
            conditions.append(Product.is_featured == featured)
        if q:
            pattern = f"%{q}%"
            conditions.append(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))

        query = select(Product).where(*conditions)

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery())
        )

        result = await self.db.execute(
            query.order_by(desc(Product.created_at), Product.name).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def get_product(self, product_id: uuid.UUID) -> Product:
        """
        Get product by ID

        Raises:
            NotFoundException: If product not found
        """
        result = await self.db.execute(
            select(Product).where(Product.id == product_id)
        )
        product = result.scalar_one_or_none()

        if not product:
            raise NotFoundException("Product not found")

        return product

    async def _ensure_unique_sku(self, sku: Optional[str], exclude_id: Optional[uuid.UUID] = None) -> None:
        if not sku:
            return
        query = select(Product.id).where(Product.sku == sku)
        if exclude_id:
            query = query.where(Product.id != exclude_id)
        if await self.db.scalar(query):
            raise DuplicateResourceException("Product", "sku", sku)

    async def create_product(self, data: ProductCreate) -> Product:
        """
        Create new product

        Args:
            data: Product creation data

        Returns:
            Created product
        """
        await self._ensure_unique_sku(data.sku)

        product_data = data.model_dump(exclude={"image_urls"})
        product = Product(
            **product_data,
            images=images_from_urls(data.image_urls, data.name)
        )

        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)

        logger.info(f"Created product {product.id} ({product.name})")
        return product

    async def update_product(self, product_id: uuid.UUID, data: ProductUpdate) -> Product:
        """
        Update existing product

        Args:
            product_id: Product ID
            data: Fields to change

        Returns:
            Updated product

        Raises:
            NotFoundException: If product not found
            ValidationException: If nothing is set or a required field is nulled
        """
        product = await self.get_product(product_id)

        update_data = data.model_dump(exclude_unset=True)
        image_urls = update_data.pop("image_urls", None)

        if not update_data and image_urls is None:
            raise ValidationException("No fields to update")
        for field in ("name", "price", "is_featured"):
            if field in update_data and update_data[field] is None:
                raise ValidationException(f"{field} cannot be null")

        if "sku" in update_data:
            await self._ensure_unique_sku(update_data["sku"], exclude_id=product.id)

        for field, value in update_data.items():
            setattr(product, field, value)

        if image_urls is not None:
            product.images = images_from_urls(image_urls, product.name)

        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)

        return product

    async def delete_product(self, product_id: uuid.UUID) -> None:
        """
        Delete product

        Cart and wishlist lines for the product are removed; order lines keep
        their snapshot and lose the product reference.

        Raises:
            NotFoundException: If product not found
        """
        product = await self.get_product(product_id)

        await self.db.execute(delete(CartItem).where(CartItem.product_id == product_id))
        await self.db.execute(delete(WishlistItem).where(WishlistItem.product_id == product_id))
        await self.db.execute(
            update(OrderItem).where(OrderItem.product_id == product_id).values(product_id=None)
        )
        await self.db.execute(delete(Product).where(Product.id == product.id))
        await self.db.commit()

        logger.info(f"Deleted product {product_id}")
