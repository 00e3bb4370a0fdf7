"""
Wishlist service layer
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc
from sqlalchemy.orm import selectinload
import uuid
import logging

from storefront.models import Wishlist, WishlistItem, Product
from storefront.core.exceptions import NotFoundException, ConflictException

logger = logging.getLogger(__name__)

class WishlistService:
    """Wishlist service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_wishlist(self, user_id: uuid.UUID) -> Optional[Wishlist]:
        result = await self.db.execute(
            select(Wishlist).where(Wishlist.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _get_item(self, wishlist_id: uuid.UUID, product_id: uuid.UUID) -> Optional[WishlistItem]:
        result = await self.db.execute(
            select(WishlistItem)
            .options(selectinload(WishlistItem.product))
            .where(WishlistItem.wishlist_id == wishlist_id, WishlistItem.product_id == product_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_items(self, user_id: uuid.UUID) -> List[WishlistItem]:
        """
        Get saved products, newest first

        Returns:
            Wishlist items, empty when the user has no wishlist yet
        """
        wishlist = await self._get_wishlist(user_id)
        if wishlist is None:
            return []

        result = await self.db.execute(
            select(WishlistItem)
            .options(selectinload(WishlistItem.product))
            .where(WishlistItem.wishlist_id == wishlist.id)
            .order_by(desc(WishlistItem.added_at))
        )
        return list(result.scalars().all())

    async def add_item(self, user_id: uuid.UUID, product_id: uuid.UUID) -> WishlistItem:
        """
        Save a product to the user's wishlist

        Raises:
            NotFoundException: If product not found
            ConflictException: If the product is already saved
        """
        product = await self.db.scalar(select(Product.id).where(Product.id == product_id))
        if product is None:
            raise NotFoundException("Product not found")

        wishlist = await self._get_wishlist(user_id)
        if wishlist is None:
            wishlist = Wishlist(user_id=user_id)
            self.db.add(wishlist)
            await self.db.flush()

        if await self._get_item(wishlist.id, product_id):
            raise ConflictException("Product already in wishlist", error_code="ALREADY_IN_WISHLIST")

        self.db.add(WishlistItem(wishlist_id=wishlist.id, product_id=product_id))
        await self.db.commit()

        logger.info(f"User {user_id} saved product {product_id} to wishlist")
        return await self._get_item(wishlist.id, product_id)

    async def remove_item(self, user_id: uuid.UUID, product_id: uuid.UUID) -> None:
        """
        Remove a product from the wishlist

        Raises:
            NotFoundException: If the product is not in the wishlist
        """
        wishlist = await self._get_wishlist(user_id)
        item = await self._get_item(wishlist.id, product_id) if wishlist else None
        if item is None:
            raise NotFoundException("Item not found in wishlist")

        await self.db.execute(delete(WishlistItem).where(WishlistItem.id == item.id))
        await self.db.commit()
