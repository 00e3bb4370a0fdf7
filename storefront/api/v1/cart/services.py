"""
Cart service layer
Handles shopping cart business logic
"""

from typing import Dict, List, Optional, Tuple
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
import uuid
import logging

from storefront.models import Cart, CartItem, Product
from storefront.core.exceptions import NotFoundException, BadRequestException
from storefront.schemas.cart import CartItemResponse, CartMergeItem
from storefront.schemas.product import ProductSnapshot

logger = logging.getLogger(__name__)

def to_cart_item_response(item: CartItem) -> CartItemResponse:
    """Render a cart line keyed by its product id"""
    return CartItemResponse(
        id=item.product_id,
        product_id=item.product_id,
        product=ProductSnapshot.model_validate(item.product),
        quantity=item.quantity,
        price_at_addition=float(item.price_at_addition)
    )

class CartService:
    """Shopping cart service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_cart(self, user_id: uuid.UUID) -> Optional[Cart]:
        result = await self.db.execute(
            select(Cart).where(Cart.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _get_or_create_cart(self, user_id: uuid.UUID) -> Cart:
        cart = await self._get_cart(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            self.db.add(cart)
            await self.db.flush()
            logger.info(f"Created cart for user {user_id}")
        return cart

    async def _get_line(self, cart_id: uuid.UUID, product_id: uuid.UUID) -> Optional[CartItem]:
        result = await self.db.execute(
            select(CartItem)
            .options(selectinload(CartItem.product))
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _get_product(self, product_id: uuid.UUID) -> Product:
        result = await self.db.execute(
            select(Product).where(Product.id == product_id)
        )
        product = result.scalar_one_or_none()
        if not product:
            raise NotFoundException("Product not found")
        return product

    async def get_items(self, user_id: uuid.UUID) -> List[CartItemResponse]:
        """
        Get cart lines for a user

        Args:
            user_id: Cart owner

        Returns:
            Cart lines with product snapshots, empty when the user has no cart yet
        """
        cart = await self._get_cart(user_id)
        if cart is None:
            return []

        result = await self.db.execute(
            select(CartItem)
            .options(selectinload(CartItem.product))
            .where(CartItem.cart_id == cart.id)
            .order_by(CartItem.created_at)
            .execution_options(populate_existing=True)
        )
        return [to_cart_item_response(item) for item in result.scalars().all()]

    async def add_item(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int
    ) -> Tuple[CartItemResponse, bool]:
        """
        Add product to cart, summing quantities for an existing line

        The line price is refreshed to the current product price.

        Args:
            user_id: Cart owner
            product_id: Product to add
            quantity: Positive quantity to add

        Returns:
            Tuple of (line, created)

        Raises:
            BadRequestException: If quantity is not positive
            NotFoundException: If product not found
        """
        if quantity <= 0:
            raise BadRequestException("Quantity must be a positive number")

        product = await self._get_product(product_id)
        cart = await self._get_or_create_cart(user_id)
        line = await self._get_line(cart.id, product_id)

        created = line is None
        if created:
            line = CartItem(
                cart_id=cart.id,
                product_id=product_id,
                quantity=quantity,
                price_at_addition=product.price
            )
            self.db.add(line)
        else:
            line.quantity += quantity
            line.price_at_addition = product.price

        await self.db.commit()

        line = await self._get_line(cart.id, product_id)
        return to_cart_item_response(line), created

    async def set_quantity(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int
    ) -> CartItemResponse:
        """
        Set the quantity of an existing cart line

        Raises:
            BadRequestException: If quantity is not positive
            NotFoundException: If there is no cart or no line for the product
        """
        if quantity <= 0:
            raise BadRequestException("Quantity must be a positive number")

        cart = await self._get_cart(user_id)
        if cart is None:
            raise NotFoundException("Cart not found")

        line = await self._get_line(cart.id, product_id)
        if line is None:
            raise NotFoundException("Item not found in cart")

        line.quantity = quantity
        await self.db.commit()

        line = await self._get_line(cart.id, product_id)
        return to_cart_item_response(line)

    async def remove_item(self, user_id: uuid.UUID, product_id: uuid.UUID) -> None:
        """
        Remove a product's line from the cart

        Raises:
            NotFoundException: If there is no cart or no line for the product
        """
        cart = await self._get_cart(user_id)
        if cart is None:
            raise NotFoundException("Cart not found")

        line = await self._get_line(cart.id, product_id)
        if line is None:
            raise NotFoundException("Item not found in cart")

        await self.db.execute(delete(CartItem).where(CartItem.id == line.id))
        await self.db.commit()

    async def clear(self, user_id: uuid.UUID) -> int:
        """
        Remove every line from the user's cart

        Returns:
            Number of lines removed

        Raises:
            NotFoundException: If the user has no cart
        """
        cart = await self._get_cart(user_id)
        if cart is None:
            raise NotFoundException("Cart not found or already empty")

        result = await self.db.execute(
            delete(CartItem).where(CartItem.cart_id == cart.id)
        )
        await self.db.commit()

        logger.info(f"Cleared {result.rowcount} cart lines for user {user_id}")
        return result.rowcount

    async def merge(self, user_id: uuid.UUID, items: List[CartMergeItem]) -> int:
        """
        Merge a guest cart snapshot into the user's cart

        Quantities are added per product. A product missing from the cart is
        inserted with the submitted price. Lines for unknown products are
        skipped. Everything is committed at once.

        Args:
            user_id: Cart owner
            items: Guest cart lines

        Returns:
            Number of products merged

        Raises:
            BadRequestException: If any line has a non-positive quantity
        """
        if not items:
            return 0

        for item in items:
            if item.quantity <= 0:
                raise BadRequestException("Invalid item structure in array: quantity must be positive")

        # Collapse repeated products in one snapshot
        merged: Dict[uuid.UUID, Tuple[int, Decimal]] = {}
        for item in items:
            quantity, price = merged.get(item.product_id, (0, Decimal(str(item.price_at_addition))))
            merged[item.product_id] = (quantity + item.quantity, price)

        known = await self.db.execute(
            select(Product.id).where(Product.id.in_(list(merged.keys())))
        )
        known_ids = set(known.scalars().all())

        cart = await self._get_or_create_cart(user_id)
        existing = await self.db.execute(
            select(CartItem).where(CartItem.cart_id == cart.id)
        )
        lines = {line.product_id: line for line in existing.scalars().all()}

        count = 0
        for product_id, (quantity, price) in merged.items():
            if product_id not in known_ids:
                logger.warning(f"Skipping unknown product {product_id} in cart merge for user {user_id}")
                continue

            line = lines.get(product_id)
            if line is not None:
                line.quantity += quantity
            else:
                self.db.add(CartItem(
                    cart_id=cart.id,
                    product_id=product_id,
                    quantity=quantity,
                    price_at_addition=price
                ))
            count += 1

        await self.db.commit()

        logger.info(f"Merged {count} guest cart lines for user {user_id}")
        return count
