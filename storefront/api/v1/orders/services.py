"""
Order service layer
Handles checkout and order management
"""

from typing import List, Optional
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
import uuid
import logging

from storefront.models import Cart, CartItem, Order, OrderItem, OrderStatus
from storefront.core.exceptions import (
    NotFoundException,
    EmptyCartException,
    InsufficientStockException
)
from storefront.schemas.order import OrderCreate

logger = logging.getLogger(__name__)

class OrderService:
    """Order management service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(self, user_id: uuid.UUID, data: OrderCreate) -> Order:
        """
        Create an order from the user's server cart

        Line prices are the prices captured when each product was added to the
        cart. Tracked stock is decremented and the cart is emptied in the same
        transaction.

        Args:
            user_id: Buyer user ID
            data: Shipping and payment details

        Returns:
            Created order with its items

        Raises:
            EmptyCartException: If the cart has no lines
            InsufficientStockException: If a tracked product lacks stock
        """
        cart = await self.db.scalar(select(Cart).where(Cart.user_id == user_id))
        lines = []
        if cart is not None:
            result = await self.db.execute(
                select(CartItem)
                .options(selectinload(CartItem.product))
                .where(CartItem.cart_id == cart.id)
                .order_by(CartItem.created_at)
                .execution_options(populate_existing=True)
            )
            lines = list(result.scalars().all())

        if not lines:
            raise EmptyCartException()

        total_amount = Decimal("0")
        order_items = []

        for line in lines:
            product = line.product

            # Check stock
            if product.stock_quantity is not None:
                if product.stock_quantity < line.quantity:
                    raise InsufficientStockException(product.name, product.stock_quantity)
                product.stock_quantity -= line.quantity

            total_amount += Decimal(line.price_at_addition) * line.quantity
            order_items.append(OrderItem(
                product_id=product.id,
                product_name_snapshot=product.name,
                quantity=line.quantity,
                price_at_purchase=line.price_at_addition
            ))

        order = Order(
            user_id=user_id,
            status=OrderStatus.PENDING,
            total_amount=total_amount,
            shipping_address=data.shipping_details.model_dump(),
            payment_method=data.payment_method,
            payment_reference=data.payment_reference,
            items=order_items
        )
        self.db.add(order)

        # Empty the cart
        await self.db.execute(delete(CartItem).where(CartItem.cart_id == cart.id))

        await self.db.commit()

        logger.info(f"Order {order.id} created for user {user_id}: {len(order_items)} items, total {total_amount}")
        return await self.get_order(order.id)

    async def get_order(self, order_id: uuid.UUID, user_id: Optional[uuid.UUID] = None) -> Order:
        """
        Get order by ID

        Args:
            order_id: Order ID
            user_id: Restrict to orders owned by this user

        Raises:
            NotFoundException: If order not found or owned by someone else
        """
        query = (
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        if user_id is not None:
            query = query.where(Order.user_id == user_id)

        result = await self.db.execute(query)
        order = result.scalar_one_or_none()

        if not order:
            raise NotFoundException("Order not found")

        return order

    async def list_orders(
        self,
        user_id: Optional[uuid.UUID] = None,
        status: Optional[OrderStatus] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Order]:
        """
        List orders newest first

        Args:
            user_id: Only this user's orders; all orders when omitted
            status: Optional status filter
        """
        query = select(Order).options(selectinload(Order.items))

        if user_id is not None:
            query = query.where(Order.user_id == user_id)
        if status:
            query = query.where(Order.status == status)

        result = await self.db.execute(
            query.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def update_order_status(self, order_id: uuid.UUID, new_status: OrderStatus) -> Order:
        """
        Set an order's status

        Raises:
            NotFoundException: If order not found
        """
        order = await self.get_order(order_id)

        previous = order.status
        order.status = new_status

        self.db.add(order)
        await self.db.commit()

        logger.info(f"Order {order_id} status changed from {previous.value} to {new_status.value}")
        return await self.get_order(order_id)
