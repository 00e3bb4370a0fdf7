"""
Shopping cart models
One cart per authenticated user, one line per product
"""

from sqlalchemy import Column, Integer, Numeric, ForeignKey, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, UUIDModel

class Cart(Base, TimestampedModel, UUIDModel):
    """User shopping cart"""

    __tablename__ = "carts"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True)

    # Relationships
    user = relationship("User", back_populates="cart")
    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan")

class CartItem(Base, TimestampedModel, UUIDModel):
    """Shopping cart line"""

    __tablename__ = "cart_items"

    cart_id = Column(Uuid(as_uuid=True), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    price_at_addition = Column(Numeric(10, 2), nullable=False)  # Price at time of adding

    # Relationships
    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")

    # Constraints
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_product"),
        CheckConstraint("quantity > 0", name="check_positive_cart_quantity"),
    )
