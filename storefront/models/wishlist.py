"""
Wishlist models for saved products
"""

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base, TimestampedModel, UUIDModel, utcnow

class Wishlist(Base, TimestampedModel, UUIDModel):
    """User wishlist"""

    __tablename__ = "wishlists"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True)

    user = relationship("User", back_populates="wishlist")
    items = relationship("WishlistItem", back_populates="wishlist", cascade="all, delete-orphan")

class WishlistItem(Base, UUIDModel):
    """Product saved to a wishlist"""

    __tablename__ = "wishlist_items"

    wishlist_id = Column(Uuid(as_uuid=True), ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), index=True)

    # Relationships
    wishlist = relationship("Wishlist", back_populates="items")
    product = relationship("Product")

    __table_args__ = (
        UniqueConstraint("wishlist_id", "product_id", name="uq_wishlist_product"),
    )
