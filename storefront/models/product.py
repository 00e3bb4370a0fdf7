"""Product catalogue model"""

from sqlalchemy import Column, String, Text, Numeric, Integer, Boolean, JSON, CheckConstraint

from .base import Base, TimestampedModel, UUIDModel

class Product(Base, TimestampedModel, UUIDModel):
    """Product offered in the storefront"""

    __tablename__ = "products"

    # Basic info
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    sku = Column(String(50), unique=True, nullable=True, index=True)
    category = Column(String(100), nullable=True, index=True)
    tags = Column(JSON, default=list)

    # Pricing
    price = Column(Numeric(10, 2), nullable=False, index=True)

    # Inventory, NULL means untracked
    stock_quantity = Column(Integer, nullable=True)

    # Media: [{"url": ..., "alt": ...}]
    images = Column(JSON, default=list)

    is_featured = Column(Boolean, default=False, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_non_negative_price"),
    )
