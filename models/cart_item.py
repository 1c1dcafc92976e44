from sqlalchemy import UUID, Column, DateTime, Float, Integer, String, UniqueConstraint, func
import uuid
from models.base import Base


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_phone", "product_id", name="uq_cart_items_user_product"),
    )

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        nullable=False,
    )
    # Session subject (normalized phone) that owns the item
    user_phone = Column(String(10), index=True, nullable=False)
    product_id = Column(String, nullable=False)
    name = Column(String, nullable=True)
    image = Column(String, nullable=True)
    category = Column(String, nullable=True)
    district = Column(String, nullable=True)
    description = Column(String, nullable=True)
    subtitle = Column(String, nullable=True)
    price = Column(Float, nullable=True)
    weight = Column(String, nullable=True)
    quantity = Column(Integer, default=1, nullable=False)
    rating_value = Column(Float, nullable=True)
    variant_index = Column(Integer, nullable=True)
    weight_index = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
