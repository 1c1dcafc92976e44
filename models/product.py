from sqlalchemy import JSON, UUID, Boolean, Column, DateTime, Float, Integer, String, func
import uuid
from models.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        nullable=False,
    )
    name = Column(String, index=True, nullable=False)
    image = Column(String, nullable=False)
    subtitle = Column(String, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, index=True, nullable=False)
    district = Column(String, index=True, nullable=False)
    rating_value = Column(Float, nullable=True)
    # [{"weights": [{"value": 250, "unit": "g", "price": 120, "quantity": 10}, ...]}, ...]
    variants = Column(JSON, nullable=False, default=list)
    is_trending = Column(Boolean, default=False, nullable=False)
    # Position in the trending list; -1 when not trending
    trending_order = Column(Integer, default=-1, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
