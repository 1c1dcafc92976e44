from sqlalchemy import UUID, Column, DateTime, String, func
import uuid
from models.base import Base


class District(Base):
    __tablename__ = "districts"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        nullable=False,
    )
    name = Column(String, index=True, nullable=False)
    image = Column(String, default="", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
