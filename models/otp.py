from datetime import datetime, timezone
from sqlalchemy import UUID, Column, DateTime, Integer, String
import uuid
from models.base import Base


class OTPRecord(Base):
    """
    One issued phone OTP. Only the bcrypt hash of the code is stored.
    The row existing is the "pending" state; verification, expiry and
    re-issuance all end by deleting it.
    """
    __tablename__ = "otp_records"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        nullable=False,
    )
    phone = Column(String(10), index=True, nullable=False)
    code_hash = Column(String, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
        nullable=False,
    )

    def __repr__(self):
        return f"<OTPRecord {self.phone}>"
