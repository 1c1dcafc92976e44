import logging
import uuid
from typing import Optional, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import InternalError
from models.otp import OTPRecord


logger = logging.getLogger(__name__)


class OTPStore(Protocol):
    """Persistence capability used by the OTP issuer and verifier."""

    def delete_for_phone(self, phone: str) -> int:
        """Delete every record for ``phone``; returns the number removed."""

    def create(self, phone: str, code_hash: str) -> OTPRecord:
        """Insert a record stamped with the current time."""

    def latest_for_phone(self, phone: str) -> Optional[OTPRecord]:
        """Newest record for ``phone`` ordered by ``created_at`` descending."""

    def delete(self, record_id: uuid.UUID) -> bool:
        """Delete one record; False when no row was affected (already consumed)."""

    def record_failed_attempt(self, record_id: uuid.UUID) -> int:
        """Increment the failed-attempt counter and return the new value."""


class SqlOTPStore:
    """OTPStore backed by a SQLAlchemy session. Every write commits."""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, e: SQLAlchemyError):
        self.db.rollback()
        logger.error(f"OTP store failed to {action}: {str(e)}")
        raise InternalError("Internal server error", detail=str(e)) from e

    def delete_for_phone(self, phone: str) -> int:
        try:
            result = self.db.execute(delete(OTPRecord).where(OTPRecord.phone == phone))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete records", e)
        return result.rowcount

    def create(self, phone: str, code_hash: str) -> OTPRecord:
        record = OTPRecord(phone=phone, code_hash=code_hash)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self._fail("create record", e)
        return record

    def latest_for_phone(self, phone: str) -> Optional[OTPRecord]:
        try:
            return self.db.execute(
                select(OTPRecord)
                .where(OTPRecord.phone == phone)
                .order_by(OTPRecord.created_at.desc())
                .limit(1)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            self._fail("look up record", e)

    def delete(self, record_id: uuid.UUID) -> bool:
        try:
            result = self.db.execute(delete(OTPRecord).where(OTPRecord.id == record_id))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete record", e)
        return result.rowcount == 1

    def record_failed_attempt(self, record_id: uuid.UUID) -> int:
        try:
            self.db.execute(
                update(OTPRecord)
                .where(OTPRecord.id == record_id)
                .values(attempts=OTPRecord.attempts + 1)
            )
            self.db.commit()
            attempts = self.db.execute(
                select(OTPRecord.attempts).where(OTPRecord.id == record_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            self._fail("count failed attempt", e)
        return attempts or 0
