import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from core.config import OTP_MAX_ATTEMPTS, OTP_TTL_MINUTES, PHONE_COUNTRY_PREFIX, PHONE_DIGITS
from core.exceptions import (
    ExpiredError,
    MismatchError,
    NotFoundError,
    TooManyAttemptsError,
    ValidationError,
)
from core.security import create_session_token, hash_otp, verify_otp_hash
from utils.otp_store import OTPStore


logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999
OTP_TTL = timedelta(minutes=OTP_TTL_MINUTES)


class OTPSender(Protocol):
    async def send_otp(self, phone: str, code: str) -> None:
        """Deliver ``code`` to ``phone``; raises DeliveryError on failure."""


def normalize_phone(phone: Optional[str]) -> str:
    """
    Strip the country prefix and every non-digit.
    Raises ValidationError unless exactly 10 digits remain.
    """
    digits = re.sub(r"\D", "", (phone or "").replace(PHONE_COUNTRY_PREFIX, "", 1))
    if len(digits) != PHONE_DIGITS:
        raise ValidationError("Invalid phone number")
    return digits


def generate_otp() -> str:
    """6-digit code in [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def issue_otp(store: OTPStore, sender: OTPSender, phone: Optional[str]) -> str:
    """
    Issue a fresh code for ``phone`` and hand it to the SMS sender.

    Earlier codes for the same number are deleted first, so only the newest
    one can verify. The record is persisted before delivery is attempted and
    is kept when delivery fails: the caller gets a DeliveryError but the code
    stays verifiable until it expires.

    Returns the normalized phone.
    """
    if not phone:
        raise ValidationError("Phone number required")
    clean_phone = normalize_phone(phone)

    code = generate_otp()
    # Keep bcrypt and the synchronous store off the event loop
    code_hash = await run_in_threadpool(hash_otp, code)

    removed = await run_in_threadpool(store.delete_for_phone, clean_phone)
    if removed:
        logger.info(f"Superseded {removed} OTP record(s) for {clean_phone}")
    await run_in_threadpool(store.create, clean_phone, code_hash)

    logger.info(f"Attempting to send OTP to: {clean_phone}")
    await sender.send_otp(clean_phone, code)
    return clean_phone


def verify_otp(
    store: OTPStore,
    phone: Optional[str],
    code: Optional[str],
    now: Optional[datetime] = None,
) -> str:
    """
    Check ``code`` against the newest record for ``phone``.
    Returns a signed session token whose subject is the normalized phone.
    """
    if not phone or not code:
        raise ValidationError("Phone and OTP required")
    clean_phone = normalize_phone(phone)

    record = store.latest_for_phone(clean_phone)
    if record is None:
        raise NotFoundError()

    now = now or datetime.now(timezone.utc)
    if now - _as_utc(record.created_at) > OTP_TTL:
        store.delete(record.id)
        logger.info(f"Expired OTP consumed for {clean_phone}")
        raise ExpiredError()

    if record.attempts >= OTP_MAX_ATTEMPTS:
        store.delete(record.id)
        logger.warning(f"OTP attempt limit reached for {clean_phone}")
        raise TooManyAttemptsError()

    if not verify_otp_hash(code, record.code_hash):
        attempts = store.record_failed_attempt(record.id)
        logger.info(f"Invalid OTP for {clean_phone} (attempt {attempts})")
        raise MismatchError()

    # A concurrent verification may have consumed the record already
    if not store.delete(record.id):
        raise NotFoundError()

    logger.info(f"OTP verified for {clean_phone}")
    return create_session_token(clean_phone)
