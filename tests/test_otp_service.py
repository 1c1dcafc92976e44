import asyncio
import threading
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.config import OTP_MAX_ATTEMPTS
from core.exceptions import (
    ExpiredError,
    MismatchError,
    NotFoundError,
    TooManyAttemptsError,
    ValidationError,
)
from core.security import decode_session_token, hash_otp
from models.otp import OTPRecord
from utils.otp import generate_otp, issue_otp, normalize_phone, verify_otp
from utils.otp_store import SqlOTPStore


class FakeRecord:
    def __init__(self, code, created_at=None, attempts=0):
        self.id = uuid.uuid4()
        self.code_hash = hash_otp(code)
        self.created_at = created_at or datetime.now(timezone.utc)
        self.attempts = attempts


class RacingStore:
    """Store whose record was consumed by another request mid-verification."""

    def __init__(self, record):
        self.record = record

    def latest_for_phone(self, phone):
        return self.record

    def delete(self, record_id):
        return False

    def record_failed_attempt(self, record_id):
        return 1


@pytest.mark.parametrize("raw", [
    "9876543210",
    "+919876543210",
    "+91 98765-43210",
    "(987) 654 3210",
])
def test_normalize_phone(raw):
    assert normalize_phone(raw) == "9876543210"
    assert normalize_phone(normalize_phone(raw)) == "9876543210"

@pytest.mark.parametrize("raw", ["", "98765", "919876543210", "+9198765432101", "phone"])
def test_normalize_phone_rejects(raw):
    with pytest.raises(ValidationError):
        normalize_phone(raw)

def test_generate_otp_range():
    for _ in range(200):
        code = generate_otp()
        assert len(code) == 6
        assert 100000 <= int(code) <= 999999

def test_issue_replaces_older_records(db_session, sender):
    store = SqlOTPStore(db_session)
    asyncio.run(issue_otp(store, sender, "9876543210"))
    asyncio.run(issue_otp(store, sender, "+919876543210"))

    assert db_session.query(OTPRecord).filter(OTPRecord.phone == "9876543210").count() == 1
    assert [p for p, _ in sender.sent] == ["9876543210", "9876543210"]

def test_verify_success_returns_token_and_consumes(db_session, sender):
    store = SqlOTPStore(db_session)
    asyncio.run(issue_otp(store, sender, "9876543210"))

    token = verify_otp(store, "9876543210", sender.last_code("9876543210"))

    assert decode_session_token(token) == "9876543210"
    assert store.latest_for_phone("9876543210") is None

def test_expired_record_is_consumed(db_session, sender):
    store = SqlOTPStore(db_session)
    asyncio.run(issue_otp(store, sender, "9876543210"))
    code = sender.last_code("9876543210")

    later = datetime.now(timezone.utc) + timedelta(minutes=11)
    with pytest.raises(ExpiredError):
        verify_otp(store, "9876543210", code, now=later)

    with pytest.raises(NotFoundError):
        verify_otp(store, "9876543210", code)

def test_code_valid_just_before_ttl(db_session, sender):
    store = SqlOTPStore(db_session)
    asyncio.run(issue_otp(store, sender, "9876543210"))

    later = datetime.now(timezone.utc) + timedelta(minutes=9, seconds=50)
    assert verify_otp(store, "9876543210", sender.last_code("9876543210"), now=later)

def test_expired_via_stored_timestamp(db_session, sender):
    store = SqlOTPStore(db_session)
    asyncio.run(issue_otp(store, sender, "9876543210"))
    db_session.query(OTPRecord).update(
        {"created_at": datetime.now(timezone.utc) - timedelta(minutes=11)}
    )
    db_session.commit()

    with pytest.raises(ExpiredError):
        verify_otp(store, "9876543210", sender.last_code("9876543210"))
    assert db_session.query(OTPRecord).count() == 0

def test_latest_record_wins(db_session):
    store = SqlOTPStore(db_session)
    old = OTPRecord(
        phone="9876543210",
        code_hash=hash_otp("111111"),
        created_at=datetime.now(timezone.utc) - timedelta(minutes=2),
    )
    db_session.add(old)
    db_session.commit()
    store.create("9876543210", hash_otp("222222"))

    with pytest.raises(MismatchError):
        verify_otp(store, "9876543210", "111111")
    assert verify_otp(store, "9876543210", "222222")

def test_attempt_limit(db_session, sender):
    store = SqlOTPStore(db_session)
    asyncio.run(issue_otp(store, sender, "9876543210"))
    code = sender.last_code("9876543210")
    wrong = "100000" if code != "100000" else "100001"

    for _ in range(OTP_MAX_ATTEMPTS):
        with pytest.raises(MismatchError):
            verify_otp(store, "9876543210", wrong)

    with pytest.raises(TooManyAttemptsError):
        verify_otp(store, "9876543210", code)
    assert store.latest_for_phone("9876543210") is None

def test_concurrent_consume_reports_not_found():
    store = RacingStore(FakeRecord("482913"))
    with pytest.raises(NotFoundError):
        verify_otp(store, "9876543210", "482913")

def test_issue_runs_hashing_and_store_off_the_event_loop(sender):
    calls = []

    class ThreadRecordingStore:
        def delete_for_phone(self, phone):
            calls.append(threading.get_ident())
            return 0

        def create(self, phone, code_hash):
            calls.append(threading.get_ident())

    loop_thread = threading.get_ident()
    asyncio.run(issue_otp(ThreadRecordingStore(), sender, "9876543210"))

    assert len(calls) == 2
    assert loop_thread not in calls
