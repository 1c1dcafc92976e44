import time
from datetime import timedelta

import pytest
from jose import JWTError, jwt

from core.config import ALGORITHM
from core.security import create_session_token, decode_session_token, hash_otp, verify_otp_hash


def test_otp_hash_is_salted():
    first = hash_otp("482913")
    second = hash_otp("482913")

    assert first != second
    assert "482913" not in first
    assert verify_otp_hash("482913", first)
    assert verify_otp_hash("482913", second)
    assert not verify_otp_hash("482914", first)

def test_otp_hash_uses_ten_rounds():
    assert hash_otp("482913").startswith(("$2b$10$", "$2a$10$"))

def test_session_token_subject():
    token = create_session_token("9876543210")
    assert decode_session_token(token) == "9876543210"

def test_session_token_expires_in_seven_days():
    token = create_session_token("9876543210")
    claims = jwt.get_unverified_claims(token)
    assert claims["phone"] == "9876543210"
    assert 7 * 24 * 3600 - 60 <= claims["exp"] - int(time.time()) <= 7 * 24 * 3600 + 60

def test_expired_session_token_rejected():
    token = create_session_token("9876543210", expires_delta=timedelta(seconds=-10))
    with pytest.raises(JWTError):
        decode_session_token(token)

def test_foreign_signature_rejected():
    token = jwt.encode({"sub": "9876543210"}, "someone-else", algorithm=ALGORITHM)
    with pytest.raises(JWTError):
        decode_session_token(token)
