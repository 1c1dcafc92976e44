from datetime import datetime, timedelta, timezone
import logging
from fastapi.security import HTTPBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from core.config import ALGORITHM, JWT_SECRET, OTP_HASH_ROUNDS, SESSION_TOKEN_EXPIRE_DAYS


logger = logging.getLogger(__name__)


otp_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=OTP_HASH_ROUNDS)

oauth2_scheme = HTTPBearer(auto_error=False)


def hash_otp(code: str) -> str:
    return otp_context.hash(code)


def verify_otp_hash(code: str, code_hash: str) -> bool:
    return otp_context.verify(code, code_hash)


def create_session_token(phone: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=SESSION_TOKEN_EXPIRE_DAYS))
    to_encode = {"sub": phone, "phone": phone, "exp": expire}
    return jwt.encode(to_encode, JWT_SECRET, algorithm=ALGORITHM)


def decode_session_token(token: str) -> str:
    """
    Return the phone subject of a session token.
    Raises JWTError for bad signatures, expired tokens and missing subjects.
    """
    payload = jwt.decode(token, JWT_SECRET, algorithms=[ALGORITHM])
    phone = payload.get("sub")
    if not phone:
        raise JWTError("Token has no subject")
    return phone
