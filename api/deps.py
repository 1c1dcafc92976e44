from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
import logging

from core.security import decode_session_token, oauth2_scheme
from db import get_db
from utils.otp_store import SqlOTPStore
from utils.sms import Fast2SMSSender


logger = logging.getLogger(__name__)


def get_otp_store(db: Session = Depends(get_db)) -> SqlOTPStore:
    return SqlOTPStore(db)


def get_sms_sender() -> Fast2SMSSender:
    return Fast2SMSSender()


def get_current_phone(
    credentials: HTTPAuthorizationCredentials | None = Depends(oauth2_scheme),
) -> str:
    """Phone subject of the bearer session token issued by /verify-otp."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No JWT provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_session_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Error verifying JWT: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid JWT",
            headers={"WWW-Authenticate": "Bearer"},
        )
