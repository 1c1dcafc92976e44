from fastapi import APIRouter, Depends

from api.deps import get_current_phone, get_otp_store, get_sms_sender
from schemas.otp import (
    OTPSendRequest,
    OTPSendResponse,
    OTPVerifyRequest,
    OTPVerifyResponse,
    SessionOut,
)
from utils.otp import OTPSender, issue_otp, verify_otp
from utils.otp_store import OTPStore


router = APIRouter()


# ---------------- Send OTP ----------------
@router.post("/send-otp", response_model=OTPSendResponse)
async def send_otp(
    payload: OTPSendRequest,
    store: OTPStore = Depends(get_otp_store),
    sender: OTPSender = Depends(get_sms_sender),
):
    await issue_otp(store, sender, payload.phone)
    return {"success": True, "message": "OTP sent successfully via SMS"}


# ---------------- Verify OTP ----------------
@router.post("/verify-otp", response_model=OTPVerifyResponse)
def check_otp(payload: OTPVerifyRequest, store: OTPStore = Depends(get_otp_store)):
    token = verify_otp(store, payload.phone, payload.otp)
    return {
        "success": True,
        "message": "OTP verified successfully",
        "token": token,
    }


# ---------------- Get Current Session ----------------
@router.get("/auth/me", response_model=SessionOut)
def get_me(phone: str = Depends(get_current_phone)):
    return {"phone": phone}
