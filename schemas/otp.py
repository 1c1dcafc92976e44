from pydantic import BaseModel, field_validator
from typing import Optional


def _digits_as_str(v):
    # Clients sometimes post the phone or code as a JSON number
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


# Fields are optional so that a missing phone/otp is reported as the
# 400 "required" message instead of a request-parsing error.
class OTPSendRequest(BaseModel):
    phone: Optional[str] = None

    @field_validator("phone", mode="before")
    def coerce_to_str(cls, v):
        return _digits_as_str(v)


class OTPVerifyRequest(BaseModel):
    phone: Optional[str] = None
    otp: Optional[str] = None

    @field_validator("phone", "otp", mode="before")
    def coerce_to_str(cls, v):
        return _digits_as_str(v)


class OTPSendResponse(BaseModel):
    success: bool = True
    message: str


class OTPVerifyResponse(BaseModel):
    success: bool = True
    message: str
    token: str


class SessionOut(BaseModel):
    phone: str
