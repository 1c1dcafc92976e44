import logging
from typing import Optional

import httpx

from core.config import FAST2SMS_API_KEY, FAST2SMS_URL, SMS_TIMEOUT_SECONDS
from core.exceptions import DeliveryError


logger = logging.getLogger(__name__)


class Fast2SMSSender:
    """
    Delivers OTP codes through the Fast2SMS bulkV2 "otp" route.
    """

    def __init__(
        self,
        api_key: Optional[str] = FAST2SMS_API_KEY,
        url: str = FAST2SMS_URL,
        timeout: float = SMS_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def send_otp(self, phone: str, code: str) -> None:
        if not self.api_key:
            raise DeliveryError(detail="FAST2SMS_API_KEY not set")

        payload = {
            "route": "otp",
            "numbers": phone,
            "variables_values": code,
            "flash": 0,
        }
        headers = {
            "authorization": self.api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, headers=headers, json=payload)
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"SMS Sending Failed: {e!r}")
            raise DeliveryError(detail=str(e) or e.__class__.__name__) from e
        except ValueError as e:
            logger.error(f"SMS Sending Failed: malformed response (status={response.status_code})")
            raise DeliveryError(detail="Malformed response from SMS provider") from e

        if not isinstance(data, dict) or not data.get("return"):
            reason = data.get("message") if isinstance(data, dict) else None
            if isinstance(reason, list):
                reason = "; ".join(str(r) for r in reason)
            logger.error(f"SMS Sending Failed: {data}")
            raise DeliveryError(detail=reason or "Failed to send OTP")

        logger.info(f"Fast2SMS accepted OTP for {phone}")
