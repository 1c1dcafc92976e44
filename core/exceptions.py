from fastapi import status


class AppError(Exception):
    """Base error rendered as ``{"success": false, "message": ...}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFoundError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "OTP expired or invalid"


class ExpiredError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "OTP expired"


class MismatchError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid OTP"


class TooManyAttemptsError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "Too many invalid attempts. Request a new OTP"


class DeliveryError(AppError):
    # The OTP record stays in the store; the code can still be verified.
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Failed to send SMS. Please try again."


class InternalError(AppError):
    pass
