import os
from dotenv import load_dotenv


load_dotenv()  # Load environment variables from .env file


APP_ENV = os.getenv("APP_ENV", "development")
LOG_FILE = os.getenv("LOG_FILE")

DATABASE_URL = os.getenv("DATABASE_URL")

# Session credential issued after a successful OTP verification
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
SESSION_TOKEN_EXPIRE_DAYS = int(os.getenv("SESSION_TOKEN_EXPIRE_DAYS", 7))

# OTP issuance / verification
OTP_TTL_MINUTES = int(os.getenv("OTP_TTL_MINUTES", 10))
OTP_HASH_ROUNDS = int(os.getenv("OTP_HASH_ROUNDS", 10))
OTP_MAX_ATTEMPTS = int(os.getenv("OTP_MAX_ATTEMPTS", 5))
PHONE_COUNTRY_PREFIX = os.getenv("PHONE_COUNTRY_PREFIX", "+91")
PHONE_DIGITS = 10

# Fast2SMS delivery
FAST2SMS_API_KEY = os.getenv("FAST2SMS_API_KEY")
FAST2SMS_URL = os.getenv("FAST2SMS_URL", "https://www.fast2sms.com/dev/bulkV2")
SMS_TIMEOUT_SECONDS = float(os.getenv("SMS_TIMEOUT_SECONDS", 15))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]

SENTRY_DSN = os.getenv("SENTRY_DSN")
