import sys
import os

# Add project root to Python path
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT_DIR)

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app

from api.deps import get_sms_sender
from core.exceptions import DeliveryError
from db import get_db
from models import Base
from tests.factories import fake_phone


# -----------------------------------------
# Create test engine + session
# -----------------------------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


# -----------------------------------------
# Override DB dependency in FastAPI
# -----------------------------------------
def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# -----------------------------------------
# Recording SMS sender
# -----------------------------------------
class FakeSender:
    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_otp(self, phone, code):
        self.sent.append((phone, code))
        if self.fail:
            raise DeliveryError(detail="provider unavailable")

    def last_code(self, phone):
        for sent_phone, code in reversed(self.sent):
            if sent_phone == phone:
                return code
        return None

    def reset(self):
        self.sent = []
        self.fail = False


fake_sender = FakeSender()

app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_sms_sender] = lambda: fake_sender


# -----------------------------------------
# PYTEST GLOBAL SETUP
# -----------------------------------------
@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create tables before tests start."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    db = TestingSessionLocal()
    for table in reversed(Base.metadata.sorted_tables):
        db.execute(table.delete())
    db.commit()
    db.close()
    fake_sender.reset()


@pytest.fixture
def sender():
    return fake_sender


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# -----------------------------------------
# Test Client
# -----------------------------------------
@pytest.fixture(scope="session")
def client():
    return TestClient(app)


# -----------------------------------------
# Log in through the OTP flow
# -----------------------------------------
def login(client, sender, phone):
    res = client.post("/api/send-otp", json={"phone": phone})
    assert res.status_code == 200, res.text

    res = client.post("/api/verify-otp", json={"phone": phone, "otp": sender.last_code(phone)})
    assert res.status_code == 200, res.text
    return res.json()["token"]


@pytest.fixture
def user_phone():
    return fake_phone()


@pytest.fixture
def user_token(client, sender, user_phone):
    return login(client, sender, user_phone)


# -----------------------------------------
# Authorized Client Fixture
# -----------------------------------------
@pytest.fixture
def auth_client(user_token):
    return TestClient(app, headers={"Authorization": f"Bearer {user_token}"})
