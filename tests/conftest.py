import sys
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from loguru import logger

from app.core.config import Settings
from app.main import create_app
from app.models.booking import Booking
from app.services.db_service import StorageErrorKind, StorageResult

class FakeBookingStore:
    """In-memory stand-in for BookingStore."""

    def __init__(self, available: bool = True):
        self.available = available
        self.docs = []
        self.connected = False
        self.closed = False

    async def connect(self):
        self.connected = self.available
        return self.available

    async def insert_booking(self, booking):
        if not self.available:
            return StorageResult.failure(StorageErrorKind.UNAVAILABLE, "connection refused")
        doc = booking.model_dump()
        doc["_id"] = ObjectId()
        self.docs.append(doc)
        return StorageResult.success(Booking.from_document(doc))

    async def list_bookings(self):
        if not self.available:
            return StorageResult.failure(StorageErrorKind.UNAVAILABLE, "No servers available: connection refused")
        return StorageResult.success([Booking.from_document(doc) for doc in self.docs])

    async def close(self):
        self.closed = True

@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()
    sys.excepthook = sys.__excepthook__

@pytest.fixture
def test_settings(tmp_path):
    return Settings(LOG_DIR=str(tmp_path / "logs"), ENVIRONMENT="test")

@pytest.fixture
def store():
    return FakeBookingStore()

@pytest.fixture
def client(test_settings, store):
    app = create_app(test_settings, store=store)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

@pytest.fixture
def fake_store_cls():
    return FakeBookingStore
