from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from bson.errors import BSONError, InvalidBSON
from pydantic import ValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError, WriteError

from app.core.config import Settings
from app.models.booking import Booking, BookingCreate

T = TypeVar("T")

class StorageErrorKind(str, Enum):
    UNAVAILABLE = "unavailable"  # server unreachable / selection timed out
    REJECTED = "rejected"        # server or encoder refused the document
    CORRUPT = "corrupt"          # stored document is not a booking
    FAILED = "failed"

@dataclass
class StorageError:
    kind: StorageErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

@dataclass
class StorageResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[StorageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StorageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: StorageErrorKind, message: str) -> "StorageResult[T]":
        return cls(error=StorageError(kind, message))

def classify_error(exc: Exception) -> StorageErrorKind:
    if isinstance(exc, ConnectionFailure):
        return StorageErrorKind.UNAVAILABLE
    if isinstance(exc, (WriteError, OperationFailure)):
        return StorageErrorKind.REJECTED
    if isinstance(exc, (InvalidBSON, ValidationError)):
        return StorageErrorKind.CORRUPT
    if isinstance(exc, BSONError):
        return StorageErrorKind.REJECTED
    return StorageErrorKind.FAILED

class BookingStore:
    """
    Single shared MongoDB client for the bookings collection.

    Every operation issues exactly one driver call and reports failures as a
    StorageResult instead of raising.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        collection: str,
        logger,
        timeout_ms: int = 5000,
        client: Any = None,
    ):
        self.logger = logger
        self._client = client or AsyncMongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
        self._db = self._client.get_default_database(default=db_name)
        self._collection = self._db[collection]

    @classmethod
    def from_settings(cls, config: Settings, logger) -> "BookingStore":
        return cls(
            config.MONGODB_URI,
            config.MONGODB_DB_NAME,
            config.MONGODB_COLLECTION,
            logger,
            timeout_ms=config.MONGODB_TIMEOUT_MS,
        )

    async def connect(self) -> bool:
        """Ping once; failure is logged and the app keeps running."""
        try:
            await self._client.admin.command("ping")
            self.logger.info("Connected to MongoDB")
            return True
        except Exception as e:
            self.logger.error(f"Error connecting to MongoDB: {e}")
            return False

    async def insert_booking(self, booking: BookingCreate) -> StorageResult[Booking]:
        doc = booking.model_dump()
        try:
            await self._collection.insert_one(doc)
            return StorageResult.success(Booking.from_document(doc))
        except (PyMongoError, BSONError, ValidationError) as e:
            kind = classify_error(e)
            self.logger.debug(f"insert_booking failed ({kind.value}): {e}")
            return StorageResult.failure(kind, str(e))

    async def list_bookings(self) -> StorageResult[List[Booking]]:
        try:
            docs = await self._collection.find().to_list(None)
            return StorageResult.success([Booking.from_document(doc) for doc in docs])
        except (PyMongoError, BSONError, ValidationError) as e:
            kind = classify_error(e)
            self.logger.debug(f"list_bookings failed ({kind.value}): {e}")
            return StorageResult.failure(kind, str(e))

    async def close(self):
        await self._client.close()
        self.logger.info("MongoDB connection closed")
