from typing import Any, Dict
from datetime import date as date_type, datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

class BookingValidationError(ValueError):
    """Raised when a request body cannot be turned into a booking."""

class BookingCreate(BaseModel):
    # Unknown body fields are dropped, never stored
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    service: str = Field(..., min_length=1)
    date: datetime

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> datetime:
        """Always UTC-aware; naive input (and naive driver output) is taken as UTC."""
        if isinstance(value, datetime):
            return to_utc(value)
        if isinstance(value, date_type):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        if isinstance(value, str):
            try:
                return to_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
            except ValueError:
                raise ValueError(f"invalid date '{value}', expected ISO-8601")
        raise ValueError("date must be an ISO-8601 string")

class Booking(BookingCreate):
    id: str

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Booking":
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc["_id"])
        return cls.model_validate(data)

def format_validation_error(exc: ValidationError) -> str:
    details = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        details.append(f"{field}: {err['msg']}")
    return "Booking validation failed: " + "; ".join(details)

def parse_booking(payload: Any) -> BookingCreate:
    """
    Validate a decoded JSON body into a BookingCreate.
    Raises BookingValidationError listing every failing field.
    """
    try:
        return BookingCreate.model_validate(payload)
    except ValidationError as e:
        raise BookingValidationError(format_validation_error(e)) from e
