from fastapi import APIRouter, Depends, Request

from app.models.booking import parse_booking
from app.models.envelope import api_response
from app.services.db_service import BookingStore

router = APIRouter()

def get_store(request: Request) -> BookingStore:
    return request.app.state.store

def get_logger(request: Request):
    return request.app.state.logger

@router.post("/bookings")
async def create_booking(
    request: Request,
    store: BookingStore = Depends(get_store),
    logger=Depends(get_logger),
):
    """
    Body is read manually so that malformed JSON and missing fields
    come back inside the envelope as 400 instead of FastAPI's 422.
    """
    try:
        payload = await request.json()
        booking = parse_booking(payload)
    except ValueError as e:  # malformed JSON or BookingValidationError
        logger.error(f"Error creating booking: {e}")
        return api_response(400, "Error creating booking", str(e))

    result = await store.insert_booking(booking)
    if not result.ok:
        logger.error(f"Error creating booking ({result.error.kind.value}): {result.error}")
        return api_response(400, "Error creating booking", str(result.error))

    logger.info(f"Booking created: {result.value.model_dump_json()}")
    return api_response(201, "Booking created successfully", result.value)

@router.get("/bookings")
async def list_bookings(
    store: BookingStore = Depends(get_store),
    logger=Depends(get_logger),
):
    result = await store.list_bookings()
    if not result.ok:
        logger.error(f"Error retrieving bookings ({result.error.kind.value}): {result.error}")
        return api_response(500, "Error retrieving bookings", str(result.error))

    return api_response(200, "Bookings retrieved successfully", result.value)
