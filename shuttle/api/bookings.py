import logging
from typing import Optional
import httpx
from fastapi import APIRouter, Depends, Header

from shuttle.schemas.booking import BookingRequest, BookingResponse
from shuttle.services.booking import submit_booking
from shuttle.core.http import get_http_client
from shuttle.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse)
async def create_booking(
    payload: BookingRequest,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    body = payload.model_dump(mode="json")
    cached = await get_idempotent(idempotency_key, body)
    if cached:
        logger.info(f"Replaying booking {cached.get('bookingReference')} for Idempotency-Key {idempotency_key}")
        return cached

    result = await submit_booking(payload, client)

    await set_idempotent(idempotency_key, body, result.model_dump(mode="json", by_alias=True))
    return result
