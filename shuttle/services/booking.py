"""Booking submission: Validate -> GenerateReference -> Notify -> Respond.

Each step is terminal on failure. Validation failures happen before any
provider call. A notification failure happens after the reference was
issued; that reference is then unconfirmed and the caller should discard it.
"""
import logging
import math
import re
from typing import List, Optional

import httpx

from shuttle.core.config import settings
from shuttle.core.enums import SameDayReturn, TripType
from shuttle.core.errors import ConfigError, FieldValidationError, ServiceNotConfigured
from shuttle.core.metrics import bookings_total
from shuttle.core.response_builders import build_booking_response
from shuttle.schemas.booking import BookingRecord, BookingRequest, BookingResponse
from shuttle.services.notifications import notify
from shuttle.services.pricing import DEFAULT_VEHICLE, calculate_price, lookup_vehicle
from shuttle.services.reference import generate_booking_reference

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "pickup", "dropoff", "distance", "price")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
FLEXIBLE = "Flexible"
PRICE_TOLERANCE = 0.01


def _is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _parse_amount(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _same_day_return(request: BookingRequest) -> Optional[SameDayReturn]:
    # only read for return trips; blank means not specified
    if request.trip_type != TripType.RETURN:
        return None
    value = _clean(request.same_day_return)
    if value is None:
        return None
    try:
        return SameDayReturn(value.lower())
    except ValueError:
        raise ConfigError(detail=f"unsupported sameDayReturn value: {value!r}")


def ensure_configured() -> None:
    if not settings.RESEND_API_KEY:
        logger.error("RESEND_API_KEY environment variable is not configured")
        raise ServiceNotConfigured("Email service not configured. Please contact support.")
    if not settings.OWNER_EMAIL:
        logger.error("OWNER_EMAIL environment variable is not configured")
        raise ServiceNotConfigured(
            "Admin notification email not configured. Please contact support."
        )


def validate(request: BookingRequest) -> None:
    missing: List[str] = [
        field for field in REQUIRED_FIELDS if _is_blank(getattr(request, field))
    ]
    if missing:
        raise FieldValidationError.missing(missing)

    if not EMAIL_RE.match(request.email.strip()):
        raise FieldValidationError.invalid_email()

    invalid = [
        field for field in ("distance", "price") if _parse_amount(getattr(request, field)) is None
    ]
    if invalid:
        raise FieldValidationError.invalid_number(invalid)

    lookup_vehicle(_clean(request.vehicle_type) or DEFAULT_VEHICLE)
    _same_day_return(request)


def build_record(request: BookingRequest, reference: str) -> BookingRecord:
    distance_km = _parse_amount(request.distance)
    quoted_price = _parse_amount(request.price)
    price = calculate_price(
        distance_km,
        _clean(request.vehicle_type) or DEFAULT_VEHICLE,
        request.trip_type,
    )
    if abs(price.total_price - quoted_price) > PRICE_TOLERANCE:
        logger.warning(
            f"Booking {reference}: client price R{quoted_price:.2f} differs from "
            f"server price R{price.total_price:.2f}; using server price"
        )

    return BookingRecord(
        reference=reference,
        name=request.name.strip(),
        email=request.email.strip(),
        phone=request.phone.strip(),
        passengers=request.passengers,
        pickup=_clean(request.pickup_address) or request.pickup.strip(),
        dropoff=_clean(request.dropoff_address) or request.dropoff.strip(),
        date=_clean(request.date) or FLEXIBLE,
        time=_clean(request.time) or FLEXIBLE,
        trip_type=request.trip_type,
        same_day_return=_same_day_return(request),
        return_date=_clean(request.return_date),
        return_time=_clean(request.return_time),
        vehicle=price.vehicle,
        price=price,
        quoted_price=quoted_price,
    )


async def submit_booking(request: BookingRequest, client: httpx.AsyncClient) -> BookingResponse:
    ensure_configured()
    try:
        validate(request)
    except (FieldValidationError, ConfigError):
        bookings_total.labels(outcome="invalid").inc()
        raise

    logger.info(f"Processing booking for {request.name} ({request.email})")

    reference = generate_booking_reference()
    record = build_record(request, reference)

    try:
        await notify(record, client)
    except Exception:
        bookings_total.labels(outcome="notification_failed").inc()
        raise

    bookings_total.labels(outcome="confirmed").inc()
    logger.info(
        f"Booking {reference} completed: {record.name} ({record.email}), "
        f"{record.pickup} -> {record.dropoff}, R{record.price.total_price:.2f}, {record.vehicle}"
    )
    return build_booking_response(record)
