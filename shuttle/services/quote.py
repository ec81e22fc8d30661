"""Quote pipeline: geocode pickup, geocode dropoff, route, price.

The steps run strictly in sequence and stop at the first failure, so a
quote costs at most three provider calls and a bad pickup address never
triggers a dropoff lookup.
"""
import logging
from typing import Optional, Union

import httpx

from shuttle.core.config import settings
from shuttle.core.enums import GeocodeStatus, TripType, VehicleClass
from shuttle.core.errors import (
    AddressNotFound,
    AuthConfigError,
    FieldValidationError,
    RouteError,
    ServiceNotConfigured,
    ShuttleError,
    TransportError,
    UnknownQuoteError,
)
from shuttle.schemas.geo import GeocodeResult
from shuttle.schemas.quote import Quote
from shuttle.services import geocoder, router
from shuttle.services.pricing import DEFAULT_VEHICLE, calculate_price, lookup_vehicle

logger = logging.getLogger(__name__)

AUTH_MARKERS = ("API key", "authentication")
TRANSPORT_MARKERS = ("network", "fetch")
NO_ROUTE_MARKERS = ("No route found",)
AUTH_STATUSES = (401, 403)
THROTTLED_STATUS = 429


def _is_provider_fault(exc: RouteError) -> bool:
    # provider-side failure, not a fact about the addresses
    status = exc.upstream_status or 0
    return status >= 500 or status == THROTTLED_STATUS or isinstance(exc.__cause__, ValueError)


def classify_fault(exc: Exception) -> ShuttleError:
    """Map a fault to a user-facing category.

    Router failures caused by rejected credentials or an unreachable
    provider are re-labelled so the customer gets an actionable message.
    Provider outages and throttling get the generic failure message, so the
    "no route" message is kept for a missing path. Other domain errors pass
    through; anything else is classified by the markers in its message text.
    """
    if isinstance(exc, RouteError):
        if exc.upstream_status in AUTH_STATUSES:
            return AuthConfigError(detail=str(exc))
        if isinstance(exc.__cause__, httpx.TransportError):
            return TransportError(detail=str(exc))
        if _is_provider_fault(exc):
            return UnknownQuoteError(detail=str(exc))
        return exc
    if isinstance(exc, ShuttleError):
        return exc
    text = str(exc)
    if any(marker in text for marker in AUTH_MARKERS):
        return AuthConfigError(detail=text)
    if any(marker in text for marker in TRANSPORT_MARKERS):
        return TransportError(detail=text)
    if any(marker in text for marker in NO_ROUTE_MARKERS):
        return RouteError(text)
    return UnknownQuoteError(detail=text)


def ensure_configured() -> None:
    if not settings.ORS_API_KEY:
        logger.error("ORS_API_KEY environment variable is not configured")
        raise ServiceNotConfigured("Server configuration error: Routing service not configured")


async def _geocode(field: str, address: str, client: httpx.AsyncClient) -> GeocodeResult:
    outcome = await geocoder.resolve(address, client)
    if outcome.status == GeocodeStatus.NOT_FOUND:
        raise AddressNotFound(field, address)
    if outcome.status == GeocodeStatus.PROVIDER_UNAVAILABLE:
        raise TransportError(detail=f"geocoding {field} failed: {outcome.detail}")
    return outcome.result


async def get_quote(
    pickup: Optional[str],
    dropoff: Optional[str],
    client: httpx.AsyncClient,
    vehicle: Optional[Union[str, VehicleClass]] = None,
    trip_type: Union[str, TripType] = TripType.SINGLE,
) -> Quote:
    ensure_configured()
    pickup = (pickup or "").strip()
    dropoff = (dropoff or "").strip()
    missing = [name for name, value in (("pickup", pickup), ("dropoff", dropoff)) if not value]
    if missing:
        raise FieldValidationError.missing(missing)

    vehicle_class = lookup_vehicle(vehicle or DEFAULT_VEHICLE)

    logger.info(f"Route request: {pickup} -> {dropoff}")
    try:
        start = await _geocode("pickup", pickup, client)
        end = await _geocode("dropoff", dropoff, client)
        logger.info(f"Geocoded: {start.label} -> {end.label}")

        route = await router.compute_route(start.coordinates, end.coordinates, client)
    except Exception as e:
        error = classify_fault(e)
        logger.error(f"Route calculation error: {error.kind}: {e}")
        if error is e:
            raise
        raise error from e

    price = calculate_price(route.distance_km, vehicle_class, trip_type)
    logger.info(
        f"Route calculated: {route.distance_km:.1f} km, {route.duration_minutes} min, "
        f"R{price.total_price:.2f} ({vehicle_class})"
    )
    return Quote(pickup=start, dropoff=end, route=route, price=price)
