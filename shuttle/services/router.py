import logging

import httpx

from shuttle.core.config import settings
from shuttle.core.errors import RouteError
from shuttle.core.metrics import track_provider_call
from shuttle.schemas.geo import Coordinates, RouteResult
from shuttle.services.geocoder import ACCEPT

logger = logging.getLogger(__name__)

DIRECTIONS_PATH = "/v2/directions/driving-car/geojson"


def _swap_axes(coordinates: list) -> list:
    # provider order is (lon, lat); map consumers expect (lat, lon)
    return [(float(point[1]), float(point[0])) for point in coordinates]


@track_provider_call("ors", "route")
async def compute_route(start: Coordinates, end: Coordinates, client: httpx.AsyncClient) -> RouteResult:
    logger.info(f"Calculating route {start} -> {end}")
    try:
        response = await client.post(
            f"{settings.ORS_BASE_URL}{DIRECTIONS_PATH}",
            headers={
                "Authorization": settings.ORS_API_KEY,
                "Content-Type": "application/json",
                "Accept": ACCEPT,
            },
            json={
                "coordinates": [list(start), list(end)],
                "instructions": False,
                "units": "km",
            },
        )
    except httpx.HTTPError as e:
        logger.error(f"Route calculation network error: {e}")
        raise RouteError(f"network error calling routing provider: {e}") from e

    if not response.is_success:
        logger.error(f"Route calculation failed: {response.status_code} {response.text}")
        raise RouteError(
            f"Route calculation failed: {response.status_code} {response.reason_phrase}",
            upstream_status=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise RouteError(f"Malformed routing response: {e}", upstream_status=response.status_code) from e

    features = data.get("features") or []
    if not features:
        raise RouteError("No route found between the specified coordinates")

    route = features[0]
    summary = (route.get("properties") or {}).get("summary") or {}
    geometry = (route.get("geometry") or {}).get("coordinates") or []

    # units=km: the provider reports distance in kilometres
    return RouteResult(
        distance_meters=float(summary.get("distance", 0.0)) * 1000,
        duration_seconds=float(summary.get("duration", 0.0)),
        geometry=_swap_axes(geometry),
    )
