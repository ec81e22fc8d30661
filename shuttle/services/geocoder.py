"""Free-text address resolution against the openrouteservice geocoder.

``resolve`` never raises for provider problems. It returns a tagged
``GeocodeOutcome`` so callers can tell "no such address" (the customer
should retype it) apart from "provider unreachable" (worth retrying).
"""
import logging
import math
import time

import httpx

from shuttle.core.config import settings
from shuttle.core.metrics import provider_calls, provider_duration
from shuttle.schemas.geo import GeocodeOutcome, GeocodeResult

logger = logging.getLogger(__name__)

GEOCODE_PATH = "/geocode/search"
ACCEPT = "application/json, application/geo+json, application/gpx+xml, img/png; charset=utf-8"


def _record(outcome: GeocodeOutcome, started: float) -> GeocodeOutcome:
    provider_calls.labels(provider="ors", operation="geocode", outcome=str(outcome.status)).inc()
    provider_duration.labels(provider="ors", operation="geocode").observe(time.time() - started)
    return outcome


def _parse_feature(feature: dict, address: str) -> GeocodeResult:
    lon, lat = feature["geometry"]["coordinates"][:2]
    lon, lat = float(lon), float(lat)
    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise ValueError(f"non-finite coordinates {lon}, {lat}")
    label = (feature.get("properties") or {}).get("label") or address
    return GeocodeResult(coordinates=(lon, lat), label=label)


async def resolve(address: str, client: httpx.AsyncClient) -> GeocodeOutcome:
    """Resolve ``address`` to the single best match inside the configured country."""
    started = time.time()
    params = {
        "api_key": settings.ORS_API_KEY,
        "text": address,
        "boundary.country": settings.GEOCODE_COUNTRY,
        "size": 1,
    }
    logger.info(f"Geocoding: {address}")
    try:
        response = await client.get(
            f"{settings.ORS_BASE_URL}{GEOCODE_PATH}",
            params=params,
            headers={"Accept": ACCEPT},
        )
        if not response.is_success:
            logger.error(
                f"Geocoding failed for {address!r}: {response.status_code} {response.reason_phrase}"
            )
            return _record(GeocodeOutcome.not_found(), started)

        features = response.json().get("features") or []
        if not features:
            logger.warning(f"No geocoding results for: {address}")
            return _record(GeocodeOutcome.not_found(), started)

        return _record(GeocodeOutcome.hit(_parse_feature(features[0], address)), started)
    except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        logger.error(f"Geocoding error for {address!r}: {e}")
        return _record(GeocodeOutcome.unavailable(str(e)), started)
