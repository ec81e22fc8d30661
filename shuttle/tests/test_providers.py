import json

import httpx
import pytest

from conftest import SANDTON
from shuttle.core.enums import GeocodeStatus
from shuttle.core.errors import RouteError
from shuttle.services import geocoder, router


class TestGeocoder:

    async def test_resolves_address_to_coordinates_and_label(self, http_client, providers):
        outcome = await geocoder.resolve(SANDTON, http_client)

        assert outcome.status == GeocodeStatus.FOUND
        assert outcome.found
        assert outcome.result.coordinates == (28.0567, -26.1076)
        assert outcome.result.label == "Sandton City, Sandton, South Africa"

    async def test_request_is_scoped_to_country_with_single_result(self, http_client, providers):
        await geocoder.resolve(SANDTON, http_client)

        params = providers.requests("geocode")[0].url.params
        assert params["text"] == SANDTON
        assert params["boundary.country"] == "ZA"
        assert params["size"] == "1"
        assert params["api_key"] == "test-ors-key"

    async def test_label_falls_back_to_input(self, http_client, providers):
        providers.places["12 Main Road"] = {"geometry": {"coordinates": [18.42, -33.92]}, "properties": {}}

        outcome = await geocoder.resolve("12 Main Road", http_client)

        assert outcome.result.label == "12 Main Road"

    async def test_zero_matches_is_not_found(self, http_client, providers):
        outcome = await geocoder.resolve("Nowhere Street 999", http_client)

        assert outcome.status == GeocodeStatus.NOT_FOUND
        assert outcome.result is None

    async def test_non_success_status_is_not_found(self, http_client, providers):
        providers.geocode_status = 500

        outcome = await geocoder.resolve(SANDTON, http_client)

        assert outcome.status == GeocodeStatus.NOT_FOUND

    async def test_transport_fault_is_provider_unavailable(self, http_client, providers):
        providers.raise_on.add("geocode")

        outcome = await geocoder.resolve(SANDTON, http_client)

        assert outcome.status == GeocodeStatus.PROVIDER_UNAVAILABLE
        assert "network" in outcome.detail

    async def test_malformed_body_is_provider_unavailable(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>not json</html>")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            outcome = await geocoder.resolve(SANDTON, client)

        assert outcome.status == GeocodeStatus.PROVIDER_UNAVAILABLE


class TestRouter:

    async def test_route_distance_duration_and_swapped_geometry(self, http_client, providers):
        route = await router.compute_route((28.0567, -26.1076), (28.2460, -26.1367), http_client)

        assert route.distance_meters == 42500.0
        assert route.distance_km == 42.5
        assert route.duration_seconds == 1800.0
        assert route.duration_minutes == 30
        assert route.geometry == [(-26.1076, 28.0567), (-26.12, 28.15), (-26.1367, 28.246)]

    async def test_request_body(self, http_client, providers):
        await router.compute_route((28.0567, -26.1076), (28.2460, -26.1367), http_client)

        request = providers.requests("route")[0]
        assert request.headers["Authorization"] == "test-ors-key"
        assert request.url.path == "/v2/directions/driving-car/geojson"
        body = json.loads(request.content)
        assert body == {
            "coordinates": [[28.0567, -26.1076], [28.2460, -26.1367]],
            "instructions": False,
            "units": "km",
        }

    async def test_single_attempt_on_failure(self, http_client, providers):
        providers.route_status = 500

        with pytest.raises(RouteError) as exc_info:
            await router.compute_route((0.0, 0.0), (1.0, 1.0), http_client)

        assert exc_info.value.upstream_status == 500
        assert providers.count("route") == 1

    async def test_no_features_is_no_route(self, http_client, providers):
        providers.route_features = []

        with pytest.raises(RouteError) as exc_info:
            await router.compute_route((0.0, 0.0), (1.0, 1.0), http_client)

        assert "No route found" in str(exc_info.value)

    async def test_rejected_key_carries_upstream_status(self, http_client, providers):
        providers.route_status = 403

        with pytest.raises(RouteError) as exc_info:
            await router.compute_route((0.0, 0.0), (1.0, 1.0), http_client)

        assert exc_info.value.upstream_status == 403

    async def test_transport_fault_is_route_error(self, http_client, providers):
        providers.raise_on.add("route")

        with pytest.raises(RouteError) as exc_info:
            await router.compute_route((0.0, 0.0), (1.0, 1.0), http_client)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.upstream_status is None

    async def test_empty_geometry_allowed(self, http_client, providers):
        providers.route_features = [{"properties": {"summary": {"distance": 0.0, "duration": 0.0}}, "geometry": {"coordinates": []}}]

        route = await router.compute_route((0.0, 0.0), (0.0, 0.0), http_client)

        assert route.geometry == []
        assert route.distance_meters == 0.0
