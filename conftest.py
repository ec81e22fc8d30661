import asyncio
import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from shuttle.main import app
from shuttle.core.config import settings
from shuttle.core.http import get_http_client


SANDTON = "Sandton City, Johannesburg"
OR_TAMBO = "OR Tambo Airport"

PLACES = {
    SANDTON: {
        "geometry": {"type": "Point", "coordinates": [28.0567, -26.1076]},
        "properties": {"label": "Sandton City, Sandton, South Africa"},
    },
    OR_TAMBO: {
        "geometry": {"type": "Point", "coordinates": [28.2460, -26.1367]},
        "properties": {"label": "O.R. Tambo International Airport, Kempton Park, South Africa"},
    },
}

ROUTE_FEATURE = {
    "properties": {"summary": {"distance": 42.5, "duration": 1800.0}},
    "geometry": {
        "type": "LineString",
        "coordinates": [[28.0567, -26.1076], [28.1500, -26.1200], [28.2460, -26.1367]],
    },
}


class FakeProviders:
    """In-process stand-in for the geocoding, routing and email HTTP APIs.

    Plugged into httpx through ``MockTransport``; every request is recorded
    so tests can assert on call counts and payloads.
    """

    def __init__(self):
        self.places = dict(PLACES)
        self.geocode_status = 200
        self.route_status = 200
        self.route_features = [ROUTE_FEATURE]
        self.email_status = {}
        self.raise_on = set()
        self.calls = []

    def count(self, kind: str) -> int:
        return sum(1 for k, _ in self.calls if k == kind)

    def requests(self, kind: str) -> list:
        return [r for k, r in self.calls if k == kind]

    def geocoded_texts(self) -> list:
        return [r.url.params["text"] for r in self.requests("geocode")]

    def sent_emails(self) -> list:
        return [json.loads(r.content) for r in self.requests("email")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/geocode/search"):
            kind = "geocode"
        elif "/v2/directions/" in path:
            kind = "route"
        elif path.endswith("/emails"):
            kind = "email"
        else:
            return httpx.Response(404, json={"error": "unknown path"})
        self.calls.append((kind, request))

        if kind in self.raise_on:
            raise httpx.ConnectError("network unreachable", request=request)

        if kind == "geocode":
            if self.geocode_status != 200:
                return httpx.Response(self.geocode_status, json={"error": "geocoder down"})
            place = self.places.get(request.url.params["text"])
            return httpx.Response(200, json={"type": "FeatureCollection", "features": [place] if place else []})

        if kind == "route":
            if self.route_status != 200:
                return httpx.Response(self.route_status, json={"error": {"message": "routing failed"}})
            return httpx.Response(200, json={"type": "FeatureCollection", "features": self.route_features})

        recipient = json.loads(request.content)["to"][0]
        status = self.email_status.get(recipient, 200)
        if status != 200:
            return httpx.Response(status, json={"message": "rejected"})
        return httpx.Response(200, json={"id": f"email-{self.count('email')}"})


@pytest.fixture(autouse=True)
def configured_settings(monkeypatch):
    monkeypatch.setattr(settings, "ORS_API_KEY", "test-ors-key")
    monkeypatch.setattr(settings, "RESEND_API_KEY", "test-resend-key")
    monkeypatch.setattr(settings, "SENDER_EMAIL", "bookings@shuttle.test")
    monkeypatch.setattr(settings, "OWNER_EMAIL", "owner@shuttle.test")
    monkeypatch.setattr(settings, "DEBUG", False)
    return settings


@pytest.fixture
def providers():
    return FakeProviders()


@pytest.fixture
async def http_client(providers):
    async with httpx.AsyncClient(transport=httpx.MockTransport(providers.handler)) as client:
        yield client


@pytest.fixture
async def test_client(http_client):
    app.dependency_overrides[get_http_client] = lambda: http_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def valid_booking_data():
    return {
        "name": "Thandi Mokoena",
        "email": "thandi@example.co.za",
        "phone": "+27 82 555 0134",
        "passengers": 3,
        "pickup": SANDTON,
        "dropoff": OR_TAMBO,
        "pickupAddress": "Sandton City, Sandton, South Africa",
        "dropoffAddress": "O.R. Tambo International Airport, Kempton Park, South Africa",
        "date": "2026-11-02",
        "time": "07:30",
        "tripType": "single",
        "vehicleType": "suv",
        "distance": 42.5,
        "price": 687.5,
    }


class FakeRedis:
    """Minimal async key/value double for rate limit and idempotency tests."""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value.encode() if isinstance(value, str) else value

    async def incr(self, key):
        self.store[key] = str(int(self.store.get(key, 0)) + 1).encode()
        return int(self.store[key])


@pytest.fixture
def fake_redis(monkeypatch):
    import shuttle.core.redis as redis_module
    fake = FakeRedis()
    monkeypatch.setattr(redis_module, "redis", fake)
    return fake


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "notifications: marks tests related to booking emails"
    )
    config.addinivalue_line(
        "markers", "rate_limit: marks tests related to rate limiting"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
