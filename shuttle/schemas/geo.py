from pydantic import BaseModel
from typing import List, Optional, Tuple
from shuttle.core.enums import GeocodeStatus

# (longitude, latitude), as returned by the mapping provider
Coordinates = Tuple[float, float]

# (latitude, longitude), as consumed by map renderers
LatLng = Tuple[float, float]


class GeocodeResult(BaseModel):
    coordinates: Coordinates
    label: str


class GeocodeOutcome(BaseModel):
    status: GeocodeStatus
    result: Optional[GeocodeResult] = None
    detail: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == GeocodeStatus.FOUND

    @classmethod
    def hit(cls, result: GeocodeResult) -> "GeocodeOutcome":
        return cls(status=GeocodeStatus.FOUND, result=result)

    @classmethod
    def not_found(cls) -> "GeocodeOutcome":
        return cls(status=GeocodeStatus.NOT_FOUND)

    @classmethod
    def unavailable(cls, detail: str) -> "GeocodeOutcome":
        return cls(status=GeocodeStatus.PROVIDER_UNAVAILABLE, detail=detail)


class RouteResult(BaseModel):
    distance_meters: float
    duration_seconds: float
    geometry: List[LatLng] = []

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000

    @property
    def duration_minutes(self) -> int:
        return round(self.duration_seconds / 60)
