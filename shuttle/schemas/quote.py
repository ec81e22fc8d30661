from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from shuttle.core.enums import TripType, VehicleClass
from shuttle.schemas.geo import Coordinates, GeocodeResult, LatLng, RouteResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceBreakdown(CamelModel):
    vehicle: VehicleClass
    vehicle_name: str
    vehicle_rate: float
    distance_km: float
    base_fee: float
    distance_charge: float
    total_price: float
    is_return_trip: bool


class QuoteRequest(CamelModel):
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    vehicle: Optional[str] = None
    trip_type: TripType = TripType.SINGLE


class PriceRequest(CamelModel):
    distance_km: float = Field(..., ge=0)
    vehicle: str
    trip_type: TripType = TripType.SINGLE


class Quote(BaseModel):
    pickup: GeocodeResult
    dropoff: GeocodeResult
    route: RouteResult
    price: PriceBreakdown


class QuoteSummary(CamelModel):
    distance: str
    duration: str
    coordinates: str


class QuoteResponse(CamelModel):
    success: bool = True
    pickup_address: str
    dropoff_address: str
    pickup_coords: Coordinates
    dropoff_coords: Coordinates
    distance: float
    duration: int
    vehicle: VehicleClass
    geometry: List[LatLng]
    price: PriceBreakdown
    summary: QuoteSummary


class VehicleOut(CamelModel):
    vehicle: VehicleClass
    name: str
    rate: float


class VehicleTableResponse(CamelModel):
    base_fee: float
    vehicles: List[VehicleOut]
