from pydantic import BaseModel
from typing import Optional, Union
from datetime import datetime
from shuttle.core.enums import TripType, SameDayReturn, VehicleClass
from shuttle.schemas.quote import CamelModel, PriceBreakdown

Number = Union[float, str]


class BookingRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    passengers: Optional[int] = None

    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    pickup_address: Optional[str] = None
    dropoff_address: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None

    trip_type: TripType = TripType.SINGLE
    same_day_return: Optional[str] = None
    return_date: Optional[str] = None
    return_time: Optional[str] = None

    vehicle_type: Optional[str] = None
    distance: Optional[Number] = None
    price: Optional[Number] = None


class BookingRecord(BaseModel):
    reference: str
    name: str
    email: str
    phone: str
    passengers: Optional[int] = None
    pickup: str
    dropoff: str
    date: str
    time: str
    trip_type: TripType
    same_day_return: Optional[SameDayReturn] = None
    return_date: Optional[str] = None
    return_time: Optional[str] = None
    vehicle: VehicleClass
    price: PriceBreakdown
    quoted_price: float

    @property
    def has_return_leg_schedule(self) -> bool:
        return (
            self.trip_type == TripType.RETURN
            and self.same_day_return == SameDayReturn.NO
            and bool(self.return_date)
        )


class NotificationResult(BaseModel):
    reference: str
    customer_sent: bool
    operator_sent: bool


class CustomerOut(CamelModel):
    name: str
    email: str
    phone: str


class TripOut(CamelModel):
    pickup: str
    dropoff: str
    distance: float
    price: float
    trip_type: TripType
    vehicle: VehicleClass


class BookingData(CamelModel):
    customer: CustomerOut
    trip: TripOut
    reference: str
    timestamp: datetime


class BookingResponse(CamelModel):
    success: bool = True
    message: str
    booking_reference: str
    confirmation_sent_to: str
    data: BookingData
