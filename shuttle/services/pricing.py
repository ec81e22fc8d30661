from typing import Union
from shuttle.schemas.quote import PriceBreakdown
from shuttle.core.enums import TripType, VehicleClass
from shuttle.core.errors import ConfigError
from shuttle.core.config import settings

VEHICLE_RATES = {
    VehicleClass.PREMIER_SEDAN: 8.0,
    VehicleClass.LUXURY_SEDAN: 12.0,
    VehicleClass.SUV: 15.0,
    VehicleClass.VAN_7_SEATER: 18.0,
    VehicleClass.VAN_14_SEATER: 25.0,
    VehicleClass.MINIBUS: 30.0,
}
VEHICLE_NAMES = {
    VehicleClass.PREMIER_SEDAN: "Premier Sedan",
    VehicleClass.LUXURY_SEDAN: "Luxury Sedan",
    VehicleClass.SUV: "SUV",
    VehicleClass.VAN_7_SEATER: "Van (7 Seater)",
    VehicleClass.VAN_14_SEATER: "Van (14 Seater)",
    VehicleClass.MINIBUS: "Minibus",
}
DEFAULT_VEHICLE = VehicleClass.PREMIER_SEDAN
RETURN_MULTIPLIER = 2


def lookup_vehicle(vehicle: Union[str, VehicleClass]) -> VehicleClass:
    """Exact, case-sensitive lookup in the closed rate table."""
    try:
        vehicle_class = VehicleClass(vehicle)
    except ValueError:
        raise ConfigError(detail=f"unknown vehicle class {vehicle!r}")
    if vehicle_class not in VEHICLE_RATES:
        raise ConfigError(detail=f"no rate configured for {vehicle_class}")
    return vehicle_class


def calculate_price(
    distance_km: float,
    vehicle: Union[str, VehicleClass],
    trip_type: Union[str, TripType] = TripType.SINGLE,
) -> PriceBreakdown:
    """Price a trip. Return trips bill the one-way distance twice.

    No rounding is applied; display code formats to 2 decimals.
    """
    if distance_km < 0:
        raise ConfigError(detail=f"negative distance {distance_km}")
    vehicle_class = lookup_vehicle(vehicle)
    try:
        trip = TripType(trip_type)
    except ValueError:
        raise ConfigError(detail=f"unknown trip type {trip_type!r}")

    rate = VEHICLE_RATES[vehicle_class]
    is_return = trip == TripType.RETURN
    distance_charge = distance_km * rate
    if is_return:
        distance_charge *= RETURN_MULTIPLIER

    return PriceBreakdown(
        vehicle=vehicle_class,
        vehicle_name=VEHICLE_NAMES[vehicle_class],
        vehicle_rate=rate,
        distance_km=distance_km,
        base_fee=settings.BASE_FEE,
        distance_charge=distance_charge,
        total_price=settings.BASE_FEE + distance_charge,
        is_return_trip=is_return,
    )
