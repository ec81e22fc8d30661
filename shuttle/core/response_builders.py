from datetime import datetime, timezone
from shuttle.schemas.booking import (
    BookingData,
    BookingRecord,
    BookingResponse,
    CustomerOut,
    TripOut,
)
from shuttle.schemas.quote import Quote, QuoteResponse, QuoteSummary, VehicleOut, VehicleTableResponse


def build_quote_summary(quote: Quote) -> QuoteSummary:
    start_lon, start_lat = quote.pickup.coordinates
    end_lon, end_lat = quote.dropoff.coordinates
    return QuoteSummary(
        distance=f"{quote.route.distance_km:.1f} km",
        duration=f"{quote.route.duration_minutes} min",
        coordinates=(
            f"From [{start_lat:.4f}, {start_lon:.4f}] "
            f"to [{end_lat:.4f}, {end_lon:.4f}]"
        ),
    )


def build_quote_response(quote: Quote) -> QuoteResponse:
    return QuoteResponse(
        pickup_address=quote.pickup.label,
        dropoff_address=quote.dropoff.label,
        pickup_coords=quote.pickup.coordinates,
        dropoff_coords=quote.dropoff.coordinates,
        distance=quote.route.distance_km,
        duration=quote.route.duration_minutes,
        vehicle=quote.price.vehicle,
        geometry=quote.route.geometry,
        price=quote.price,
        summary=build_quote_summary(quote),
    )


def build_vehicle_table(base_fee: float, rates: dict, names: dict) -> VehicleTableResponse:
    return VehicleTableResponse(
        base_fee=base_fee,
        vehicles=[
            VehicleOut(vehicle=vehicle, name=names[vehicle], rate=rate)
            for vehicle, rate in rates.items()
        ],
    )


def build_booking_response(record: BookingRecord) -> BookingResponse:
    return BookingResponse(
        message="Quote sent successfully to your email",
        booking_reference=record.reference,
        confirmation_sent_to=record.email,
        data=BookingData(
            customer=CustomerOut(name=record.name, email=record.email, phone=record.phone),
            trip=TripOut(
                pickup=record.pickup,
                dropoff=record.dropoff,
                distance=record.price.distance_km,
                price=record.price.total_price,
                trip_type=record.trip_type,
                vehicle=record.vehicle,
            ),
            reference=record.reference,
            timestamp=datetime.now(timezone.utc),
        ),
    )
