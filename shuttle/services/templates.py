"""Subjects and plain HTML bodies for the two booking notifications."""
from datetime import datetime, timezone
from html import escape
from typing import List, Optional, Tuple

from shuttle.core.enums import SameDayReturn, TripType
from shuttle.schemas.booking import BookingRecord

BUSINESS_NAME = "Modjadji's Shuttle Service"
SAME_DAY_LABELS = {SameDayReturn.YES: "Yes", SameDayReturn.NO: "No"}


def _rows(rows: List[Tuple[str, object]]) -> str:
    return "".join(
        f"<tr><td><strong>{escape(label)}</strong></td><td>{escape(str(value))}</td></tr>"
        for label, value in rows
    )


def _trip_rows(record: BookingRecord) -> List[Tuple[str, object]]:
    rows = [
        ("Pickup", record.pickup),
        ("Drop-off", record.dropoff),
        ("Date", record.date),
        ("Time", record.time),
        ("Trip type", "Return" if record.trip_type == TripType.RETURN else "Single"),
    ]
    if record.trip_type == TripType.RETURN:
        rows.append(("Same-day return", SAME_DAY_LABELS.get(record.same_day_return, "Not specified")))
        if record.has_return_leg_schedule:
            rows.append(("Return date", record.return_date))
            rows.append(("Return time", record.return_time or "Flexible"))
    if record.passengers:
        rows.append(("Passengers", record.passengers))
    return rows


def _price_rows(record: BookingRecord) -> List[Tuple[str, object]]:
    price = record.price
    distance_note = " (one way x 2 for return)" if price.is_return_trip else ""
    return [
        ("Vehicle", f"{price.vehicle_name} (R{price.vehicle_rate:g}/km)"),
        ("Distance", f"{price.distance_km:.1f} km{distance_note}"),
        ("Base fee", f"R{price.base_fee:.2f}"),
        ("Distance charge", f"R{price.distance_charge:.2f}"),
        ("Total", f"R{price.total_price:.2f}"),
    ]


def customer_subject(record: BookingRecord) -> str:
    return f"Your Shuttle Quote #{record.reference} - R{record.price.total_price:.2f}"


def operator_subject(record: BookingRecord) -> str:
    return f"New Booking #{record.reference} - {record.name}"


def customer_html(record: BookingRecord) -> str:
    return (
        f"<html><body>"
        f"<h1>{escape(BUSINESS_NAME)}</h1>"
        f"<p>Booking reference: <strong>{escape(record.reference)}</strong><br>"
        f"Save this number for all communications.</p>"
        f"<p>Hi {escape(record.name)}, thank you for choosing {escape(BUSINESS_NAME)}! "
        f"Your booking request has been received and a quote has been prepared.</p>"
        f"<h2>Trip details</h2><table>{_rows(_trip_rows(record))}</table>"
        f"<h2>Quote</h2><table>{_rows(_price_rows(record))}</table>"
        f"<p>Includes 15% VAT. Price guaranteed for 24 hours.</p>"
        f"<p>Please do not reply to this email.</p>"
        f"</body></html>"
    )


def operator_html(record: BookingRecord, received_at: Optional[datetime] = None) -> str:
    received_at = received_at or datetime.now(timezone.utc)
    customer = [("Name", record.name), ("Email", record.email), ("Phone", record.phone)]
    return (
        f"<html><body>"
        f"<h1>New booking {escape(record.reference)}</h1>"
        f"<p>Contact customer within <strong>2 hours</strong> to confirm booking availability.</p>"
        f"<p>Received: {escape(received_at.isoformat(timespec='seconds'))}</p>"
        f"<h2>Customer</h2><table>{_rows(customer)}</table>"
        f"<h2>Trip</h2><table>{_rows(_trip_rows(record))}</table>"
        f"<h2>Pricing</h2><table>{_rows(_price_rows(record))}</table>"
        f"<p>Booking Reference: <strong>{escape(record.reference)}</strong></p>"
        f"</body></html>"
    )
