"""Customer confirmation and operator alert for a submitted booking.

The two sends are sequential and asymmetric: the customer email must go
out or the booking fails, while a failed operator alert is logged and
counted but does not fail the booking.
"""
import logging

import httpx

from shuttle.core.config import settings
from shuttle.core.errors import NotificationError
from shuttle.core.metrics import notification_deliveries
from shuttle.schemas.booking import BookingRecord, NotificationResult
from shuttle.services import templates
from shuttle.services.email import send_email

logger = logging.getLogger(__name__)

CUSTOMER_TAGS = [{"name": "category", "value": "booking-quote"}]
OPERATOR_TAGS = [
    {"name": "category", "value": "new-booking"},
    {"name": "priority", "value": "high"},
]


async def notify(record: BookingRecord, client: httpx.AsyncClient) -> NotificationResult:
    customer_sent = await send_email(
        client,
        to=[record.email],
        subject=templates.customer_subject(record),
        html=templates.customer_html(record),
        tags=CUSTOMER_TAGS,
    )
    notification_deliveries.labels(
        recipient="customer", status="sent" if customer_sent else "failed"
    ).inc()
    if not customer_sent:
        logger.error(f"Customer email failed for booking {record.reference}")
        raise NotificationError(detail="Failed to send customer confirmation email")

    logger.info(f"Customer email sent to {record.email}")

    operator_sent = await send_email(
        client,
        to=[settings.OWNER_EMAIL],
        subject=templates.operator_subject(record),
        html=templates.operator_html(record),
        tags=OPERATOR_TAGS,
    )
    notification_deliveries.labels(
        recipient="operator", status="sent" if operator_sent else "failed"
    ).inc()
    if operator_sent:
        logger.info(f"Admin email sent to {settings.OWNER_EMAIL}")
    else:
        logger.error(
            f"Operator notification failed for booking {record.reference} "
            f"({record.name}, {record.phone}); customer was notified, follow up manually"
        )

    return NotificationResult(
        reference=record.reference,
        customer_sent=True,
        operator_sent=operator_sent,
    )
