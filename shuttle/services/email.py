import httpx
import logging
import time
from typing import Dict, List, Optional
from shuttle.core.config import settings
from shuttle.core.metrics import provider_calls, provider_duration

logger = logging.getLogger(__name__)

EMAILS_PATH = "/emails"


async def send_email(
    client: httpx.AsyncClient,
    to: List[str],
    subject: str,
    html: str,
    tags: Optional[List[Dict[str, str]]] = None,
) -> bool:
    """Send one message through the transactional email provider.

    Single attempt. Returns True on a 2xx response and False on any other
    status or transport error; the caller decides whether that is fatal.
    """
    payload = {
        "from": settings.SENDER_EMAIL,
        "to": to,
        "subject": subject,
        "html": html,
        "tags": tags or [],
    }
    start_time = time.time()
    outcome = "error"
    try:
        response = await client.post(
            f"{settings.RESEND_BASE_URL}{EMAILS_PATH}",
            json=payload,
            headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
        )
        if 200 <= response.status_code < 300:
            outcome = "success"
            logger.info(f"Email '{subject}' accepted for {', '.join(to)}")
            return True
        logger.warning(
            f"Email delivery failed: Status {response.status_code} "
            f"for {', '.join(to)}: {response.text}"
        )
        return False
    except httpx.TimeoutException:
        logger.warning(f"Email provider timeout for {', '.join(to)}")
        return False
    except httpx.HTTPError as e:
        logger.warning(f"Email delivery error: {e} for {', '.join(to)}")
        return False
    finally:
        provider_calls.labels(provider="resend", operation="send", outcome=outcome).inc()
        provider_duration.labels(provider="resend", operation="send").observe(time.time() - start_time)
