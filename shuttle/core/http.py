from typing import AsyncIterator
import httpx
from shuttle.core.config import settings


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One provider client per request; closed when the response is sent."""
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        yield client
