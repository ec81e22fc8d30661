import logging
from fastapi import Request
from shuttle.core.redis import get_redis
from shuttle.core.config import settings
from shuttle.core.errors import RateLimitExceeded
from shuttle.core.metrics import rate_limit_exceeded

logger = logging.getLogger(__name__)


def client_key(request: Request) -> str:
    # peer address; forwarded headers are applied by the server only for
    # FORWARDED_ALLOW_IPS
    return request.client.host if request.client else "unknown"


async def check_rate_limit(request: Request):
    redis = get_redis()
    if redis is None:
        return
    key = f"rl:{request.url.path}:{client_key(request)}"
    try:
        current = await redis.get(key)
        if current is None:
            await redis.set(key, "1", ex=settings.RATE_LIMIT_WINDOW)
            return
        count = int(current)
        if count < settings.RATE_LIMIT:
            await redis.incr(key)
            return
    except Exception as e:
        logger.warning(f"Rate limit check skipped: {e}")
        return
    rate_limit_exceeded.labels(endpoint=request.url.path).inc()
    raise RateLimitExceeded()
