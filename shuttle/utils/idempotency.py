import hashlib
import json
import logging
from typing import Optional
from shuttle.core.redis import get_redis
from shuttle.core.config import settings

logger = logging.getLogger(__name__)


def idempotency_key(key: str, payload: dict) -> str:
    # the same header with a different body must not replay the first response
    body = json.dumps(payload, sort_keys=True, default=str)
    return f"idemp:{key}:{hashlib.sha256(body.encode()).hexdigest()}"


async def get_idempotent(key: Optional[str], payload: dict):
    redis = get_redis()
    if not key or redis is None:
        return None
    try:
        v = await redis.get(idempotency_key(key, payload))
    except Exception as e:
        logger.warning(f"Idempotency lookup failed: {e}")
        return None
    return json.loads(v) if v else None

async def set_idempotent(key: Optional[str], payload: dict, value: dict):
    redis = get_redis()
    if not key or redis is None:
        return
    try:
        await redis.set(
            idempotency_key(key, payload),
            json.dumps(value, default=str),
            ex=settings.IDEMPOTENCY_TTL,
        )
    except Exception as e:
        logger.warning(f"Idempotency write failed: {e}")
