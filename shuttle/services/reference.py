import secrets
import string
import threading
import time
from typing import Optional

from shuttle.core.config import settings

BASE36_ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 6

_lock = threading.Lock()
_last_millis = 0


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def _next_millis() -> int:
    # never step backwards if the wall clock does
    global _last_millis
    with _lock:
        _last_millis = max(_last_millis, time.time_ns() // 1_000_000)
        return _last_millis


def generate_booking_reference(prefix: Optional[str] = None) -> str:
    """Return ``PREFIX-<base36 ms timestamp>-<6 random base36 chars>``.

    Uniqueness is probabilistic; the suffix gives 36**6 combinations per
    millisecond, which is plenty for a low-volume booking desk.
    """
    stamp = to_base36(_next_millis())
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix or settings.BOOKING_REFERENCE_PREFIX}-{stamp}-{suffix}".upper()
