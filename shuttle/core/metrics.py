"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

provider_calls = Counter(
    'provider_calls_total',
    'Total calls to external mapping and email providers',
    ['provider', 'operation', 'outcome'],
    registry=registry
)

provider_duration = Histogram(
    'provider_call_duration_seconds',
    'External provider call duration in seconds',
    ['provider', 'operation'],
    registry=registry
)

quotes_total = Counter(
    'quotes_total',
    'Total quote requests by outcome',
    ['outcome'],
    registry=registry
)

bookings_total = Counter(
    'bookings_total',
    'Total booking submissions by outcome',
    ['outcome'],
    registry=registry
)

notification_deliveries = Counter(
    'notification_deliveries_total',
    'Total booking notification emails by recipient and status',
    ['recipient', 'status'],
    registry=registry
)

rate_limit_exceeded = Counter(
    'rate_limit_exceeded_total',
    'Total rate limit exceeded events',
    ['endpoint'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)


def track_provider_call(provider: str, operation: str):
    """Decorator to time an external provider call and count its outcome.

    The wrapped coroutine's return value is counted as ``success``; any
    exception is counted as ``error`` and re-raised.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                provider_calls.labels(
                    provider=provider,
                    operation=operation,
                    outcome='success'
                ).inc()
                return result
            except Exception:
                provider_calls.labels(
                    provider=provider,
                    operation=operation,
                    outcome='error'
                ).inc()
                raise
            finally:
                provider_duration.labels(
                    provider=provider,
                    operation=operation
                ).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
