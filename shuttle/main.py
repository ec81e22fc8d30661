from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from shuttle.api import bookings, quotes
from shuttle.core.config import settings
from shuttle.core.errors import FieldValidationError, ShuttleError
from shuttle.core.redis import init_redis, close_redis, get_redis
from shuttle.core.metrics import request_count, request_duration, redis_connected, get_metrics_text
import time
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
            duration = time.time() - start_time

            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code
            ).inc()

            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(duration)

            return response
        except Exception:
            duration = time.time() - start_time
            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=500
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(duration)
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")

    try:
        connected = await init_redis()
        redis_connected.set(1 if connected is not None else 0)
    except Exception as e:
        logger.error(f"Redis connection failed, continuing without it: {e}")
        redis_connected.set(0)

    if not settings.ORS_API_KEY:
        logger.warning("ORS_API_KEY is not set; quotes will fail until it is configured")
    if not settings.RESEND_API_KEY or not settings.OWNER_EMAIL:
        logger.warning("RESEND_API_KEY/OWNER_EMAIL not set; bookings will fail until configured")

    yield

    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(quotes.router)
app.include_router(bookings.router)


@app.exception_handler(ShuttleError)
async def shuttle_error_handler(request: Request, exc: ShuttleError):
    body = {
        "success": False,
        "error": exc.user_message,
        "kind": str(exc.kind),
    }
    if settings.DEBUG:
        body["debug"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed request bodies with the same payload as domain validation errors."""
    errors = exc.errors()
    logger.warning(f"Validation error at {request.url.path}: {errors}")
    fields = list(dict.fromkeys(str(err["loc"][-1]) for err in errors if err.get("loc")))
    return await shuttle_error_handler(request, FieldValidationError.invalid_request(fields))


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    redis_healthy = get_redis() is not None

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if redis_healthy else "disconnected",
            "routing": "configured" if settings.ORS_API_KEY else "missing",
            "email": "configured" if settings.RESEND_API_KEY and settings.OWNER_EMAIL else "missing",
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check():
    missing = [
        name for name in ("ORS_API_KEY", "RESEND_API_KEY", "OWNER_EMAIL")
        if not getattr(settings, name)
    ]
    if missing:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "reason": f"Missing configuration: {', '.join(missing)}"},
        )

    return {
        "ready": True,
        "service": settings.API_TITLE
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
