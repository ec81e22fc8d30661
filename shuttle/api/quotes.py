"""Quote endpoints: route-and-price, re-price, and the rate table"""
import logging
import httpx
from fastapi import APIRouter, Depends

from shuttle.schemas.quote import PriceBreakdown, PriceRequest, QuoteRequest, QuoteResponse, VehicleTableResponse
from shuttle.services.pricing import VEHICLE_NAMES, VEHICLE_RATES, calculate_price
from shuttle.services.quote import get_quote
from shuttle.core.config import settings
from shuttle.core.errors import ShuttleError
from shuttle.core.http import get_http_client
from shuttle.core.metrics import quotes_total
from shuttle.core.rate_limit import check_rate_limit
from shuttle.core.response_builders import build_quote_response, build_vehicle_table

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/route", response_model=QuoteResponse, dependencies=[Depends(check_rate_limit)])
async def route_quote(
    req: QuoteRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    try:
        quote = await get_quote(
            req.pickup,
            req.dropoff,
            client,
            vehicle=req.vehicle,
            trip_type=req.trip_type,
        )
    except ShuttleError as e:
        quotes_total.labels(outcome=str(e.kind)).inc()
        raise

    quotes_total.labels(outcome="success").inc()
    return build_quote_response(quote)


@router.post("/price", response_model=PriceBreakdown)
async def price_quote(req: PriceRequest):
    return calculate_price(req.distance_km, req.vehicle, req.trip_type)


@router.get("/vehicles", response_model=VehicleTableResponse)
async def vehicle_table():
    return build_vehicle_table(settings.BASE_FEE, VEHICLE_RATES, VEHICLE_NAMES)
