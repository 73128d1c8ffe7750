import logging
from decimal import Decimal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from delivery_pricing import __version__
from delivery_pricing.engine import (
    DeliveryOrder, DeliveryPricingError, InvalidStateError,
)
from delivery_pricing.api.schedule_api import router as schedule_router
from delivery_pricing.api.state import engine


logger = logging.getLogger(__name__)

app = FastAPI(
    title="Delivery Pricing API",
    description="Backend API for delivery fee calculation",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schedule_router)


class CalcRequest(BaseModel):
    cart_subtotal: Decimal
    distance_km: float
    is_rush_hour: bool = False


def _http_error(e: DeliveryPricingError) -> HTTPException:
    # Over-distance is a business state conflict, everything else is bad input
    status_code = 409 if isinstance(e, InvalidStateError) else 422
    return HTTPException(status_code=status_code, detail=e.to_dict())


@app.get("/")
async def root():
    return {"status": "online", "message": "Delivery Pricing API Active"}


@app.post("/calculate")
async def calculate_fee(req: CalcRequest):
    try:
        order = DeliveryOrder(
            cart_subtotal=req.cart_subtotal,
            distance_km=req.distance_km,
            is_rush_hour=req.is_rush_hour,
        )
        result = engine.calculate(order)
    except DeliveryPricingError as e:
        logger.info("Fee calculation rejected: %s", e.message)
        raise _http_error(e)
    return result.to_dict()


@app.get("/system/status")
async def get_status():
    settings = engine.settings
    return {
        "engine_active": True,
        "version": __version__,
        "max_distance_km": settings.max_distance_km,
        "free_delivery_inclusive": settings.free_delivery_inclusive,
    }
