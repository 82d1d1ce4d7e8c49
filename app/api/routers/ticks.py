from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.api.schemas.ticks import SqrtPriceTickResponse, TickSqrtPriceResponse
from app.domain.exceptions import OutOfRangeError
from app.domain.services.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio, tick_to_price

router = APIRouter()


@router.get("/v1/ticks/{tick}/sqrt-price", response_model=TickSqrtPriceResponse)
def tick_sqrt_price(tick: int):
    try:
        sqrt_price = get_sqrt_ratio_at_tick(tick)
    except OutOfRangeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return TickSqrtPriceResponse(tick=tick, sqrt_price_x96=str(sqrt_price), price=tick_to_price(tick))


@router.get("/v1/sqrt-prices/{sqrt_price_x96}/tick", response_model=SqrtPriceTickResponse)
def sqrt_price_tick(sqrt_price_x96: str):
    if not sqrt_price_x96.isdigit():
        raise HTTPException(status_code=400, detail="sqrt_price_x96 must be a non-negative integer.")
    try:
        tick = get_tick_at_sqrt_ratio(int(sqrt_price_x96))
    except OutOfRangeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SqrtPriceTickResponse(sqrt_price_x96=sqrt_price_x96, tick=tick)
