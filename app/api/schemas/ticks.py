from __future__ import annotations

from pydantic import BaseModel


class TickSqrtPriceResponse(BaseModel):
    tick: int
    sqrt_price_x96: str
    price: float


class SqrtPriceTickResponse(BaseModel):
    sqrt_price_x96: str
    tick: int
