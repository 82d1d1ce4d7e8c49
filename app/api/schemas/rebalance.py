from __future__ import annotations

from pydantic import BaseModel, Field


UINT_PATTERN = r"^[0-9]{1,78}$"


class RebalancePlanRequest(BaseModel):
    sqrt_price_x96: str = Field(..., pattern=UINT_PATTERN, description="Current sqrt price (Q64.96) as a decimal string.")
    tick_lower: int = Field(..., description="Lower tick of the target range.")
    tick_upper: int = Field(..., description="Upper tick of the target range.")
    amount_x: str = Field(..., pattern=UINT_PATTERN, description="token0 balance in raw units.")
    amount_y: str = Field(..., pattern=UINT_PATTERN, description="token1 balance in raw units.")
    fee_pips: int = Field(0, ge=0, lt=1_000_000, description="Swap fee in hundredths of a bip (3000 = 0.3%).")
    swapped_pair: bool = Field(False, description="When true, X/Y and the range are given in the inverted pair.")


class RebalancePlanResponse(BaseModel):
    base_amount: str
    is_swap_x: bool
    current_tick: int
    share_x_x96: str
    share_y_x96: str
    estimated_amount_out: str


class PoolRebalancePlanRequest(BaseModel):
    pool_address: str = Field(..., description="Pool address.")
    network: str = Field(..., description="Network key (ethereum, arbitrum, base, polygon, bsc).")
    amount_x: str = Field(..., pattern=UINT_PATTERN, description="token0 balance in raw units.")
    amount_y: str = Field(..., pattern=UINT_PATTERN, description="token1 balance in raw units.")
    tick_lower: int | None = Field(None, description="Absolute lower tick.")
    tick_upper: int | None = Field(None, description="Absolute upper tick.")
    ticks_below: int | None = Field(None, ge=0, description="Range width below the current tick.")
    ticks_above: int | None = Field(None, ge=0, description="Range width above the current tick.")


class PoolRebalancePlanResponse(BaseModel):
    pool_address: str
    network: str
    fee_tier: int
    token_x_address: str
    token_y_address: str
    sqrt_price_x96: str
    current_tick: int
    tick_lower: int
    tick_upper: int
    base_amount: str
    is_swap_x: bool
    token_in_address: str
    token_out_address: str
    estimated_amount_out: str
