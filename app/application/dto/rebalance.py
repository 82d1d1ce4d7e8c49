from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlanRebalanceInput:
    sqrt_price_x96: int
    tick_lower: int
    tick_upper: int
    amount_x: int
    amount_y: int
    fee_pips: int = 0
    swapped_pair: bool = False


@dataclass(frozen=True)
class PlanRebalanceOutput:
    base_amount: int
    is_swap_x: bool
    current_tick: int
    share_x_x96: int
    share_y_x96: int
    estimated_amount_out: int


@dataclass(frozen=True)
class PlanPoolRebalanceInput:
    pool_address: str
    network: str
    amount_x: int
    amount_y: int
    tick_lower: int | None = None
    tick_upper: int | None = None
    ticks_below: int | None = None
    ticks_above: int | None = None


@dataclass(frozen=True)
class PlanPoolRebalanceOutput:
    pool_address: str
    network: str
    fee_tier: int
    token_x_address: str
    token_y_address: str
    sqrt_price_x96: int
    current_tick: int
    tick_lower: int
    tick_upper: int
    base_amount: int
    is_swap_x: bool
    token_in_address: str
    token_out_address: str
    estimated_amount_out: int


@dataclass(frozen=True)
class RebalanceDepositInput:
    pool_address: str
    network: str
    amount_x: int
    amount_y: int
    recipient: str
    now_timestamp: int
    tick_lower: int | None = None
    tick_upper: int | None = None
    ticks_below: int | None = None
    ticks_above: int | None = None


@dataclass(frozen=True)
class RebalanceDepositOutput:
    base_amount: int
    is_swap_x: bool
    swapped: bool
    amount_received: int
    tick_lower: int
    tick_upper: int
    token_id: int
    liquidity: int
    amount0_deposited: int
    amount1_deposited: int
    amount0_leftover: int
    amount1_leftover: int
