from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SwapRequest:
    token_in: str
    token_out: str
    fee: int
    recipient: str
    deadline: int
    amount_in: int
    amount_out_minimum: int
    sqrt_price_limit_x96: int = 0


@dataclass(frozen=True)
class SwapReceipt:
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class MintRequest:
    token0: str
    token1: str
    fee: int
    tick_lower: int
    tick_upper: int
    amount0_desired: int
    amount1_desired: int
    amount0_min: int
    amount1_min: int
    recipient: str
    deadline: int


@dataclass(frozen=True)
class MintReceipt:
    token_id: int
    liquidity: int
    amount0: int
    amount1: int
