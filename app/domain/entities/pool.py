from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolState:
    network: str
    pool_address: str
    fee_tier: int
    token0_address: str
    token1_address: str
    sqrt_price_x96: int
    tick: int
