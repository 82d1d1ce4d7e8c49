from __future__ import annotations

from app.application.ports.pool_state_port import PoolStatePort
from app.domain.entities.pool import PoolState
from app.domain.entities.rebalance import PriceRange
from app.domain.exceptions import InvalidRangeError, PoolNotFoundError
from app.domain.services.tick_math import (
    align_tick_to_spacing,
    check_range,
    get_tick_spacing_for_fee,
    usable_tick_bounds,
)


def load_pool_state(*, pool_state_port: PoolStatePort, pool_address: str, network: str) -> PoolState:
    pool = pool_state_port.get_pool_state(pool_address=pool_address, network=network)
    if pool is None:
        raise PoolNotFoundError("Pool not found.")
    return pool


def resolve_price_range(
    *,
    pool: PoolState,
    tick_lower: int | None,
    tick_upper: int | None,
    ticks_below: int | None,
    ticks_above: int | None,
) -> PriceRange:
    """Absolute ticks win; otherwise offsets are taken around the current tick
    and widened outward to the pool's tick spacing."""
    if tick_lower is not None or tick_upper is not None:
        if tick_lower is None or tick_upper is None:
            raise InvalidRangeError("tick_lower and tick_upper must be provided together.")
        check_range(tick_lower, tick_upper)
        return PriceRange(tick_lower=tick_lower, tick_upper=tick_upper)

    if ticks_below is None or ticks_above is None:
        raise InvalidRangeError("Provide tick_lower/tick_upper or ticks_below/ticks_above.")
    if ticks_below < 0 or ticks_above < 0:
        raise InvalidRangeError("ticks_below and ticks_above must be non-negative.")

    spacing = get_tick_spacing_for_fee(pool.fee_tier)
    min_usable, max_usable = usable_tick_bounds(spacing)
    lower = max(align_tick_to_spacing(pool.tick - ticks_below, spacing), min_usable)
    upper = min(align_tick_to_spacing(pool.tick + ticks_above, spacing, round_up=True), max_usable)
    check_range(lower, upper)
    return PriceRange(tick_lower=lower, tick_upper=upper)
