from __future__ import annotations

from app.domain.exceptions import InvalidRangeError
from app.domain.services.full_math import Q192
from app.domain.services.tick_math import check_sqrt_price


def invert_sqrt_price_x96(sqrt_price_x96: int, *, field_name: str = "sqrt_price_x96") -> int:
    """sqrt price of the inverted pair (token0/token1 instead of token1/token0)."""
    check_sqrt_price(sqrt_price_x96, field_name=field_name)
    return Q192 // sqrt_price_x96


def ui_ticks_to_canonical(tick_lower_ui: int, tick_upper_ui: int) -> tuple[int, int]:
    tick_lower_canonical = -tick_upper_ui
    tick_upper_canonical = -tick_lower_ui
    if tick_lower_canonical >= tick_upper_canonical:
        raise InvalidRangeError("tick_lower must be lower than tick_upper.")
    return tick_lower_canonical, tick_upper_canonical
