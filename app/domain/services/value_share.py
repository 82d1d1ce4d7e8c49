from __future__ import annotations

from app.domain.entities.rebalance import ValueShare
from app.domain.exceptions import InvalidRangeError
from app.domain.services.full_math import Q96, mul_div


def value_weights(sqrt_current: int, sqrt_lower: int, sqrt_upper: int) -> tuple[int, int]:
    """Relative value held in token0 and token1 per unit of liquidity.

    Both terms are measured on the same axis so they can be compared directly:

        token0 value ~ (sqrt_upper - sqrt_current) * sqrt_current
        token1 value ~ (sqrt_current - sqrt_lower) * sqrt_upper

    which is L * (sb - sp) / (sp * sb) priced at sp**2 against L * (sp - sa),
    both multiplied by sb. Outside the range the weights collapse to (1, 0)
    or (0, 1).
    """
    if sqrt_lower >= sqrt_upper:
        raise InvalidRangeError("sqrt_lower must be lower than sqrt_upper.")
    if sqrt_current <= sqrt_lower:
        return 1, 0
    if sqrt_current >= sqrt_upper:
        return 0, 1
    weight_x = (sqrt_upper - sqrt_current) * sqrt_current
    weight_y = (sqrt_current - sqrt_lower) * sqrt_upper
    return weight_x, weight_y


def ideal_value_share(sqrt_current: int, sqrt_lower: int, sqrt_upper: int) -> ValueShare:
    weight_x, weight_y = value_weights(sqrt_current, sqrt_lower, sqrt_upper)
    share_x = mul_div(weight_x, Q96, weight_x + weight_y)
    return ValueShare(share_x=share_x, share_y=Q96 - share_x)
