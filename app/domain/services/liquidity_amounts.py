from __future__ import annotations

from app.domain.services.full_math import Q96, div_rounding_up, mul_div, mul_div_rounding_up


def _sorted(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> tuple[int, int]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    *,
    round_up: bool = False,
) -> int:
    """token0 between two prices: L * (sb - sa) / (sa * sb)."""
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    numerator1 = liquidity << 96
    numerator2 = sqrt_b - sqrt_a
    if round_up:
        return div_rounding_up(mul_div_rounding_up(numerator1, numerator2, sqrt_b), sqrt_a)
    return mul_div(numerator1, numerator2, sqrt_b) // sqrt_a


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    *,
    round_up: bool = False,
) -> int:
    """token1 between two prices: L * (sb - sa)."""
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_b - sqrt_a, Q96)
    return mul_div(liquidity, sqrt_b - sqrt_a, Q96)


def get_liquidity_for_amount0(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount0: int) -> int:
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_b == sqrt_a:
        return 0
    intermediate = mul_div(sqrt_a, sqrt_b, Q96)
    return mul_div(amount0, intermediate, sqrt_b - sqrt_a)


def get_liquidity_for_amount1(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount1: int) -> int:
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_b == sqrt_a:
        return 0
    return mul_div(amount1, Q96, sqrt_b - sqrt_a)


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int,
) -> int:
    """Largest liquidity the two amounts can mint at the current price."""
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_ratio_x96 <= sqrt_a:
        return get_liquidity_for_amount0(sqrt_a, sqrt_b, amount0)
    if sqrt_ratio_x96 < sqrt_b:
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_b, amount0)
        liquidity1 = get_liquidity_for_amount1(sqrt_a, sqrt_ratio_x96, amount1)
        return min(liquidity0, liquidity1)
    return get_liquidity_for_amount1(sqrt_a, sqrt_b, amount1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
) -> tuple[int, int]:
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_ratio_x96 <= sqrt_a:
        return get_amount0_delta(sqrt_a, sqrt_b, liquidity), 0
    if sqrt_ratio_x96 < sqrt_b:
        return (
            get_amount0_delta(sqrt_ratio_x96, sqrt_b, liquidity),
            get_amount1_delta(sqrt_a, sqrt_ratio_x96, liquidity),
        )
    return 0, get_amount1_delta(sqrt_a, sqrt_b, liquidity)
