from __future__ import annotations

from app.domain.entities.rebalance import RebalanceResult
from app.domain.exceptions import InvalidAmountError
from app.domain.services.full_math import Q192, UINT256_MAX, check_uint256
from app.domain.services.tick_math import check_range, check_sqrt_price, get_sqrt_ratio_at_tick
from app.domain.services.value_share import value_weights


FEE_DENOMINATOR = 1_000_000


def _check_amount(value: int, *, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(f"{field_name} must be an integer.")
    if value < 0:
        raise InvalidAmountError(f"{field_name} must be non-negative.")
    if value > UINT256_MAX:
        raise InvalidAmountError(f"{field_name} does not fit in uint256.")
    return value


def _check_fee(fee_pips: int) -> int:
    if isinstance(fee_pips, bool) or not isinstance(fee_pips, int):
        raise InvalidAmountError("fee_pips must be an integer.")
    if fee_pips < 0 or fee_pips >= FEE_DENOMINATOR:
        raise InvalidAmountError(f"fee_pips must be in [0, {FEE_DENOMINATOR}).")
    return fee_pips


def plan_rebalance(
    sqrt_price_current: int,
    tick_lower: int,
    tick_upper: int,
    amount_x: int,
    amount_y: int,
    *,
    fee_pips: int = 0,
) -> RebalanceResult:
    """Swap direction and amount that moves (amount_x, amount_y) onto the
    value split a [tick_lower, tick_upper) position needs at the current price.

    Token X is token0 and values are compared in token0 units. The whole
    computation is carried on exact integers and floored once, so the
    returned amount never overshoots the ideal swap and never exceeds the
    balance it is taken from. With a non-zero fee_pips the amount is solved
    for the post-fee output instead of the spot conversion.
    """
    check_range(tick_lower, tick_upper)
    check_sqrt_price(sqrt_price_current, field_name="sqrt_price_current")
    _check_amount(amount_x, field_name="amount_x")
    _check_amount(amount_y, field_name="amount_y")
    _check_fee(fee_pips)

    sqrt_lower = get_sqrt_ratio_at_tick(tick_lower)
    sqrt_upper = get_sqrt_ratio_at_tick(tick_upper)
    weight_x, weight_y = value_weights(sqrt_price_current, sqrt_lower, sqrt_upper)

    price_x192 = sqrt_price_current * sqrt_price_current
    fee_complement = FEE_DENOMINATOR - fee_pips

    # amount_x * w_y vs value_y * w_x, scaled by sqrt_price**2 to stay integral
    imbalance = amount_x * weight_y * price_x192 - weight_x * amount_y * Q192

    if imbalance > 0:
        denominator = price_x192 * (weight_y * FEE_DENOMINATOR + weight_x * fee_complement)
        base_amount = min(imbalance * FEE_DENOMINATOR // denominator, amount_x)
        return RebalanceResult(base_amount=base_amount, is_swap_x=True)

    if imbalance < 0:
        denominator = Q192 * (weight_x * FEE_DENOMINATOR + weight_y * fee_complement)
        base_amount = min(-imbalance * FEE_DENOMINATOR // denominator, amount_y)
        return RebalanceResult(base_amount=base_amount, is_swap_x=False)

    return RebalanceResult(base_amount=0, is_swap_x=False)


def estimate_amount_out(
    sqrt_price_current: int,
    amount_in: int,
    *,
    is_swap_x: bool,
    fee_pips: int = 0,
) -> int:
    """Spot-price output of a swap, ignoring price impact. Rounded down."""
    check_sqrt_price(sqrt_price_current, field_name="sqrt_price_current")
    _check_amount(amount_in, field_name="amount_in")
    _check_fee(fee_pips)

    price_x192 = sqrt_price_current * sqrt_price_current
    amount_after_fee = amount_in * (FEE_DENOMINATOR - fee_pips)
    if is_swap_x:
        amount_out = amount_after_fee * price_x192 // (Q192 * FEE_DENOMINATOR)
    else:
        amount_out = amount_after_fee * Q192 // (price_x192 * FEE_DENOMINATOR)
    return check_uint256(amount_out, field_name="amount_out")


def apply_slippage(amount: int, slippage_bps: int) -> int:
    if slippage_bps < 0 or slippage_bps > 10_000:
        raise InvalidAmountError("slippage_bps must be in [0, 10000].")
    return amount * (10_000 - slippage_bps) // 10_000
