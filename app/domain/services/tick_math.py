from __future__ import annotations

import math

from app.domain.exceptions import InvalidRangeError, OutOfRangeError


MIN_TICK = -887272
MAX_TICK = 887272
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

TICK_SPACINGS = {
    100: 1,
    500: 10,
    2500: 50,
    3000: 60,
    10000: 200,
}

# sqrt(1.0001) ** -(2 ** i) in Q128.128, for i = 1..19
_RATIO_FACTORS = (
    (0x2, 0xFFF97272373D413259A46990580E213A),
    (0x4, 0xFFF2E50F5F656932EF12357CF3C7FDCC),
    (0x8, 0xFFE5CACA7E10E4E61C3624EAA0941CD0),
    (0x10, 0xFFCB9843D60F6159C9DB58835C926644),
    (0x20, 0xFF973B41FA98C081472E6896DFB254C0),
    (0x40, 0xFF2EA16466C96A3843EC78B326B52861),
    (0x80, 0xFE5DEE046A99A2A811C461F1969C3053),
    (0x100, 0xFCBE86C7900A88AEDCFFC83B479AA3A4),
    (0x200, 0xF987A7253AC413176F2B074CF7815E54),
    (0x400, 0xF3392B0822B70005940C7A398E4B70F3),
    (0x800, 0xE7159475A2C29B7443B29C7FA6E889D9),
    (0x1000, 0xD097F3BDFD2022B8845AD8F792AA5825),
    (0x2000, 0xA9F746462D870FDF8A65DC1F90E061E5),
    (0x4000, 0x70D869A156D2A1B890BB3DF62BAF32F7),
    (0x8000, 0x31BE135F97D08FD981231505542FCFA6),
    (0x10000, 0x9AA508B5B7A84E1C677DE54F3E99BC9),
    (0x20000, 0x5D6AF8DEDB81196699C329225EE604),
    (0x40000, 0x2216E584F5FA1EA926041BEDFE98),
    (0x80000, 0x48A170391F7DC42444E8FA2),
)


def check_tick(tick: int, *, field_name: str = "tick") -> int:
    if isinstance(tick, bool) or not isinstance(tick, int):
        raise OutOfRangeError(f"{field_name} must be an integer.")
    if tick < MIN_TICK or tick > MAX_TICK:
        raise OutOfRangeError(f"{field_name} {tick} outside [{MIN_TICK}, {MAX_TICK}].")
    return tick


def check_sqrt_price(sqrt_price_x96: int, *, field_name: str = "sqrt_price_x96") -> int:
    if isinstance(sqrt_price_x96, bool) or not isinstance(sqrt_price_x96, int):
        raise OutOfRangeError(f"{field_name} must be an integer.")
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise OutOfRangeError(
            f"{field_name} {sqrt_price_x96} outside [{MIN_SQRT_RATIO}, {MAX_SQRT_RATIO})."
        )
    return sqrt_price_x96


def check_range(tick_lower: int, tick_upper: int) -> None:
    if tick_lower >= tick_upper:
        raise InvalidRangeError(
            f"tick_lower must be lower than tick_upper (got {tick_lower} >= {tick_upper})."
        )
    check_tick(tick_lower, field_name="tick_lower")
    check_tick(tick_upper, field_name="tick_upper")


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """Q64.96 sqrt(1.0001 ** tick), bit-exact with the on-chain TickMath library."""
    check_tick(tick)
    abs_tick = abs(tick)

    ratio = 0xFFFCB933BD6FAD37AA2D162D1A594001 if abs_tick & 0x1 else 1 << 128
    for bit, factor in _RATIO_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = (2**256 - 1) // ratio

    # Q128.128 -> Q64.96, rounded up so the inverse lookup stays consistent
    return (ratio >> 32) + (1 if ratio % (1 << 32) else 0)


def price_from_tick(tick: int) -> int:
    return get_sqrt_ratio_at_tick(tick)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """Greatest tick whose sqrt ratio is <= sqrt_price_x96."""
    check_sqrt_price(sqrt_price_x96)
    ratio = sqrt_price_x96 << 32

    msb = ratio.bit_length() - 1
    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_high = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_high:
        return tick_low
    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96 else tick_low


def tick_to_price(tick: int) -> float:
    """Raw token1/token0 price at tick, without decimal adjustment."""
    return math.pow(1.0001, tick)


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    if fee_tier not in TICK_SPACINGS:
        raise InvalidRangeError(f"Unsupported fee tier: {fee_tier}")
    return TICK_SPACINGS[fee_tier]


def align_tick_to_spacing(tick: int, tick_spacing: int, *, round_up: bool = False) -> int:
    if tick_spacing <= 0:
        raise InvalidRangeError("tick_spacing must be positive.")
    aligned = (tick // tick_spacing) * tick_spacing
    if round_up and aligned < tick:
        aligned += tick_spacing
    return aligned


def usable_tick_bounds(tick_spacing: int) -> tuple[int, int]:
    return (
        align_tick_to_spacing(MIN_TICK, tick_spacing, round_up=True),
        align_tick_to_spacing(MAX_TICK, tick_spacing),
    )
