from __future__ import annotations

from app.domain.exceptions import ArithmeticOverflowError


UINT256_MAX = 2**256 - 1
Q96 = 2**96
Q192 = 2**192


def check_uint256(value: int, *, field_name: str = "value") -> int:
    if value < 0 or value > UINT256_MAX:
        raise ArithmeticOverflowError(f"{field_name} does not fit in uint256: {value}")
    return value


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator) with a uint256 bound on the result."""
    if denominator <= 0:
        raise ArithmeticOverflowError("mul_div denominator must be positive.")
    return check_uint256((a * b) // denominator, field_name="mul_div result")


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    if denominator <= 0:
        raise ArithmeticOverflowError("mul_div denominator must be positive.")
    quotient, remainder = divmod(a * b, denominator)
    if remainder:
        quotient += 1
    return check_uint256(quotient, field_name="mul_div result")


def div_rounding_up(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ArithmeticOverflowError("division denominator must be positive.")
    quotient, remainder = divmod(numerator, denominator)
    return quotient + 1 if remainder else quotient
