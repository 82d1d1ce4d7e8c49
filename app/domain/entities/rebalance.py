from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRange:
    tick_lower: int
    tick_upper: int


@dataclass(frozen=True)
class ValueShare:
    """Q96 fixed-point fractions of position value held in each token."""

    share_x: int
    share_y: int


@dataclass(frozen=True)
class RebalanceResult:
    base_amount: int
    is_swap_x: bool

    @property
    def is_noop(self) -> bool:
        return self.base_amount == 0
