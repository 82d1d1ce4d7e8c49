from __future__ import annotations

import pytest

from app.application.dto.rebalance import PlanPoolRebalanceInput
from app.application.use_cases.plan_pool_rebalance import PlanPoolRebalanceUseCase
from app.domain.entities.pool import PoolState
from app.domain.exceptions import InvalidRangeError, PoolNotFoundError
from app.domain.services.full_math import Q96

ONE_ETHER = 10**18


class FakePoolStatePort:
    def __init__(self, state: PoolState | None):
        self._state = state
        self.calls: list[tuple[str, str]] = []

    def get_pool_state(self, *, pool_address: str, network: str) -> PoolState | None:
        self.calls.append((pool_address, network))
        return self._state


def _pool(**overrides) -> PoolState:
    payload = {
        "network": "ethereum",
        "pool_address": "0xpool",
        "fee_tier": 3000,
        "token0_address": "0xmatic",
        "token1_address": "0xweth",
        "sqrt_price_x96": Q96,
        "tick": 0,
    }
    payload.update(overrides)
    return PoolState(**payload)


def _input(**overrides) -> PlanPoolRebalanceInput:
    payload = {
        "pool_address": "0xpool",
        "network": "ethereum",
        "amount_x": 10 * ONE_ETHER,
        "amount_y": 10 * ONE_ETHER,
        "ticks_below": 1000,
        "ticks_above": 2000,
    }
    payload.update(overrides)
    return PlanPoolRebalanceInput(**payload)


class TestPlanPoolRebalanceUseCase:
    def test_offsets_are_aligned_outward_to_tick_spacing(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))

        result = use_case.execute(_input())

        assert result.tick_lower == -1020
        assert result.tick_upper == 2040
        assert result.current_tick == 0
        assert result.fee_tier == 3000

    def test_wider_upper_side_needs_more_token_x(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))

        result = use_case.execute(_input())

        assert result.is_swap_x is False
        assert result.token_in_address == "0xweth"
        assert result.token_out_address == "0xmatic"
        assert 0 < result.base_amount <= 10 * ONE_ETHER
        assert 0 < result.estimated_amount_out < result.base_amount

    def test_token_x_only_swaps_token0_for_token1(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))

        result = use_case.execute(_input(amount_y=0))

        assert result.is_swap_x is True
        assert result.token_in_address == "0xmatic"
        assert result.token_out_address == "0xweth"

    def test_absolute_ticks_are_used_as_given(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))

        result = use_case.execute(
            _input(tick_lower=-600, tick_upper=600, ticks_below=None, ticks_above=None)
        )

        assert (result.tick_lower, result.tick_upper) == (-600, 600)

    def test_missing_pool(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(None))
        with pytest.raises(PoolNotFoundError):
            use_case.execute(_input())

    def test_range_is_required(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))
        with pytest.raises(InvalidRangeError):
            use_case.execute(_input(ticks_below=None, ticks_above=None))

    def test_absolute_ticks_must_come_in_pairs(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))
        with pytest.raises(InvalidRangeError):
            use_case.execute(_input(tick_lower=-600))

    def test_zero_offsets_on_aligned_tick_is_an_empty_range(self):
        use_case = PlanPoolRebalanceUseCase(pool_state_port=FakePoolStatePort(_pool()))
        with pytest.raises(InvalidRangeError):
            use_case.execute(_input(ticks_below=0, ticks_above=0))
