from __future__ import annotations

import pytest

from app.application.dto.rebalance import RebalanceDepositInput
from app.application.dto.swap import MintReceipt, MintRequest, SwapReceipt, SwapRequest
from app.application.use_cases.rebalance_deposit import RebalanceDepositUseCase
from app.domain.entities.pool import PoolState
from app.domain.exceptions import PoolNotFoundError, PositionMintError, SwapExecutionError
from app.domain.services.full_math import Q96
from app.domain.services.rebalance import estimate_amount_out, plan_rebalance
from app.domain.services.tick_math import get_sqrt_ratio_at_tick

ONE_ETHER = 10**18
NOW = 1_700_000_000


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


class ScriptedPoolStatePort:
    def __init__(self, *states: PoolState | None):
        self._states = list(states)
        self.calls = 0

    def get_pool_state(self, *, pool_address: str, network: str) -> PoolState | None:
        _ = (pool_address, network)
        state = self._states[min(self.calls, len(self._states) - 1)]
        self.calls += 1
        return state


class SpotSwapVenue:
    """Fills at the pre-swap spot price minus fee, optionally overspending."""

    def __init__(self, sqrt_price_x96: int, *, overspend: int = 0):
        self._sqrt_price_x96 = sqrt_price_x96
        self._overspend = overspend
        self.requests: list[SwapRequest] = []

    def exact_input_single(self, request: SwapRequest) -> SwapReceipt:
        self.requests.append(request)
        amount_out = estimate_amount_out(
            self._sqrt_price_x96,
            request.amount_in,
            is_swap_x=request.token_in == "0xmatic",
            fee_pips=request.fee,
        )
        return SwapReceipt(amount_in=request.amount_in + self._overspend, amount_out=amount_out)


class MinimumMinter:
    """Consumes the minimum amounts plus one unit of each side when available."""

    def __init__(self):
        self.requests: list[MintRequest] = []

    def mint(self, request: MintRequest) -> MintReceipt:
        self.requests.append(request)
        return MintReceipt(
            token_id=42,
            liquidity=1,
            amount0=min(request.amount0_min + 1, request.amount0_desired),
            amount1=min(request.amount1_min + 1, request.amount1_desired),
        )


def _input(**overrides) -> RebalanceDepositInput:
    payload = {
        "pool_address": "0xpool",
        "network": "ethereum",
        "amount_x": 10 * ONE_ETHER,
        "amount_y": 10 * ONE_ETHER,
        "recipient": "0xme",
        "now_timestamp": NOW,
        "ticks_below": 1000,
        "ticks_above": 2000,
    }
    payload.update(overrides)
    return RebalanceDepositInput(**payload)


def _use_case(pool_port, swap_venue, minter, *, slippage_bps: int = 50) -> RebalanceDepositUseCase:
    return RebalanceDepositUseCase(
        pool_state_port=pool_port,
        swap_port=swap_venue,
        minter_port=minter,
        slippage_bps=slippage_bps,
        deadline_seconds=600,
    )


class TestRebalanceDepositUseCase:
    def test_swaps_the_planned_amount_then_mints_post_swap_balances(self):
        pool_port = ScriptedPoolStatePort(_pool(), _pool())
        venue = SpotSwapVenue(Q96)
        minter = MinimumMinter()

        result = _use_case(pool_port, venue, minter).execute(_input())

        expected = plan_rebalance(Q96, -1020, 2040, 10 * ONE_ETHER, 10 * ONE_ETHER, fee_pips=3000)
        assert result.swapped is True
        assert (result.base_amount, result.is_swap_x) == (expected.base_amount, expected.is_swap_x)
        assert pool_port.calls == 2

        swap = venue.requests[0]
        assert swap.token_in == "0xweth"
        assert swap.token_out == "0xmatic"
        assert swap.amount_in == expected.base_amount
        assert swap.fee == 3000
        assert swap.deadline == NOW + 600
        assert swap.recipient == "0xme"
        assert 0 < swap.amount_out_minimum < result.amount_received

        mint = minter.requests[0]
        assert (mint.tick_lower, mint.tick_upper) == (-1020, 2040)
        assert mint.amount0_desired == 10 * ONE_ETHER + result.amount_received
        assert mint.amount1_desired == 10 * ONE_ETHER - expected.base_amount
        assert mint.amount0_min <= mint.amount0_desired
        assert mint.amount1_min <= mint.amount1_desired
        assert result.token_id == 42
        assert result.amount0_leftover == mint.amount0_desired - result.amount0_deposited
        assert result.amount1_leftover == mint.amount1_desired - result.amount1_deposited

    def test_fee_aware_plan_leaves_balances_on_the_target_split(self):
        pool_port = ScriptedPoolStatePort(_pool(), _pool())
        minter = MinimumMinter()

        _use_case(pool_port, SpotSwapVenue(Q96), minter, slippage_bps=0).execute(_input())

        mint = minter.requests[0]
        # with zero slippage the minimums are what the range actually takes
        assert mint.amount0_desired - mint.amount0_min <= mint.amount0_desired // 10**6
        assert mint.amount1_desired - mint.amount1_min <= mint.amount1_desired // 10**6

    def test_balanced_position_skips_the_swap(self):
        # price below range: the position is all token0, and there is no token1 to sell
        pool_port = ScriptedPoolStatePort(_pool(), _pool())
        venue = SpotSwapVenue(Q96)
        minter = MinimumMinter()

        result = _use_case(pool_port, venue, minter).execute(
            _input(amount_y=0, tick_lower=600, tick_upper=1200, ticks_below=None, ticks_above=None)
        )

        assert result.swapped is False
        assert result.base_amount == 0
        assert result.amount_received == 0
        assert venue.requests == []
        assert minter.requests[0].amount0_desired == 10 * ONE_ETHER
        assert minter.requests[0].amount1_desired == 0

    def test_deposit_minimums_use_the_fresh_price(self):
        moved = get_sqrt_ratio_at_tick(300)
        pool_port = ScriptedPoolStatePort(_pool(), _pool(sqrt_price_x96=moved, tick=300))
        minter = MinimumMinter()

        _use_case(pool_port, SpotSwapVenue(Q96), minter).execute(_input())

        stale_port = ScriptedPoolStatePort(_pool(), _pool())
        stale_minter = MinimumMinter()
        _use_case(stale_port, SpotSwapVenue(Q96), stale_minter).execute(_input())

        fresh_mint = minter.requests[0]
        stale_mint = stale_minter.requests[0]
        assert (fresh_mint.amount0_min, fresh_mint.amount1_min) != (
            stale_mint.amount0_min,
            stale_mint.amount1_min,
        )

    def test_overspending_swap_is_rejected(self):
        pool_port = ScriptedPoolStatePort(_pool(), _pool())
        with pytest.raises(SwapExecutionError):
            _use_case(pool_port, SpotSwapVenue(Q96, overspend=1), MinimumMinter()).execute(_input())

    def test_missing_pool(self):
        with pytest.raises(PoolNotFoundError):
            _use_case(ScriptedPoolStatePort(None), SpotSwapVenue(Q96), MinimumMinter()).execute(_input())

    def test_pool_disappearing_before_deposit(self):
        minter = MinimumMinter()
        with pytest.raises(PoolNotFoundError):
            _use_case(ScriptedPoolStatePort(_pool(), None), SpotSwapVenue(Q96), minter).execute(_input())
        assert minter.requests == []

    def test_mint_taking_more_than_the_balances_is_rejected(self):
        class GreedyMinter(MinimumMinter):
            def mint(self, request: MintRequest) -> MintReceipt:
                receipt = super().mint(request)
                return MintReceipt(
                    token_id=receipt.token_id,
                    liquidity=receipt.liquidity,
                    amount0=request.amount0_desired + 1,
                    amount1=receipt.amount1,
                )

        pool_port = ScriptedPoolStatePort(_pool(), _pool())
        with pytest.raises(PositionMintError):
            _use_case(pool_port, SpotSwapVenue(Q96), GreedyMinter()).execute(_input())
