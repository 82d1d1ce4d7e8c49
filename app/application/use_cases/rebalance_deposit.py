from __future__ import annotations

import logging

from app.application.dto.rebalance import RebalanceDepositInput, RebalanceDepositOutput
from app.application.dto.swap import MintRequest, SwapRequest
from app.application.ports.pool_state_port import PoolStatePort
from app.application.ports.position_minter_port import PositionMinterPort
from app.application.ports.swap_venue_port import SwapVenuePort
from app.application.use_cases.rebalance_common import load_pool_state, resolve_price_range
from app.domain.exceptions import PositionMintError, SwapExecutionError
from app.domain.services.liquidity_amounts import get_amounts_for_liquidity, get_liquidity_for_amounts
from app.domain.services.rebalance import apply_slippage, estimate_amount_out, plan_rebalance
from app.domain.services.tick_math import get_sqrt_ratio_at_tick


logger = logging.getLogger(__name__)


class RebalanceDepositUseCase:
    """Read price, plan, swap, re-read price, deposit.

    The pool is read again after the swap and the deposit minimums come from
    that fresh price.
    """

    def __init__(
        self,
        *,
        pool_state_port: PoolStatePort,
        swap_port: SwapVenuePort,
        minter_port: PositionMinterPort,
        slippage_bps: int,
        deadline_seconds: int,
    ):
        self._pool_state_port = pool_state_port
        self._swap_port = swap_port
        self._minter_port = minter_port
        self._slippage_bps = slippage_bps
        self._deadline_seconds = deadline_seconds

    def execute(self, command: RebalanceDepositInput) -> RebalanceDepositOutput:
        pool = load_pool_state(
            pool_state_port=self._pool_state_port,
            pool_address=command.pool_address,
            network=command.network,
        )
        price_range = resolve_price_range(
            pool=pool,
            tick_lower=command.tick_lower,
            tick_upper=command.tick_upper,
            ticks_below=command.ticks_below,
            ticks_above=command.ticks_above,
        )
        plan = plan_rebalance(
            pool.sqrt_price_x96,
            price_range.tick_lower,
            price_range.tick_upper,
            command.amount_x,
            command.amount_y,
            fee_pips=pool.fee_tier,
        )
        deadline = command.now_timestamp + self._deadline_seconds

        balance0, balance1 = command.amount_x, command.amount_y
        amount_received = 0
        swapped = plan.base_amount > 0
        if swapped:
            if plan.is_swap_x:
                token_in, token_out = pool.token0_address, pool.token1_address
            else:
                token_in, token_out = pool.token1_address, pool.token0_address
            expected_out = estimate_amount_out(
                pool.sqrt_price_x96,
                plan.base_amount,
                is_swap_x=plan.is_swap_x,
                fee_pips=pool.fee_tier,
            )
            request = SwapRequest(
                token_in=token_in,
                token_out=token_out,
                fee=pool.fee_tier,
                recipient=command.recipient,
                deadline=deadline,
                amount_in=plan.base_amount,
                amount_out_minimum=apply_slippage(expected_out, self._slippage_bps),
            )
            logger.info(
                "rebalance_deposit: swap pool=%s token_in=%s amount_in=%s min_out=%s",
                pool.pool_address,
                token_in,
                request.amount_in,
                request.amount_out_minimum,
            )
            receipt = self._swap_port.exact_input_single(request)
            if receipt.amount_in > request.amount_in:
                raise SwapExecutionError(
                    f"Swap consumed {receipt.amount_in}, more than planned {request.amount_in}."
                )
            amount_received = receipt.amount_out
            if plan.is_swap_x:
                balance0 -= receipt.amount_in
                balance1 += receipt.amount_out
            else:
                balance1 -= receipt.amount_in
                balance0 += receipt.amount_out
        else:
            logger.info("rebalance_deposit: swap_skipped pool=%s reason=balanced", pool.pool_address)

        fresh = load_pool_state(
            pool_state_port=self._pool_state_port,
            pool_address=command.pool_address,
            network=command.network,
        )
        if fresh.tick != pool.tick:
            logger.warning(
                "rebalance_deposit: price_moved pool=%s tick_before=%s tick_after=%s",
                pool.pool_address,
                pool.tick,
                fresh.tick,
            )

        sqrt_lower = get_sqrt_ratio_at_tick(price_range.tick_lower)
        sqrt_upper = get_sqrt_ratio_at_tick(price_range.tick_upper)
        liquidity = get_liquidity_for_amounts(
            fresh.sqrt_price_x96, sqrt_lower, sqrt_upper, balance0, balance1
        )
        expected0, expected1 = get_amounts_for_liquidity(
            fresh.sqrt_price_x96, sqrt_lower, sqrt_upper, liquidity
        )

        mint = self._minter_port.mint(
            MintRequest(
                token0=pool.token0_address,
                token1=pool.token1_address,
                fee=pool.fee_tier,
                tick_lower=price_range.tick_lower,
                tick_upper=price_range.tick_upper,
                amount0_desired=balance0,
                amount1_desired=balance1,
                amount0_min=apply_slippage(expected0, self._slippage_bps),
                amount1_min=apply_slippage(expected1, self._slippage_bps),
                recipient=command.recipient,
                deadline=deadline,
            )
        )
        if mint.amount0 > balance0 or mint.amount1 > balance1:
            raise PositionMintError(
                f"Mint consumed ({mint.amount0}, {mint.amount1}), more than available ({balance0}, {balance1})."
            )
        logger.info(
            "rebalance_deposit: minted pool=%s token_id=%s liquidity=%s amount0=%s amount1=%s",
            pool.pool_address,
            mint.token_id,
            mint.liquidity,
            mint.amount0,
            mint.amount1,
        )

        return RebalanceDepositOutput(
            base_amount=plan.base_amount,
            is_swap_x=plan.is_swap_x,
            swapped=swapped,
            amount_received=amount_received,
            tick_lower=price_range.tick_lower,
            tick_upper=price_range.tick_upper,
            token_id=mint.token_id,
            liquidity=mint.liquidity,
            amount0_deposited=mint.amount0,
            amount1_deposited=mint.amount1,
            amount0_leftover=balance0 - mint.amount0,
            amount1_leftover=balance1 - mint.amount1,
        )
