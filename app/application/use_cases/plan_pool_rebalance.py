from __future__ import annotations

import logging

from app.application.dto.rebalance import PlanPoolRebalanceInput, PlanPoolRebalanceOutput
from app.application.ports.pool_state_port import PoolStatePort
from app.application.use_cases.rebalance_common import load_pool_state, resolve_price_range
from app.domain.services.rebalance import estimate_amount_out, plan_rebalance


logger = logging.getLogger(__name__)


class PlanPoolRebalanceUseCase:
    def __init__(self, *, pool_state_port: PoolStatePort):
        self._pool_state_port = pool_state_port

    def execute(self, command: PlanPoolRebalanceInput) -> PlanPoolRebalanceOutput:
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
        result = plan_rebalance(
            pool.sqrt_price_x96,
            price_range.tick_lower,
            price_range.tick_upper,
            command.amount_x,
            command.amount_y,
            fee_pips=pool.fee_tier,
        )

        if result.is_swap_x:
            token_in, token_out = pool.token0_address, pool.token1_address
        else:
            token_in, token_out = pool.token1_address, pool.token0_address

        estimated_out = 0
        if result.base_amount > 0:
            estimated_out = estimate_amount_out(
                pool.sqrt_price_x96,
                result.base_amount,
                is_swap_x=result.is_swap_x,
                fee_pips=pool.fee_tier,
            )

        logger.info(
            "plan_pool_rebalance: planned pool=%s network=%s tick=%s range=[%s,%s] base_amount=%s is_swap_x=%s",
            pool.pool_address,
            pool.network,
            pool.tick,
            price_range.tick_lower,
            price_range.tick_upper,
            result.base_amount,
            result.is_swap_x,
        )

        return PlanPoolRebalanceOutput(
            pool_address=pool.pool_address,
            network=pool.network,
            fee_tier=pool.fee_tier,
            token_x_address=pool.token0_address,
            token_y_address=pool.token1_address,
            sqrt_price_x96=pool.sqrt_price_x96,
            current_tick=pool.tick,
            tick_lower=price_range.tick_lower,
            tick_upper=price_range.tick_upper,
            base_amount=result.base_amount,
            is_swap_x=result.is_swap_x,
            token_in_address=token_in,
            token_out_address=token_out,
            estimated_amount_out=estimated_out,
        )
