from __future__ import annotations

from app.application.dto.rebalance import PlanRebalanceInput, PlanRebalanceOutput
from app.domain.services.pair_orientation import invert_sqrt_price_x96, ui_ticks_to_canonical
from app.domain.services.rebalance import estimate_amount_out, plan_rebalance
from app.domain.services.tick_math import check_range, check_sqrt_price, get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio
from app.domain.services.value_share import ideal_value_share


class PlanRebalanceUseCase:
    def execute(self, command: PlanRebalanceInput) -> PlanRebalanceOutput:
        check_range(command.tick_lower, command.tick_upper)
        check_sqrt_price(command.sqrt_price_x96)

        if command.swapped_pair:
            # caller's X is the pool's token1: plan on the canonical pair and map back
            sqrt_price = invert_sqrt_price_x96(command.sqrt_price_x96)
            tick_lower, tick_upper = ui_ticks_to_canonical(command.tick_lower, command.tick_upper)
            amount0, amount1 = command.amount_y, command.amount_x
        else:
            sqrt_price = command.sqrt_price_x96
            tick_lower, tick_upper = command.tick_lower, command.tick_upper
            amount0, amount1 = command.amount_x, command.amount_y

        result = plan_rebalance(
            sqrt_price,
            tick_lower,
            tick_upper,
            amount0,
            amount1,
            fee_pips=command.fee_pips,
        )
        share = ideal_value_share(
            sqrt_price,
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
        )

        if command.swapped_pair:
            is_swap_x = not result.is_swap_x if result.base_amount > 0 else False
            share_x, share_y = share.share_y, share.share_x
        else:
            is_swap_x = result.is_swap_x
            share_x, share_y = share.share_x, share.share_y

        estimated_out = 0
        if result.base_amount > 0:
            estimated_out = estimate_amount_out(
                command.sqrt_price_x96,
                result.base_amount,
                is_swap_x=is_swap_x,
                fee_pips=command.fee_pips,
            )

        return PlanRebalanceOutput(
            base_amount=result.base_amount,
            is_swap_x=is_swap_x,
            current_tick=get_tick_at_sqrt_ratio(command.sqrt_price_x96),
            share_x_x96=share_x,
            share_y_x96=share_y,
            estimated_amount_out=estimated_out,
        )
