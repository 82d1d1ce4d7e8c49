from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_plan_pool_rebalance_use_case, get_plan_rebalance_use_case
from app.api.schemas.rebalance import (
    PoolRebalancePlanRequest,
    PoolRebalancePlanResponse,
    RebalancePlanRequest,
    RebalancePlanResponse,
)
from app.application.dto.rebalance import PlanPoolRebalanceInput, PlanRebalanceInput
from app.application.use_cases.plan_pool_rebalance import PlanPoolRebalanceUseCase
from app.application.use_cases.plan_rebalance import PlanRebalanceUseCase
from app.domain.exceptions import (
    ArithmeticOverflowError,
    PoolNotFoundError,
    PoolStateLookupError,
    RebalanceInputError,
)

router = APIRouter()


@router.post("/v1/rebalance/plan", response_model=RebalancePlanResponse)
def plan_rebalance(
    req: RebalancePlanRequest,
    use_case: PlanRebalanceUseCase = Depends(get_plan_rebalance_use_case),
):
    try:
        result = use_case.execute(
            PlanRebalanceInput(
                sqrt_price_x96=int(req.sqrt_price_x96),
                tick_lower=req.tick_lower,
                tick_upper=req.tick_upper,
                amount_x=int(req.amount_x),
                amount_y=int(req.amount_y),
                fee_pips=req.fee_pips,
                swapped_pair=req.swapped_pair,
            )
        )
    except RebalanceInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ArithmeticOverflowError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return RebalancePlanResponse(
        base_amount=str(result.base_amount),
        is_swap_x=result.is_swap_x,
        current_tick=result.current_tick,
        share_x_x96=str(result.share_x_x96),
        share_y_x96=str(result.share_y_x96),
        estimated_amount_out=str(result.estimated_amount_out),
    )


@router.post("/v1/pools/rebalance-plan", response_model=PoolRebalancePlanResponse)
def plan_pool_rebalance(
    req: PoolRebalancePlanRequest,
    use_case: PlanPoolRebalanceUseCase = Depends(get_plan_pool_rebalance_use_case),
):
    try:
        result = use_case.execute(
            PlanPoolRebalanceInput(
                pool_address=req.pool_address,
                network=req.network,
                amount_x=int(req.amount_x),
                amount_y=int(req.amount_y),
                tick_lower=req.tick_lower,
                tick_upper=req.tick_upper,
                ticks_below=req.ticks_below,
                ticks_above=req.ticks_above,
            )
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RebalanceInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolStateLookupError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except ArithmeticOverflowError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return PoolRebalancePlanResponse(
        pool_address=result.pool_address,
        network=result.network,
        fee_tier=result.fee_tier,
        token_x_address=result.token_x_address,
        token_y_address=result.token_y_address,
        sqrt_price_x96=str(result.sqrt_price_x96),
        current_tick=result.current_tick,
        tick_lower=result.tick_lower,
        tick_upper=result.tick_upper,
        base_amount=str(result.base_amount),
        is_swap_x=result.is_swap_x,
        token_in_address=result.token_in_address,
        token_out_address=result.token_out_address,
        estimated_amount_out=str(result.estimated_amount_out),
    )
