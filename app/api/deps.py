from __future__ import annotations

from functools import lru_cache

from app.application.use_cases.plan_pool_rebalance import PlanPoolRebalanceUseCase
from app.application.use_cases.plan_rebalance import PlanRebalanceUseCase
from app.infrastructure.clients.univ3_subgraph_client import (
    Univ3SubgraphClient,
    Univ3SubgraphClientSettings,
)
from app.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_univ3_subgraph_client() -> Univ3SubgraphClient:
    settings = get_settings()
    return Univ3SubgraphClient(
        Univ3SubgraphClientSettings(
            graph_gateway_base=settings.graph_gateway_base,
            graph_api_key=settings.graph_api_key,
            graph_subgraph_ids=settings.graph_subgraph_ids,
            timeout_seconds=settings.graph_request_timeout_seconds,
            max_retries=settings.graph_max_retries,
            min_interval_ms=settings.graph_min_interval_ms,
        )
    )


def get_plan_rebalance_use_case() -> PlanRebalanceUseCase:
    return PlanRebalanceUseCase()


def get_plan_pool_rebalance_use_case() -> PlanPoolRebalanceUseCase:
    return PlanPoolRebalanceUseCase(pool_state_port=_get_univ3_subgraph_client())
