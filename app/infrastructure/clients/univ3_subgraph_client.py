from __future__ import annotations

from dataclasses import dataclass
import logging
from threading import Lock
import time

import httpx

from app.domain.entities.pool import PoolState
from app.domain.exceptions import PoolStateLookupError


logger = logging.getLogger(__name__)


POOL_STATE_QUERY = """
query PoolState($id: ID!) {
  pool(id: $id) {
    id
    feeTier
    sqrtPrice
    tick
    token0 { id }
    token1 { id }
  }
}
"""


class SubgraphResolutionError(PoolStateLookupError):
    pass


@dataclass(frozen=True)
class Univ3SubgraphClientSettings:
    graph_gateway_base: str
    graph_api_key: str
    graph_subgraph_ids: dict
    timeout_seconds: float
    max_retries: int
    min_interval_ms: int


class Univ3SubgraphClient:
    def __init__(self, settings: Univ3SubgraphClientSettings):
        self._settings = settings
        self._lock = Lock()
        self._last_request_at = 0.0

    def get_pool_state(self, *, pool_address: str, network: str) -> PoolState | None:
        subgraph_url = self._resolve_subgraph_url(network)
        pool_id = pool_address.lower()

        payload = self._post_graphql(
            url=subgraph_url,
            query=POOL_STATE_QUERY,
            variables={"id": pool_id},
        )
        row = (payload.get("data") or {}).get("pool")
        if not row:
            logger.info("univ3_subgraph_client: pool_not_found pool=%s network=%s", pool_id, network)
            return None

        try:
            state = PoolState(
                network=network,
                pool_address=pool_id,
                fee_tier=int(row["feeTier"]),
                token0_address=str(row["token0"]["id"]).lower(),
                token1_address=str(row["token1"]["id"]).lower(),
                sqrt_price_x96=int(row["sqrtPrice"]),
                tick=int(row["tick"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PoolStateLookupError(f"Malformed pool state for {pool_id}: {exc}") from exc

        logger.info(
            "univ3_subgraph_client: fetched_pool_state pool=%s network=%s tick=%s fee_tier=%s",
            pool_id,
            network,
            state.tick,
            state.fee_tier,
        )
        return state

    def _post_graphql(self, *, url: str, query: str, variables: dict) -> dict:
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            self._respect_rate_limit()
            try:
                with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                    response = client.post(
                        url,
                        json={"query": query, "variables": variables},
                    )
                    response.raise_for_status()
                    payload = response.json()

                errors = payload.get("errors") or []
                if errors:
                    message = " | ".join(str(err.get("message", err)) for err in errors)
                    raise RuntimeError(message)

                return payload
            except (httpx.HTTPError, RuntimeError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "univ3_subgraph_client: graphql_retry attempt=%s/%s error=%s",
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2

        raise PoolStateLookupError(f"GraphQL request failed after retries: {last_exc}") from last_exc

    def _respect_rate_limit(self) -> None:
        min_interval = max(0, self._settings.min_interval_ms) / 1000.0
        if min_interval <= 0:
            return

        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_at
            if elapsed < min_interval:
                time.sleep(min_interval - elapsed)
            self._last_request_at = time.monotonic()

    def _resolve_subgraph_url(self, network: str) -> str:
        network_key = network.strip().lower()
        subgraph_id = str(self._settings.graph_subgraph_ids.get(network_key) or "").strip()
        if not subgraph_id:
            raise SubgraphResolutionError(
                f"Missing GRAPH_SUBGRAPH_ID for network '{network_key}'."
            )
        return self._build_gateway_url(subgraph_id)

    def _build_gateway_url(self, subgraph_id: str) -> str:
        if subgraph_id.startswith("http://") or subgraph_id.startswith("https://"):
            return subgraph_id.rstrip("/")
        base = self._settings.graph_gateway_base.rstrip("/")
        api_key = self._settings.graph_api_key.strip()
        if api_key:
            return f"{base}/{api_key}/subgraphs/id/{subgraph_id}"
        return f"{base}/subgraphs/id/{subgraph_id}"
