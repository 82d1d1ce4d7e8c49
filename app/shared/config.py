from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


NETWORKS = ("ethereum", "arbitrum", "base", "polygon", "bsc")


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json(name: str) -> dict:
    value = _env(name)
    if not value:
        return {}
    return json.loads(value)


@dataclass(frozen=True)
class Settings:
    log_level: str
    graph_api_key: str
    graph_gateway_base: str
    graph_subgraph_ids: dict
    graph_request_timeout_seconds: float
    graph_max_retries: int
    graph_min_interval_ms: int
    swap_slippage_bps: int
    tx_deadline_seconds: int


def get_settings() -> Settings:
    subgraphs = {network: _env(f"GRAPH_SUBGRAPH_ID_{network.upper()}", "") for network in NETWORKS}
    # GRAPH_SUBGRAPH_IDS='{"optimism": "..."}' adds or overrides networks
    subgraphs.update(_json("GRAPH_SUBGRAPH_IDS"))
    return Settings(
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        graph_api_key=_env("GRAPH_API_KEY", ""),
        graph_gateway_base=_env("GRAPH_GATEWAY_BASE", "https://gateway.thegraph.com/api"),
        graph_subgraph_ids=subgraphs,
        graph_request_timeout_seconds=float(_env("GRAPH_REQUEST_TIMEOUT_SECONDS", "10")),
        graph_max_retries=int(_env("GRAPH_MAX_RETRIES", "3")),
        graph_min_interval_ms=int(_env("GRAPH_MIN_INTERVAL_MS", "0")),
        swap_slippage_bps=int(_env("SWAP_SLIPPAGE_BPS", "50")),
        tx_deadline_seconds=int(_env("TX_DEADLINE_SECONDS", "600")),
    )
