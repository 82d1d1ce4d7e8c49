from __future__ import annotations

from typing import Protocol

from app.domain.entities.pool import PoolState


class PoolStatePort(Protocol):
    def get_pool_state(self, *, pool_address: str, network: str) -> PoolState | None:
        ...
