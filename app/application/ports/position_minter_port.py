from __future__ import annotations

from typing import Protocol

from app.application.dto.swap import MintReceipt, MintRequest


class PositionMinterPort(Protocol):
    def mint(self, request: MintRequest) -> MintReceipt:
        ...
