from __future__ import annotations

from typing import Protocol

from app.application.dto.swap import SwapReceipt, SwapRequest


class SwapVenuePort(Protocol):
    def exact_input_single(self, request: SwapRequest) -> SwapReceipt:
        ...
