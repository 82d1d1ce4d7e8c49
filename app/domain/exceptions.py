from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class RebalanceInputError(DomainError):
    """Invalid parameters for rebalance planning."""


class OutOfRangeError(RebalanceInputError):
    """Tick or sqrt price outside the supported curve domain."""


class InvalidRangeError(RebalanceInputError):
    """tick_lower must be strictly lower than tick_upper."""


class InvalidAmountError(RebalanceInputError):
    """Token amount or fee is negative or does not fit in uint256."""


class ArithmeticOverflowError(DomainError):
    """Intermediate result exceeds the uint256 working width."""


class PoolNotFoundError(DomainError):
    """Requested pool does not exist."""


class PoolStateLookupError(DomainError):
    """Could not read the current pool state."""


class SwapExecutionError(DomainError):
    """The swap venue rejected or failed the rebalance swap."""


class PositionMintError(DomainError):
    """The position minter rejected or failed the deposit."""
