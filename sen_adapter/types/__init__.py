"""
Type definitions for the Sen adapter
"""

from .common import Token, WRAPPED_SOL, WRAPPED_SOL_MINT, SYSTEM_PROGRAM_ADDRESS
from .pool import Pool, PoolState
from .result import (
    FeeResult,
    SwapResult,
    DepositResult,
    WithdrawResult,
    SwapQuote,
    RouteQuote,
)

__all__ = [
    # Common types
    "Token",
    "WRAPPED_SOL",
    "WRAPPED_SOL_MINT",
    "SYSTEM_PROGRAM_ADDRESS",
    "Pool",
    "PoolState",
    # Oracle results
    "FeeResult",
    "SwapResult",
    "DepositResult",
    "WithdrawResult",
    "SwapQuote",
    "RouteQuote",
]
