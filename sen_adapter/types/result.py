"""
Result type definitions for oracle computations and quotes

All amounts are integers in base units.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class FeeResult:
    """Split of a gross curve output into user amount, pool fee and taxman tax"""
    ask_amount: int
    fee: int
    tax: int


@dataclass(frozen=True)
class SwapResult:
    """
    Outcome of selling bid_amount into a pool

    Attributes:
        ask_amount: Amount the user receives
        fee: Amount kept in the ask reserve
        tax: Amount routed to the taxman
        new_reserve_bid: Bid reserve after the swap
        new_reserve_ask: Ask reserve after the swap (tax already removed)
    """
    ask_amount: int
    fee: int
    tax: int
    new_reserve_bid: int
    new_reserve_ask: int


@dataclass(frozen=True)
class DepositResult:
    """
    Outcome of adding liquidity

    delta_a / delta_b are the amounts actually taken from the user. For a
    sided deposit they are net amounts and may be negative when the swap leg
    pays out more of a side than the user supplied.
    """
    delta_a: int
    delta_b: int
    lpt: int
    new_reserve_a: int
    new_reserve_b: int
    new_liquidity: int


@dataclass(frozen=True)
class WithdrawResult:
    """Outcome of burning lpt liquidity tokens"""
    delta_a: int
    delta_b: int
    new_reserve_a: int
    new_reserve_b: int
    new_liquidity: int


@dataclass(frozen=True)
class SwapQuote:
    """
    Single-pool quote

    Attributes:
        bid_amount: Amount sold
        ask_amount: Expected amount received
        limit: Minimum acceptable output after slippage tolerance
        slippage: Price impact in parts per PRECISION
        fee: Fee kept by the pool
        tax: Tax routed to the taxman
    """
    bid_amount: int
    ask_amount: int
    limit: int
    slippage: int
    fee: int
    tax: int


@dataclass(frozen=True)
class RouteQuote:
    """Multi-hop quote: each hop's output feeds the next"""
    bid_amount: int
    ask_amount: int
    limit: int
    hops: List[SwapResult] = field(default_factory=list)

    @property
    def fees(self) -> List[int]:
        """Per-hop fee, each in that hop's ask token"""
        return [hop.fee for hop in self.hops]

    @property
    def taxes(self) -> List[int]:
        """Per-hop tax, each in that hop's ask token"""
        return [hop.tax for hop in self.hops]
