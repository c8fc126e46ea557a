"""
Swap quotes and multi-hop routes

A route is a fold of oracle.swap over pool hops, each hop's output feeding
the next. Slippage tolerance is applied to the final output only.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...errors import InvalidArgument, SlippageExceeded
from ...types.pool import Pool
from ...types.result import RouteQuote, SwapQuote
from ...utils.numeric import ensure_amount
from . import oracle

logger = logging.getLogger(__name__)

BPS_DENOMINATOR = 10_000


@dataclass(frozen=True)
class PoolHop:
    """One pool oriented in the direction of the trade"""
    reserve_bid: int
    reserve_ask: int
    fee_ratio: int
    tax_ratio: int

    @classmethod
    def from_pool(cls, pool: Pool, bid_mint: str) -> "PoolHop":
        """
        Orient a decoded pool for selling bid_mint.

        Raises:
            PoolUnavailable: If the pool is not tradable or does not hold bid_mint
        """
        pool.require_tradable()
        reserve_bid, reserve_ask = pool.reserves_for(bid_mint)
        return cls(reserve_bid, reserve_ask, pool.fee_ratio, pool.tax_ratio)


def _resolve_slippage(slippage_bps: Optional[int]) -> int:
    from ...config import config

    if slippage_bps is None:
        slippage_bps = config.trading.default_slippage_bps
    ensure_amount("slippage_bps", slippage_bps)
    if slippage_bps > config.trading.max_slippage_bps:
        raise InvalidArgument.out_of_range("slippage_bps", slippage_bps, f"0..{config.trading.max_slippage_bps} bps")
    return slippage_bps


def minimum_output(ask_amount: int, slippage_bps: Optional[int] = None) -> int:
    """
    Lowest acceptable output for a quote, floor(ask * (1 - bps / 10000)).

    Args:
        ask_amount: Quoted output
        slippage_bps: Tolerance in basis points (config default if None)
    """
    ensure_amount("ask_amount", ask_amount)
    slippage_bps = _resolve_slippage(slippage_bps)
    return ask_amount * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def check_slippage(expected: int, actual: int, slippage_bps: Optional[int] = None) -> int:
    """
    Verify actual output against a quoted one.

    Returns:
        The minimum output that was enforced

    Raises:
        SlippageExceeded: If actual is below the minimum output
    """
    slippage_bps = _resolve_slippage(slippage_bps)
    limit = minimum_output(expected, slippage_bps)
    if actual < limit:
        raise SlippageExceeded.below_limit(expected, actual, slippage_bps)
    return limit


def quote_swap(bid_amount: int, hop: PoolHop, slippage_bps: Optional[int] = None) -> SwapQuote:
    """
    Quote a single-pool swap.

    Returns:
        SwapQuote with the oracle output, price impact and the limit to put
        in the swap instruction
    """
    result = oracle.swap(bid_amount, hop.reserve_bid, hop.reserve_ask, hop.fee_ratio, hop.tax_ratio)
    impact = oracle.slippage(bid_amount, hop.reserve_bid, hop.reserve_ask, hop.fee_ratio, hop.tax_ratio)
    return SwapQuote(
        bid_amount=bid_amount,
        ask_amount=result.ask_amount,
        limit=minimum_output(result.ask_amount, slippage_bps),
        slippage=impact,
        fee=result.fee,
        tax=result.tax,
    )


def quote_route(bid_amount: int, hops: Sequence[PoolHop], slippage_bps: Optional[int] = None) -> RouteQuote:
    """
    Quote a multi-hop route.

    Args:
        bid_amount: Amount sold into the first pool
        hops: Pools in trade order, each oriented bid -> ask
        slippage_bps: Tolerance applied to the final output

    Returns:
        RouteQuote with per-hop results and the final limit

    Raises:
        InvalidArgument: If hops is empty
        EmptyPool: If a hop has an empty reserve
    """
    if not hops:
        raise InvalidArgument("Route needs at least one hop", "hops", hops)
    ensure_amount("bid_amount", bid_amount)

    amount = bid_amount
    results = []
    for hop in hops:
        result = oracle.swap(amount, hop.reserve_bid, hop.reserve_ask, hop.fee_ratio, hop.tax_ratio)
        results.append(result)
        amount = result.ask_amount

    limit = minimum_output(amount, slippage_bps)
    logger.debug(f"Route quote: {bid_amount} -> {amount} over {len(hops)} hop(s), limit={limit}")
    return RouteQuote(bid_amount=bid_amount, ask_amount=amount, limit=limit, hops=results)
