"""
Swap pool oracle

Client-side mirror of the on-chain constant-product curve. Every function is
pure integer arithmetic over base units; divisions floor. The fee is taken
from the curve output and stays in the ask reserve, the tax is taken from
what remains and leaves the pool.
"""

from ...errors import DivisionByZero, EmptyPool, InvalidArgument
from ...types.result import DepositResult, FeeResult, SwapResult, WithdrawResult
from ...utils.numeric import PRECISION, ceil_div, ensure_amount, isqrt


def _check_ratios(fee_ratio: int, tax_ratio: int) -> None:
    ensure_amount("fee_ratio", fee_ratio)
    ensure_amount("tax_ratio", tax_ratio)
    if fee_ratio + tax_ratio >= PRECISION:
        raise InvalidArgument(
            f"fee_ratio + tax_ratio must be below {PRECISION}, got {fee_ratio + tax_ratio}",
            "fee_ratio",
            fee_ratio,
        )


def _check_reserves(reserve_bid: int, reserve_ask: int) -> None:
    ensure_amount("reserve_bid", reserve_bid)
    ensure_amount("reserve_ask", reserve_ask)
    if reserve_bid == 0 or reserve_ask == 0:
        raise EmptyPool.reserves(reserve_bid, reserve_ask)


def extract(a: int, b: int, reserve_a: int, reserve_b: int):
    """
    Largest sub-pair of (a, b) in the reserve ratio.

    Returns:
        (a', b') with a' <= a, b' <= b and a' / b' ~ reserve_a / reserve_b

    Raises:
        EmptyPool: If either reserve is zero
    """
    ensure_amount("a", a)
    ensure_amount("b", b)
    _check_reserves(reserve_a, reserve_b)
    if a == 0 or b == 0:
        return 0, 0
    left = a * reserve_b
    right = b * reserve_a
    if left > right:
        return right // reserve_b, b
    if left < right:
        return a, left // reserve_a
    return a, b


def fee(ask_amount: int, fee_ratio: int, tax_ratio: int) -> FeeResult:
    """
    Split a gross curve output.

    fee = ask * fee_ratio / PRECISION
    tax = (ask - fee) * tax_ratio / PRECISION
    """
    ensure_amount("ask_amount", ask_amount)
    _check_ratios(fee_ratio, tax_ratio)
    fee_amount = ask_amount * fee_ratio // PRECISION
    remaining = ask_amount - fee_amount
    tax_amount = remaining * tax_ratio // PRECISION
    return FeeResult(ask_amount=remaining - tax_amount, fee=fee_amount, tax=tax_amount)


def swap(
    bid_amount: int,
    reserve_bid: int,
    reserve_ask: int,
    fee_ratio: int,
    tax_ratio: int,
) -> SwapResult:
    """
    Sell bid_amount into the pool.

    Args:
        bid_amount: Amount sold
        reserve_bid: Reserve of the sold token
        reserve_ask: Reserve of the bought token
        fee_ratio: Pool fee, parts per PRECISION
        tax_ratio: Taxman share, parts per PRECISION

    Returns:
        SwapResult; ask_amount is always strictly below reserve_ask

    Raises:
        EmptyPool: If either reserve is zero
        InvalidArgument: On negative amounts or fee_ratio + tax_ratio >= PRECISION
    """
    ensure_amount("bid_amount", bid_amount)
    _check_reserves(reserve_bid, reserve_ask)
    _check_ratios(fee_ratio, tax_ratio)

    new_reserve_bid = reserve_bid + bid_amount
    # At least one unit always stays in the ask treasury
    temp_reserve_ask = max(reserve_bid * reserve_ask // new_reserve_bid, 1)
    split = fee(reserve_ask - temp_reserve_ask, fee_ratio, tax_ratio)
    return SwapResult(
        ask_amount=split.ask_amount,
        fee=split.fee,
        tax=split.tax,
        new_reserve_bid=new_reserve_bid,
        new_reserve_ask=temp_reserve_ask + split.fee,
    )


def max_ask_amount(reserve_bid: int, reserve_ask: int, fee_ratio: int, tax_ratio: int) -> int:
    """Largest output the pool can ever pay (curve floor of one unit reached)"""
    return swap(reserve_bid * reserve_ask, reserve_bid, reserve_ask, fee_ratio, tax_ratio).ask_amount


def inverse_swap(
    ask_amount: int,
    reserve_bid: int,
    reserve_ask: int,
    fee_ratio: int,
    tax_ratio: int,
) -> int:
    """
    Smallest bid_amount whose swap output reaches ask_amount.

    The algebraic inverse of the fee-adjusted curve gives a starting bound;
    a bisection over the monotone swap() then pins the exact minimum, so
    swap(result).ask_amount >= ask_amount > swap(result - 1).ask_amount.

    Raises:
        EmptyPool: If either reserve is zero
        InvalidArgument: If ask_amount exceeds what the pool can pay
    """
    ensure_amount("ask_amount", ask_amount)
    _check_reserves(reserve_bid, reserve_ask)
    _check_ratios(fee_ratio, tax_ratio)
    if ask_amount == 0:
        return 0

    ceiling = reserve_bid * reserve_ask
    if ask_amount > max_ask_amount(reserve_bid, reserve_ask, fee_ratio, tax_ratio):
        raise InvalidArgument(
            f"ask_amount {ask_amount} exceeds what the pool can pay",
            "ask_amount",
            ask_amount,
        )

    gross = ceil_div(ask_amount * PRECISION * PRECISION, (PRECISION - tax_ratio) * (PRECISION - fee_ratio))
    if gross < reserve_ask:
        high = max(ceil_div(ceiling, reserve_ask - gross) - reserve_bid, 1)
    else:
        high = ceiling

    def reaches(bid: int) -> bool:
        return swap(bid, reserve_bid, reserve_ask, fee_ratio, tax_ratio).ask_amount >= ask_amount

    while not reaches(high):
        high = min(high * 2, ceiling)

    low = 0
    while high - low > 1:
        middle = (low + high) // 2
        if reaches(middle):
            high = middle
        else:
            low = middle
    return high


def slippage(
    bid_amount: int,
    reserve_bid: int,
    reserve_ask: int,
    fee_ratio: int,
    tax_ratio: int,
) -> int:
    """
    Relative move of the pool price caused by the swap, parts per PRECISION.

    price = reserve_ask / reserve_bid, before and after. The prices are
    compared by cross-multiplication; only the final ratio floors.
    """
    result = swap(bid_amount, reserve_bid, reserve_ask, fee_ratio, tax_ratio)
    moved = abs(result.new_reserve_ask * reserve_bid - reserve_ask * result.new_reserve_bid)
    return moved * PRECISION // (reserve_ask * result.new_reserve_bid)


def rake(
    amount: int,
    reserve_bid: int,
    reserve_ask: int,
    fee_ratio: int,
    tax_ratio: int,
) -> int:
    """
    Portion of a single-sided amount to swap before depositing.

    After swapping the returned portion, the unswapped remainder and the swap
    output sit in the post-swap reserve ratio. The search starts at half the
    amount and moves by half the ratio error until the step stops shrinking.
    """
    ensure_amount("amount", amount)
    _check_reserves(reserve_bid, reserve_ask)
    _check_ratios(fee_ratio, tax_ratio)
    if amount == 0:
        return 0

    delta = amount
    bid_amount = amount // 2
    while True:
        result = swap(bid_amount, reserve_bid, reserve_ask, fee_ratio, tax_ratio)
        remainder = amount - bid_amount
        expected_remainder = result.ask_amount * result.new_reserve_bid // result.new_reserve_ask
        next_delta = abs(remainder - expected_remainder) // 2
        if delta > next_delta:
            delta = next_delta
        else:
            break
        if remainder > expected_remainder:
            bid_amount = min(bid_amount + delta, amount)
        else:
            bid_amount = max(bid_amount - delta, 0)
    return bid_amount


def deposit(
    delta_a: int,
    delta_b: int,
    reserve_a: int,
    reserve_b: int,
    liquidity: int,
) -> DepositResult:
    """
    Proportional deposit.

    First deposit (liquidity == 0) mints isqrt(delta_a * delta_b) and sets
    the reserves to the deltas. Later deposits mint
    min(delta_a * L / reserve_a, delta_b * L / reserve_b) and consume
    ceil(lpt * reserve / L) of each side, so the pool never mints more than
    it receives.

    Raises:
        EmptyPool: If liquidity is positive but a reserve is zero
        InvalidArgument: On negative amounts, a one-sided first deposit or
            non-empty reserves with zero liquidity
    """
    ensure_amount("delta_a", delta_a)
    ensure_amount("delta_b", delta_b)
    ensure_amount("reserve_a", reserve_a)
    ensure_amount("reserve_b", reserve_b)
    ensure_amount("liquidity", liquidity)

    if liquidity == 0:
        if reserve_a or reserve_b:
            raise InvalidArgument(
                f"Pool has reserves ({reserve_a}, {reserve_b}) but no liquidity",
                "liquidity",
                liquidity,
            )
        if delta_a == 0 or delta_b == 0:
            raise InvalidArgument(
                "First deposit needs both sides",
                "delta_a" if delta_a == 0 else "delta_b",
                0,
            )
        lpt = isqrt(delta_a * delta_b)
        return DepositResult(
            delta_a=delta_a,
            delta_b=delta_b,
            lpt=lpt,
            new_reserve_a=delta_a,
            new_reserve_b=delta_b,
            new_liquidity=lpt,
        )

    if reserve_a == 0 or reserve_b == 0:
        raise EmptyPool.reserves(reserve_a, reserve_b)

    lpt = min(delta_a * liquidity // reserve_a, delta_b * liquidity // reserve_b)
    consumed_a = ceil_div(lpt * reserve_a, liquidity)
    consumed_b = ceil_div(lpt * reserve_b, liquidity)
    return DepositResult(
        delta_a=consumed_a,
        delta_b=consumed_b,
        lpt=lpt,
        new_reserve_a=reserve_a + consumed_a,
        new_reserve_b=reserve_b + consumed_b,
        new_liquidity=liquidity + lpt,
    )


def sided_deposit(
    delta_a: int,
    delta_b: int,
    reserve_a: int,
    reserve_b: int,
    liquidity: int,
    fee_ratio: int,
    tax_ratio: int,
) -> DepositResult:
    """
    Deposit any pair of amounts, swapping the excess side first.

    Steps:
        1. proportional deposit of what matches the pool ratio
        2. rake the excess side and swap that portion (fee and tax apply here only)
        3. proportional deposit of the unswapped excess and the swap output

    Returns:
        Totals over the steps. delta_a / delta_b are the net amounts taken
        from the user; the swapped side's counterpart may be negative when
        the swap output is not fully re-deposited.

    An empty pool (liquidity == 0) is a plain first deposit.
    """
    _check_ratios(fee_ratio, tax_ratio)
    if liquidity == 0:
        return deposit(delta_a, delta_b, reserve_a, reserve_b, liquidity)

    first = deposit(delta_a, delta_b, reserve_a, reserve_b, liquidity)
    a_remainder = delta_a - first.delta_a
    b_remainder = delta_b - first.delta_b

    if a_remainder > 0:
        bid_amount = rake(a_remainder, first.new_reserve_a, first.new_reserve_b, fee_ratio, tax_ratio)
        traded = swap(bid_amount, first.new_reserve_a, first.new_reserve_b, fee_ratio, tax_ratio)
        second = deposit(
            a_remainder - bid_amount,
            traded.ask_amount,
            traded.new_reserve_bid,
            traded.new_reserve_ask,
            first.new_liquidity,
        )
        return DepositResult(
            delta_a=first.delta_a + bid_amount + second.delta_a,
            delta_b=first.delta_b + second.delta_b - traded.ask_amount,
            lpt=first.lpt + second.lpt,
            new_reserve_a=second.new_reserve_a,
            new_reserve_b=second.new_reserve_b,
            new_liquidity=second.new_liquidity,
        )

    if b_remainder > 0:
        bid_amount = rake(b_remainder, first.new_reserve_b, first.new_reserve_a, fee_ratio, tax_ratio)
        traded = swap(bid_amount, first.new_reserve_b, first.new_reserve_a, fee_ratio, tax_ratio)
        second = deposit(
            traded.ask_amount,
            b_remainder - bid_amount,
            traded.new_reserve_ask,
            traded.new_reserve_bid,
            first.new_liquidity,
        )
        return DepositResult(
            delta_a=first.delta_a + second.delta_a - traded.ask_amount,
            delta_b=first.delta_b + bid_amount + second.delta_b,
            lpt=first.lpt + second.lpt,
            new_reserve_a=second.new_reserve_a,
            new_reserve_b=second.new_reserve_b,
            new_liquidity=second.new_liquidity,
        )

    return first


def withdraw(lpt: int, liquidity: int, reserve_a: int, reserve_b: int) -> WithdrawResult:
    """
    Burn lpt out of liquidity.

    Burning the whole supply returns the whole reserves, leaving no dust.

    Raises:
        DivisionByZero: If liquidity is zero
        InvalidArgument: If lpt exceeds liquidity
    """
    ensure_amount("lpt", lpt)
    ensure_amount("liquidity", liquidity)
    ensure_amount("reserve_a", reserve_a)
    ensure_amount("reserve_b", reserve_b)
    if liquidity == 0:
        raise DivisionByZero.zero_denominator("withdraw")
    if lpt > liquidity:
        raise InvalidArgument(f"lpt {lpt} exceeds liquidity {liquidity}", "lpt", lpt)

    if lpt == liquidity:
        delta_a, delta_b = reserve_a, reserve_b
    else:
        delta_a = reserve_a * lpt // liquidity
        delta_b = reserve_b * lpt // liquidity
    return WithdrawResult(
        delta_a=delta_a,
        delta_b=delta_b,
        new_reserve_a=reserve_a - delta_a,
        new_reserve_b=reserve_b - delta_b,
        new_liquidity=liquidity - lpt,
    )
