"""
Fixed-point numeric utilities

Pure integer arithmetic used by the oracle and the codec. Python ints are
arbitrary precision, so intermediate products never overflow.
"""

from decimal import Decimal
from typing import Union

from ..errors import InvalidArgument, DivisionByZero

# Fee / tax ratios are expressed in parts per PRECISION
PRECISION = 10 ** 9
FEE_DECIMALS = 9


def ensure_amount(name: str, value) -> int:
    """
    Validate a non-negative integer amount.

    Args:
        name: Argument name used in the error message
        value: Candidate value

    Returns:
        The value unchanged

    Raises:
        InvalidArgument: If value is not an int (bool excluded) or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgument.negative(name, value)
    return value


def isqrt(n: int) -> int:
    """
    Integer square root, floor(sqrt(n)).

    Converging bound-halving: the upper bound starts above sqrt(n) and each
    step averages it with n // bound until the pair crosses.

    Raises:
        InvalidArgument: If n is negative
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidArgument.negative("n", n)
    if n < 2:
        return n
    bits = (n.bit_length() + 1) // 2
    start = 1 << (bits - 1)
    end = 1 << (bits + 1)
    while start < end:
        end = (start + end) // 2
        start = n // end
    return end


def scaled_divide(numerator: int, denominator: int, precision: int = FEE_DECIMALS) -> int:
    """
    Fixed-point division: numerator * 10**precision // denominator.

    Raises:
        DivisionByZero: If denominator is 0
    """
    if denominator == 0:
        raise DivisionByZero.zero_denominator("scaled_divide")
    return numerator * 10 ** precision // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    """Ceiling division for non-negative integers"""
    if denominator == 0:
        raise DivisionByZero.zero_denominator("ceil_div")
    return -(-numerator // denominator)


def decimalize(value: Union[str, int, Decimal], decimals: int) -> int:
    """
    Convert a human-readable amount to base units.

    Extra fraction digits beyond `decimals` are truncated.

    Args:
        value: Amount such as "1.5", 2 or Decimal("0.25")
        decimals: Token decimals

    Returns:
        Amount in base units

    Raises:
        InvalidArgument: If value is not a plain decimal number
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidArgument.negative("decimals", decimals)
    if isinstance(value, Decimal):
        text = format(value, "f")
    else:
        text = str(value).strip()
    if not text:
        return 0

    negative = text.startswith("-")
    if negative:
        text = text[1:]
    parts = text.split(".")
    if len(parts) > 2 or not all(p.isdigit() for p in parts if p) or not any(parts):
        raise InvalidArgument(f"Invalid number: {value!r}", "value", value)

    integer = parts[0] or "0"
    fraction = parts[1] if len(parts) == 2 else ""
    fraction = fraction[:decimals].ljust(decimals, "0")
    amount = int(integer + fraction) if decimals else int(integer)
    return -amount if negative else amount


def undecimalize(amount: int, decimals: int) -> str:
    """
    Convert base units to a decimal string with trailing zeros stripped.

    undecimalize(1_500_000_000, 9) -> "1.5"
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidArgument.negative("decimals", decimals)
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if decimals == 0:
        return sign + digits
    digits = digits.rjust(decimals + 1, "0")
    integer, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
    if not fraction:
        return sign + integer
    return f"{sign}{integer}.{fraction}"


def div(numerator: int, denominator: int) -> Decimal:
    """Ratio of two integers truncated to FEE_DECIMALS digits"""
    scaled = scaled_divide(numerator, denominator)
    return Decimal(scaled).scaleb(-FEE_DECIMALS)
