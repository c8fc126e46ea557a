"""
Numeric and address utilities
"""

from .numeric import (
    PRECISION,
    FEE_DECIMALS,
    ensure_amount,
    isqrt,
    scaled_divide,
    ceil_div,
    decimalize,
    undecimalize,
    div,
)
from .address import (
    is_address,
    to_pubkey,
    pubkey_to_string,
    xor_addresses,
    try_create_program_address,
    create_program_address,
    find_program_address,
    is_associated_address,
    derive_associated_address,
    create_strict_account,
)

__all__ = [
    # Numeric
    "PRECISION",
    "FEE_DECIMALS",
    "ensure_amount",
    "isqrt",
    "scaled_divide",
    "ceil_div",
    "decimalize",
    "undecimalize",
    "div",
    # Address
    "is_address",
    "to_pubkey",
    "pubkey_to_string",
    "xor_addresses",
    "try_create_program_address",
    "create_program_address",
    "find_program_address",
    "is_associated_address",
    "derive_associated_address",
    "create_strict_account",
]
