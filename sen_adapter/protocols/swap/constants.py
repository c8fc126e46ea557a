"""
Swap program constants
"""

from enum import IntEnum

from ..base import program_error_message


class SwapInstruction(IntEnum):
    """Instruction tags of the swap program"""
    INITIALIZE_POOL = 0
    ADD_LIQUIDITY = 1
    REMOVE_LIQUIDITY = 2
    SWAP = 3
    FREEZE_POOL = 4
    THAW_POOL = 5
    TRANSFER_TAXMAN = 6
    TRANSFER_OWNERSHIP = 7
    ROUTING = 8
    UPDATE_FEE = 9
    ADD_SIDED_LIQUIDITY = 10
    WRAP_SOL = 11


# Devnet deployments
DEFAULT_SWAP_PROGRAM_ID = "D8UuF1jPr5gtxHvnVz3HpxP2UkgtxLs9vwz7ecaTkrGy"
ANCHOR_SWAP_PROGRAM_ID = "4erFSLP7oBFSVC1t35jdxmbfxEhYCKfoM6XdG2BLR3UF"

# Default ratios for new pools, parts per 10^9
DEFAULT_FEE_RATIO = 2_500_000  # 0.25%
DEFAULT_TAX_RATIO = 500_000  # 0.05%

# On-chain custom error index -> message
ERROR_MAPPING = [
    "Invalid instruction",
    "Incorrect program id",
    "Operation overflowed",
    "Invalid owner",
    "Invalid LP proof",
    "Cannot input a zero amount",
    "The account was initialized already",
    "The provided accounts are unmatched to the pool",
    "Cannot initialize a pool with two same mints",
    "Exceed limit",
]


def error_message(code: int) -> str:
    """Message for a custom swap program error code"""
    return program_error_message("swap", ERROR_MAPPING, code)
