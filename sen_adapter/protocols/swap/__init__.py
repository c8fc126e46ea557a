"""
Sen swap program

Constant-product oracle, quoting, instruction builders and pool parsing.
"""

from . import oracle
from .constants import (
    SwapInstruction,
    DEFAULT_SWAP_PROGRAM_ID,
    DEFAULT_FEE_RATIO,
    DEFAULT_TAX_RATIO,
    ERROR_MAPPING,
    error_message,
)
from .routing import (
    PoolHop,
    minimum_output,
    check_slippage,
    quote_swap,
    quote_route,
)
from .instructions import (
    SWAP_INSTRUCTIONS,
    RouteHop,
    derive_treasurer_address,
    derive_proof_address,
    derive_pool_address,
    derive_treasury_addresses,
    find_treasury,
    build_initialize_pool_instruction,
    build_add_liquidity_instruction,
    build_remove_liquidity_instruction,
    build_swap_instruction,
    build_routing_instruction,
    build_freeze_pool_instruction,
    build_thaw_pool_instruction,
    build_transfer_taxman_instruction,
    build_transfer_ownership_instruction,
    build_update_fee_instruction,
    build_wrap_sol_instruction,
)
from .pool_parser import (
    parse_pool_data,
    parse_lpt_data,
    fetch_pool_data,
    fetch_lpt_data,
    pool_state_to_pool,
)

__all__ = [
    "oracle",
    # Constants
    "SwapInstruction",
    "DEFAULT_SWAP_PROGRAM_ID",
    "DEFAULT_FEE_RATIO",
    "DEFAULT_TAX_RATIO",
    "ERROR_MAPPING",
    "error_message",
    # Quoting
    "PoolHop",
    "minimum_output",
    "check_slippage",
    "quote_swap",
    "quote_route",
    # Instructions
    "SWAP_INSTRUCTIONS",
    "RouteHop",
    "derive_treasurer_address",
    "derive_proof_address",
    "derive_pool_address",
    "derive_treasury_addresses",
    "find_treasury",
    "build_initialize_pool_instruction",
    "build_add_liquidity_instruction",
    "build_remove_liquidity_instruction",
    "build_swap_instruction",
    "build_routing_instruction",
    "build_freeze_pool_instruction",
    "build_thaw_pool_instruction",
    "build_transfer_taxman_instruction",
    "build_transfer_ownership_instruction",
    "build_update_fee_instruction",
    "build_wrap_sol_instruction",
    # Accounts
    "parse_pool_data",
    "parse_lpt_data",
    "fetch_pool_data",
    "fetch_lpt_data",
    "pool_state_to_pool",
]
