"""
Sen farming program
"""

from .constants import (
    FarmingInstruction,
    DEFAULT_FARMING_PROGRAM_ID,
    ERROR_MAPPING,
    error_message,
)
from .instructions import (
    FARMING_INSTRUCTIONS,
    parse_farm_data,
    parse_debt_data,
    fetch_farm_data,
    fetch_debt_data,
    build_initialize_farm_instruction,
    build_initialize_accounts_instruction,
    build_seed_instruction,
    build_unseed_instruction,
    build_freeze_instruction,
    build_thaw_instruction,
    build_transfer_farm_ownership_instruction,
    build_close_debt_instruction,
    build_close_farm_instruction,
    derive_treasurer_address,
    derive_debt_address,
    build_stake_instruction,
    build_unstake_instruction,
    build_harvest_instruction,
)

__all__ = [
    "FarmingInstruction",
    "DEFAULT_FARMING_PROGRAM_ID",
    "ERROR_MAPPING",
    "error_message",
    "FARMING_INSTRUCTIONS",
    "parse_farm_data",
    "parse_debt_data",
    "fetch_farm_data",
    "fetch_debt_data",
    "build_initialize_farm_instruction",
    "build_initialize_accounts_instruction",
    "build_seed_instruction",
    "build_unseed_instruction",
    "build_freeze_instruction",
    "build_thaw_instruction",
    "build_transfer_farm_ownership_instruction",
    "build_close_debt_instruction",
    "build_close_farm_instruction",
    "derive_treasurer_address",
    "derive_debt_address",
    "build_stake_instruction",
    "build_unstake_instruction",
    "build_harvest_instruction",
]
