"""
Sen stake program
"""

from .constants import StakeInstruction, ERROR_MAPPING, error_message
from .instructions import (
    STAKE_INSTRUCTIONS,
    parse_stake_farm_data,
    parse_stake_debt_data,
    derive_debt_address,
    derive_farm_treasurer_addresses,
    create_farm_account,
    fetch_stake_farm_data,
    fetch_stake_debt_data,
    build_initialize_farm_instruction,
    build_stake_instruction,
    build_harvest_instruction,
    build_unstake_instruction,
    build_seed_instruction,
    build_unseed_instruction,
    build_freeze_instruction,
    build_thaw_instruction,
    build_transfer_farm_ownership_instruction,
)

__all__ = [
    "StakeInstruction",
    "ERROR_MAPPING",
    "error_message",
    "STAKE_INSTRUCTIONS",
    "parse_stake_farm_data",
    "parse_stake_debt_data",
    "derive_debt_address",
    "derive_farm_treasurer_addresses",
    "create_farm_account",
    "fetch_stake_farm_data",
    "fetch_stake_debt_data",
    "build_initialize_farm_instruction",
    "build_stake_instruction",
    "build_harvest_instruction",
    "build_unstake_instruction",
    "build_seed_instruction",
    "build_unseed_instruction",
    "build_freeze_instruction",
    "build_thaw_instruction",
    "build_transfer_farm_ownership_instruction",
]
