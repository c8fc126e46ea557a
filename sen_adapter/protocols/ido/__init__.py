"""
Sen IDO program
"""

from .constants import IdoInstruction, ERROR_MAPPING, error_message
from .instructions import (
    IDO_INSTRUCTIONS,
    parse_ido_data,
    parse_ticket_data,
    derive_treasurer_address,
    derive_ticket_address,
    initialize_ido_fields,
    fetch_ido_data,
    fetch_ticket_data,
    build_initialize_ido_instruction,
    build_initialize_ticket_instruction,
    build_stake_instruction,
    build_unstake_instruction,
    build_redeem_instruction,
    build_seed_instruction,
    build_unseed_instruction,
    build_collect_instruction,
    build_transfer_ido_ownership_instruction,
)

__all__ = [
    "IdoInstruction",
    "ERROR_MAPPING",
    "error_message",
    "IDO_INSTRUCTIONS",
    "parse_ido_data",
    "parse_ticket_data",
    "derive_treasurer_address",
    "derive_ticket_address",
    "initialize_ido_fields",
    "fetch_ido_data",
    "fetch_ticket_data",
    "build_initialize_ido_instruction",
    "build_initialize_ticket_instruction",
    "build_stake_instruction",
    "build_unstake_instruction",
    "build_redeem_instruction",
    "build_seed_instruction",
    "build_unseed_instruction",
    "build_collect_instruction",
    "build_transfer_ido_ownership_instruction",
]
