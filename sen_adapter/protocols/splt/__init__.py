"""
SPL token program
"""

from .constants import SpltInstruction, AuthorityType, AccountState
from .instructions import (
    SPLT_INSTRUCTIONS,
    MAX_SIGNERS,
    parse_mint_data,
    parse_account_data,
    parse_multisig_data,
    fetch_mint_data,
    fetch_account_data,
    fetch_multisig_data,
    build_initialize_mint_instruction,
    build_initialize_account_instruction,
    build_initialize_multisig_instruction,
    build_transfer_instruction,
    build_approve_instruction,
    build_revoke_instruction,
    build_set_authority_instruction,
    build_mint_to_instruction,
    build_burn_instruction,
    build_close_account_instruction,
    build_freeze_account_instruction,
    build_thaw_account_instruction,
    build_sync_native_instruction,
    build_create_associated_account_instruction,
    build_wrap_instructions,
    build_unwrap_instruction,
)

__all__ = [
    "SpltInstruction",
    "AuthorityType",
    "AccountState",
    "SPLT_INSTRUCTIONS",
    "MAX_SIGNERS",
    "parse_mint_data",
    "parse_account_data",
    "parse_multisig_data",
    "fetch_mint_data",
    "fetch_account_data",
    "fetch_multisig_data",
    "build_initialize_mint_instruction",
    "build_initialize_account_instruction",
    "build_initialize_multisig_instruction",
    "build_transfer_instruction",
    "build_approve_instruction",
    "build_revoke_instruction",
    "build_set_authority_instruction",
    "build_mint_to_instruction",
    "build_burn_instruction",
    "build_close_account_instruction",
    "build_freeze_account_instruction",
    "build_thaw_account_instruction",
    "build_sync_native_instruction",
    "build_create_associated_account_instruction",
    "build_wrap_instructions",
    "build_unwrap_instruction",
]
