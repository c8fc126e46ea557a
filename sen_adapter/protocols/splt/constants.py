"""
SPL token program constants
"""

from enum import IntEnum

from ..constants import DEFAULT_SPLATA_PROGRAM_ID, DEFAULT_SPLT_PROGRAM_ID


class SpltInstruction(IntEnum):
    """Instruction tags of the SPL token program used by the adapter"""
    INITIALIZE_MINT = 0
    INITIALIZE_ACCOUNT = 1
    INITIALIZE_MULTISIG = 2
    TRANSFER = 3
    APPROVE = 4
    REVOKE = 5
    SET_AUTHORITY = 6
    MINT_TO = 7
    BURN = 8
    CLOSE_ACCOUNT = 9
    FREEZE_ACCOUNT = 10
    THAW_ACCOUNT = 11
    SYNC_NATIVE = 17


class AuthorityType(IntEnum):
    MINT_TOKENS = 0
    FREEZE_ACCOUNT = 1
    ACCOUNT_OWNER = 2
    CLOSE_ACCOUNT = 3


class AccountState(IntEnum):
    """state field of a token account"""
    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


# Associated token program: idempotent create
CREATE_IDEMPOTENT_DATA = bytes([1])

# System program transfer tag (u32 little endian)
SYSTEM_TRANSFER_TAG = 2

__all__ = [
    "SpltInstruction",
    "AuthorityType",
    "AccountState",
    "CREATE_IDEMPOTENT_DATA",
    "SYSTEM_TRANSFER_TAG",
    "DEFAULT_SPLT_PROGRAM_ID",
    "DEFAULT_SPLATA_PROGRAM_ID",
]
