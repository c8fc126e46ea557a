"""
Stake program constants
"""

from enum import IntEnum

from ..base import program_error_message


class StakeInstruction(IntEnum):
    INITIALIZE_FARM = 0
    STAKE = 1
    HARVEST = 2
    UNSTAKE = 3
    FREEZE = 4
    THAW = 5
    SEED = 6
    UNSEED = 7
    TRANSFER_FARM_OWNERSHIP = 8


# Seeds of the two farm treasurers, encoded as u32 little endian
STAKE_TREASURER_SEED = 0
REWARD_TREASURER_SEED = 1

ERROR_MAPPING = [
    "Invalid instruction",
    "Invalid owner",
    "Incorrect program id",
    "Operation overflowed",
    "Already constructed",
    "Zero value",
    "Farm unmatched",
    "Farm frozen",
]


def error_message(code: int) -> str:
    return program_error_message("stake", ERROR_MAPPING, code)
