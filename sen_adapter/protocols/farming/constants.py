"""
Farming program constants
"""

from enum import IntEnum

from ..base import program_error_message


class FarmingInstruction(IntEnum):
    INITIALIZE_FARM = 0
    INITIALIZE_ACCOUNTS = 1
    STAKE = 2
    UNSTAKE = 3
    HARVEST = 4
    FREEZE = 5
    THAW = 6
    SEED = 7
    UNSEED = 8
    TRANSFER_FARM_OWNERSHIP = 9
    CLOSE_DEBT = 10
    CLOSE_FARM = 11


DEFAULT_FARMING_PROGRAM_ID = "DX4CXjREqTUDPXFKBNbRFHTf4C42ezGWXCnyusvMWhu1"

ERROR_MAPPING = [
    "Invalid instruction",
    "Invalid owner",
    "Incorrect program id",
    "Already constructed",
    "Operation overflowed",
    "Farm unmatched",
    "Farm frozen",
    "Zero value",
    "Insufficient funds",
    "Must fully harvested first",
    "Must fully unstaked first",
    "Inconsistent treasury balance",
]


def error_message(code: int) -> str:
    return program_error_message("farming", ERROR_MAPPING, code)
