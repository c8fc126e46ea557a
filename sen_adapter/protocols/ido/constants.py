"""
IDO program constants
"""

from enum import IntEnum

from ..base import program_error_message


class IdoInstruction(IntEnum):
    INITIALIZE_IDO = 0
    INITIALIZE_TICKET = 1
    STAKE = 2
    UNSTAKE = 3
    REDEEM = 4
    SEED = 5
    UNSEED = 6
    COLLECT = 7
    TRANSFER_IDO_OWNERSHIP = 8


ERROR_MAPPING = [
    "Invalid instruction",
    "Incorrect program id",
    "Invalid owner",
    "Operation overflowed",
    "Cannot initialize an IDO with two same mints",
    "The account was initialized already",
    "Cannot initialize an IDO in the past",
    "Cannot input a zero amount",
    "The provided accounts are unmatched to the ido",
    "The IDO hasn't been started yet",
    "Cannot seed/unseed after the IDO is running",
    "The phase has been ended",
    "Cannot redeem while the IDO is running",
]


def error_message(code: int) -> str:
    return program_error_message("ido", ERROR_MAPPING, code)
