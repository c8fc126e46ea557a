"""
Purchasing program constants
"""

from enum import IntEnum

from ..base import program_error_message


class PurchasingInstruction(IntEnum):
    INITIALIZE_RETAILER = 0
    FREEZE_RETAILER = 1
    THAW_RETAILER = 2
    PLACE_ORDER = 3
    CANCEL_ORDER = 4
    REDEEM_ORDER = 5
    APPROVE_ORDER = 6
    REJECT_ORDER = 7


ERROR_MAPPING = [
    "Invalid instruction",
    "Invalid owner",
    "Invalid approver",
    "Incorrect program id",
    "Operation overflowed",
    "Already constructed",
    "Cannot input a zero amount",
    "Order state is not active to action",
    "Order is not approved",
    "Cannot operate a pool with two same mints",
    "Invalid input data",
    "Invalid input data, bid mint is not matching",
    "Invalid input data, ask mint is not matching",
    "Invalid input data, source bid account is not matching",
    "Invalid input data, source ask account is not matching",
    "Locked time is not open",
]


def error_message(code: int) -> str:
    return program_error_message("purchasing", ERROR_MAPPING, code)
