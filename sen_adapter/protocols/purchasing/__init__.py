"""
Sen purchasing program
"""

from .constants import PurchasingInstruction, ERROR_MAPPING, error_message
from .instructions import (
    PURCHASING_INSTRUCTIONS,
    parse_order_data,
    parse_retailer_data,
    derive_order_address,
    fetch_order_data,
    fetch_retailer_data,
    build_place_order_instruction,
    build_reject_order_instruction,
    build_cancel_order_instruction,
    build_approve_order_instruction,
    build_redeem_order_instruction,
)

__all__ = [
    "PurchasingInstruction",
    "ERROR_MAPPING",
    "error_message",
    "PURCHASING_INSTRUCTIONS",
    "parse_order_data",
    "parse_retailer_data",
    "derive_order_address",
    "fetch_order_data",
    "fetch_retailer_data",
    "build_place_order_instruction",
    "build_reject_order_instruction",
    "build_cancel_order_instruction",
    "build_approve_order_instruction",
    "build_redeem_order_instruction",
]
