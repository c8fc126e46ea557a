"""
Purchasing program: instruction set, account parsing, addresses and builders

A retailer sells mint_ask for mint_bid. Buyers place indexed orders that
the retailer approves or rejects.
"""

import struct
from typing import Any, Dict, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ...errors import InvalidArgument
from ...layout import InstructionSet, InstructionVariant, i64, u32, u64
from ...schema import ORDER_SCHEMA, RETAILER_SCHEMA
from ...utils.address import AddressLike, find_program_address, to_pubkey
from ..base import account_meta, build_instruction, resolve_program, resolve_spl_programs
from ..constants import RENT_SYSVAR_ID, SYSTEM_PROGRAM_ID
from ..reader import AccountReader, fetch_parsed
from .constants import PurchasingInstruction


PURCHASING_INSTRUCTIONS = InstructionSet("purchasing", [
    InstructionVariant(PurchasingInstruction.INITIALIZE_RETAILER),
    InstructionVariant(PurchasingInstruction.FREEZE_RETAILER),
    InstructionVariant(PurchasingInstruction.THAW_RETAILER),
    InstructionVariant(PurchasingInstruction.PLACE_ORDER, [
        ("index", u32), ("bid_amount", u64), ("ask_amount", u64), ("locked_time", i64),
    ]),
    InstructionVariant(PurchasingInstruction.CANCEL_ORDER),
    InstructionVariant(PurchasingInstruction.REDEEM_ORDER),
    InstructionVariant(PurchasingInstruction.APPROVE_ORDER),
    InstructionVariant(PurchasingInstruction.REJECT_ORDER),
])


def _program(program_id: Optional[AddressLike]) -> Pubkey:
    return resolve_program(program_id, "purchasing")


def parse_order_data(account_data: bytes) -> Dict[str, Any]:
    return ORDER_SCHEMA.decode(account_data)


def parse_retailer_data(account_data: bytes) -> Dict[str, Any]:
    return RETAILER_SCHEMA.decode(account_data)


def fetch_order_data(reader: AccountReader, order_address: str) -> Dict[str, Any]:
    """
    Fetch and parse a purchase order

    Raises:
        InvalidArgument: If the account does not exist
        LengthMismatch: If the account is not an order
    """
    return fetch_parsed(reader, order_address, parse_order_data)


def fetch_retailer_data(reader: AccountReader, retailer_address: str) -> Dict[str, Any]:
    return fetch_parsed(reader, retailer_address, parse_retailer_data)


def derive_order_address(
    index: int,
    owner: AddressLike,
    approver: AddressLike,
    mint_bid: AddressLike,
    mint_ask: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Pubkey:
    """
    Order number index placed by owner

    Args:
        index: Order index, u32
        owner: Buyer address
        approver: Retailer owner approving the order
        mint_bid: Mint paid by the buyer
        mint_ask: Mint received by the buyer

    Raises:
        InvalidArgument: If index does not fit in u32
    """
    if not 0 <= index <= 0xFFFFFFFF:
        raise InvalidArgument.out_of_range("index", index, "u32")
    program = _program(program_id)
    seeds = [
        struct.pack("<I", index),
        bytes(to_pubkey(owner)),
        bytes(to_pubkey(approver)),
        bytes(to_pubkey(mint_bid)),
        bytes(to_pubkey(mint_ask)),
        bytes(program),
    ]
    return find_program_address(seeds, program)


def build_place_order_instruction(
    index: int,
    bid_amount: int,
    ask_amount: int,
    locked_time: int,
    owner: AddressLike,
    approver: AddressLike,
    mint_bid: AddressLike,
    src_bid: AddressLike,
    mint_ask: AddressLike,
    dst_ask: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build place_order, opening order number index of owner

    Args:
        index: Order index, u32
        bid_amount: Tokens of mint_bid paid from src_bid
        ask_amount: Tokens of mint_ask expected in dst_ask
        locked_time: Lock period of the order, seconds
        owner: Buyer, signer and fee payer
        approver: Retailer owner who approves or rejects the order
    """
    program = _program(program_id)
    order = derive_order_address(index, owner, approver, mint_bid, mint_ask, program)
    accounts = [
        account_meta(owner, is_signer=True, is_writable=True),
        account_meta(order, is_writable=True),
        account_meta(approver, is_writable=True),
        account_meta(mint_bid, is_writable=True),
        account_meta(src_bid, is_writable=True),
        account_meta(mint_ask, is_writable=True),
        account_meta(dst_ask, is_writable=True),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(RENT_SYSVAR_ID),
    ]
    fields = {"index": index, "bid_amount": bid_amount, "ask_amount": ask_amount, "locked_time": locked_time}
    return build_instruction(PURCHASING_INSTRUCTIONS, "place_order", fields, accounts, program)


def build_reject_order_instruction(approver: AddressLike, order: AddressLike, program_id=None) -> Instruction:
    accounts = [account_meta(approver, is_signer=True, is_writable=True), account_meta(order)]
    return build_instruction(PURCHASING_INSTRUCTIONS, "reject_order", None, accounts, _program(program_id))


def build_cancel_order_instruction(owner: AddressLike, order: AddressLike, program_id=None) -> Instruction:
    accounts = [account_meta(owner, is_signer=True, is_writable=True), account_meta(order)]
    return build_instruction(PURCHASING_INSTRUCTIONS, "cancel_order", None, accounts, _program(program_id))


def build_approve_order_instruction(
    approver: AddressLike,
    order: AddressLike,
    owner: AddressLike,
    mint_bid: AddressLike,
    src_bid: AddressLike,
    treasury_bid: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build approve_order moving the bid from src_bid into treasury_bid

    Both token accounts must hold mint_bid; the program rejects the order
    otherwise.
    """
    accounts = [
        account_meta(approver, is_signer=True, is_writable=True),
        account_meta(order),
        account_meta(owner),
        account_meta(mint_bid),
        account_meta(src_bid),
        account_meta(treasury_bid),
        account_meta(resolve_program(splt, "splt")),
    ]
    return build_instruction(PURCHASING_INSTRUCTIONS, "approve_order", None, accounts, _program(program_id))


def build_redeem_order_instruction(
    owner: AddressLike,
    order: AddressLike,
    mint_ask: AddressLike,
    dst_ask: AddressLike,
    treasury_ask: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build redeem_order paying the ask from treasury_ask into dst_ask"""
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(owner, is_signer=True, is_writable=True),
        account_meta(order),
        account_meta(mint_ask),
        account_meta(dst_ask),
        account_meta(treasury_ask),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]
    return build_instruction(PURCHASING_INSTRUCTIONS, "redeem_order", None, accounts, _program(program_id))
