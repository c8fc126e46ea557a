"""
IDO program: instruction set, account parsing, addresses and builders

An IDO sells one token for another in two phases bounded by startdate,
middledate and enddate (unix seconds). Buyers hold one ticket per IDO.
"""

from typing import Any, Dict, List, Mapping, Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ...errors import InvalidArgument
from ...layout import InstructionSet, InstructionVariant, i64, u64
from ...schema import IDO_SCHEMA, TICKET_SCHEMA
from ...utils.address import (
    AddressLike,
    derive_associated_address,
    find_program_address,
    to_pubkey,
    try_create_program_address,
)
from ..base import account_meta, build_instruction, resolve_program, resolve_spl_programs
from ..constants import RENT_SYSVAR_ID, SYSTEM_PROGRAM_ID
from ..reader import AccountReader, fetch_parsed
from .constants import IdoInstruction


IDO_INSTRUCTIONS = InstructionSet("ido", [
    InstructionVariant(IdoInstruction.INITIALIZE_IDO, [
        ("amount", u64), ("startdate", i64), ("middledate", i64), ("enddate", i64),
    ]),
    InstructionVariant(IdoInstruction.INITIALIZE_TICKET),
    InstructionVariant(IdoInstruction.STAKE, [("amount", u64)]),
    InstructionVariant(IdoInstruction.UNSTAKE, [("amount", u64)]),
    InstructionVariant(IdoInstruction.REDEEM),
    InstructionVariant(IdoInstruction.SEED, [("amount", u64)]),
    InstructionVariant(IdoInstruction.UNSEED, [("amount", u64)]),
    InstructionVariant(IdoInstruction.COLLECT, [("amount", u64)]),
    InstructionVariant(IdoInstruction.TRANSFER_IDO_OWNERSHIP),
])


def _program(program_id: Optional[AddressLike]) -> Pubkey:
    return resolve_program(program_id, "ido")


def parse_ido_data(account_data: bytes) -> Dict[str, Any]:
    return IDO_SCHEMA.decode(account_data)


def parse_ticket_data(account_data: bytes) -> Dict[str, Any]:
    return TICKET_SCHEMA.decode(account_data)


def fetch_ido_data(reader: AccountReader, ido_address: str) -> Dict[str, Any]:
    """
    Fetch and parse an IDO

    Raises:
        InvalidArgument: If the account does not exist
        LengthMismatch: If the account is not an IDO
    """
    return fetch_parsed(reader, ido_address, parse_ido_data)


def fetch_ticket_data(reader: AccountReader, ticket_address: str) -> Dict[str, Any]:
    return fetch_parsed(reader, ticket_address, parse_ticket_data)


def derive_treasurer_address(ido: AddressLike, program_id: Optional[AddressLike] = None) -> Pubkey:
    """Treasurer of an IDO, seeded by the IDO key alone"""
    treasurer = try_create_program_address([bytes(to_pubkey(ido))], _program(program_id))
    if treasurer is None:
        raise InvalidArgument(f"IDO {ido} has no treasurer", "ido", ido)
    return treasurer


def derive_ticket_address(owner: AddressLike, ido: AddressLike, program_id: Optional[AddressLike] = None) -> Pubkey:
    """Ticket of owner in ido"""
    program = _program(program_id)
    seeds = [bytes(to_pubkey(owner)), bytes(to_pubkey(ido)), bytes(program)]
    return find_program_address(seeds, program)


def initialize_ido_fields(amount: int, startdate: int, middledate: int, enddate: int) -> Dict[str, int]:
    """
    Fields of initialize_ido after checking the phase dates

    Raises:
        InvalidArgument: If the dates are not strictly increasing
    """
    if not startdate < middledate < enddate:
        raise InvalidArgument(
            "IDO dates must satisfy startdate < middledate < enddate",
            "middledate",
            (startdate, middledate, enddate),
        )
    return {"amount": amount, "startdate": startdate, "middledate": middledate, "enddate": enddate}


# ========== Builders ==========
#
# Token sides are the payer's associated accounts: the sold mint for seeding
# and redeeming, the raised mint for staking and collecting.

def _tail(splt_id: Pubkey, splata_id: Pubkey) -> List[AccountMeta]:
    return [
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]


def build_initialize_ido_instruction(
    amount: int,
    startdate: int,
    middledate: int,
    enddate: int,
    payer: AddressLike,
    ido: AddressLike,
    sold_mint: AddressLike,
    raised_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build initialize_ido

    The IDO key signs and must be a strict account (see
    create_strict_account).

    Args:
        amount: Sold tokens moved from the payer into the IDO
        startdate, middledate, enddate: Phase bounds, unix seconds
        payer: IDO owner and fee payer
        ido: New IDO address
        sold_mint: Mint being sold
        raised_mint: Mint being raised

    Raises:
        InvalidArgument: If the dates are not strictly increasing
    """
    fields = initialize_ido_fields(amount, startdate, middledate, enddate)
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    treasurer = derive_treasurer_address(ido, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido, is_signer=True, is_writable=True),
        account_meta(derive_associated_address(payer, sold_mint, splt_id, splata_id), is_writable=True),
        account_meta(sold_mint),
        account_meta(derive_associated_address(treasurer, sold_mint, splt_id, splata_id), is_writable=True),
        account_meta(raised_mint),
        account_meta(derive_associated_address(treasurer, raised_mint, splt_id, splata_id), is_writable=True),
        account_meta(treasurer),
    ] + _tail(splt_id, splata_id)
    return build_instruction(IDO_INSTRUCTIONS, "initialize_ido", fields, accounts, program)


def build_initialize_ticket_instruction(
    payer: AddressLike,
    ido: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido),
        account_meta(derive_ticket_address(payer, ido, program), is_writable=True),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(RENT_SYSVAR_ID),
    ]
    return build_instruction(IDO_INSTRUCTIONS, "initialize_ticket", None, accounts, program)


def _raised_side(
    name: str,
    amount: int,
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    raised_mint: AddressLike,
    program_id: Optional[AddressLike],
    splt: Optional[AddressLike],
    splata: Optional[AddressLike],
) -> Instruction:
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido, is_writable=True),
        account_meta(derive_ticket_address(payer, ido, program), is_writable=True),
        account_meta(derive_associated_address(payer, raised_mint, splt_id, splata_id), is_writable=True),
        account_meta(raised_mint),
        account_meta(ido_data["raised_mint_treasury"], is_writable=True),
        account_meta(derive_treasurer_address(ido, program)),
    ] + _tail(splt_id, splata_id)
    return build_instruction(IDO_INSTRUCTIONS, name, {"amount": amount}, accounts, program)


def build_stake_instruction(
    amount: int,
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    raised_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build stake of amount raised tokens into payer's ticket

    Args:
        ido_data: Parsed IDO record (see parse_ido_data)
        raised_mint: Mint of ido_data["raised_mint_treasury"]
    """
    return _raised_side("stake", amount, payer, ido, ido_data, raised_mint, program_id, splt, splata)


def build_unstake_instruction(
    amount: int,
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    raised_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    return _raised_side("unstake", amount, payer, ido, ido_data, raised_mint, program_id, splt, splata)


def build_redeem_instruction(
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    sold_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build redeem, paying payer's share of sold tokens to their associated account"""
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido),
        account_meta(derive_ticket_address(payer, ido, program), is_writable=True),
        account_meta(derive_associated_address(payer, sold_mint, splt_id, splata_id), is_writable=True),
        account_meta(sold_mint),
        account_meta(ido_data["sold_mint_treasury"], is_writable=True),
        account_meta(ido_data["raised_mint_treasury"]),
        account_meta(derive_treasurer_address(ido, program)),
    ] + _tail(splt_id, splata_id)
    return build_instruction(IDO_INSTRUCTIONS, "redeem", None, accounts, program)


def build_seed_instruction(
    amount: int,
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    sold_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido, is_writable=True),
        account_meta(derive_associated_address(payer, sold_mint, splt_id, splata_id), is_writable=True),
        account_meta(ido_data["sold_mint_treasury"], is_writable=True),
        account_meta(splt_id),
    ]
    return build_instruction(IDO_INSTRUCTIONS, "seed", {"amount": amount}, accounts, program)


def build_unseed_instruction(
    amount: int,
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    sold_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido, is_writable=True),
        account_meta(derive_associated_address(payer, sold_mint, splt_id, splata_id), is_writable=True),
        account_meta(ido_data["sold_mint_treasury"], is_writable=True),
        account_meta(derive_treasurer_address(ido, program)),
        account_meta(splt_id),
    ]
    return build_instruction(IDO_INSTRUCTIONS, "unseed", {"amount": amount}, accounts, program)


def build_collect_instruction(
    amount: int,
    payer: AddressLike,
    ido: AddressLike,
    ido_data: Mapping[str, Any],
    raised_mint: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build collect, withdrawing raised tokens to the owner"""
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(ido),
        account_meta(derive_associated_address(payer, raised_mint, splt_id, splata_id), is_writable=True),
        account_meta(raised_mint),
        account_meta(ido_data["raised_mint_treasury"], is_writable=True),
        account_meta(derive_treasurer_address(ido, program)),
    ] + _tail(splt_id, splata_id)
    return build_instruction(IDO_INSTRUCTIONS, "collect", {"amount": amount}, accounts, program)


def build_transfer_ido_ownership_instruction(
    payer: AddressLike, ido: AddressLike, new_owner: AddressLike, program_id=None
) -> Instruction:
    accounts = [
        account_meta(payer, is_signer=True),
        account_meta(ido, is_writable=True),
        account_meta(new_owner),
    ]
    return build_instruction(IDO_INSTRUCTIONS, "transfer_ido_ownership", None, accounts, _program(program_id))
