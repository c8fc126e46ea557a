"""
SPL token program: instruction set, builders and account parsing
"""

import logging
import struct
from typing import Any, Dict, List, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ...errors import InvalidArgument
from ...layout import InstructionSet, InstructionVariant, pub, u8, u64
from ...schema import ACCOUNT_SCHEMA, MINT_SCHEMA, MULTISIG_SCHEMA
from ...types.common import WRAPPED_SOL_MINT
from ...utils.address import AddressLike, derive_associated_address
from ..base import account_meta, build_instruction, resolve_program, resolve_spl_programs
from ..constants import RENT_SYSVAR_ID, SYSTEM_PROGRAM_ID
from ..reader import AccountReader, fetch_parsed
from .constants import CREATE_IDEMPOTENT_DATA, SYSTEM_TRANSFER_TAG, AuthorityType, SpltInstruction

logger = logging.getLogger(__name__)

# Multisig accounts hold at most 11 signers
MAX_SIGNERS = 11

SPLT_INSTRUCTIONS = InstructionSet("splt", [
    InstructionVariant(SpltInstruction.INITIALIZE_MINT, [
        ("decimals", u8),
        ("mint_authority", pub),
        ("freeze_authority_option", u8),
        ("freeze_authority", pub),
    ]),
    InstructionVariant(SpltInstruction.INITIALIZE_ACCOUNT),
    InstructionVariant(SpltInstruction.INITIALIZE_MULTISIG, [("m", u8)]),
    InstructionVariant(SpltInstruction.TRANSFER, [("amount", u64)]),
    InstructionVariant(SpltInstruction.APPROVE, [("amount", u64)]),
    InstructionVariant(SpltInstruction.REVOKE),
    InstructionVariant(SpltInstruction.SET_AUTHORITY, [
        ("authority_type", u8),
        ("new_authority_option", u8),
        ("new_authority", pub),
    ]),
    InstructionVariant(SpltInstruction.MINT_TO, [("amount", u64)]),
    InstructionVariant(SpltInstruction.BURN, [("amount", u64)]),
    InstructionVariant(SpltInstruction.CLOSE_ACCOUNT),
    InstructionVariant(SpltInstruction.FREEZE_ACCOUNT),
    InstructionVariant(SpltInstruction.THAW_ACCOUNT),
    InstructionVariant(SpltInstruction.SYNC_NATIVE),
])


# ========== Account parsing ==========

def parse_mint_data(account_data: bytes) -> Dict[str, Any]:
    """Parse a mint account (82 bytes)"""
    return MINT_SCHEMA.decode(account_data)


def parse_account_data(account_data: bytes) -> Dict[str, Any]:
    """Parse a token account (165 bytes)"""
    return ACCOUNT_SCHEMA.decode(account_data)


def parse_multisig_data(account_data: bytes) -> Dict[str, Any]:
    """
    Parse a multisig account (355 bytes)

    Unused signer slots decode to the all-zero address.
    """
    return MULTISIG_SCHEMA.decode(account_data)


def fetch_mint_data(reader: AccountReader, mint_address: str) -> Dict[str, Any]:
    """
    Fetch and parse a mint

    Raises:
        InvalidArgument: If the account does not exist
        LengthMismatch: If the account is not a mint
    """
    return fetch_parsed(reader, mint_address, parse_mint_data)


def fetch_account_data(reader: AccountReader, account_address: str) -> Dict[str, Any]:
    """Fetch and parse a token account"""
    return fetch_parsed(reader, account_address, parse_account_data)


def fetch_multisig_data(reader: AccountReader, multisig_address: str) -> Dict[str, Any]:
    return fetch_parsed(reader, multisig_address, parse_multisig_data)


# ========== Builders ==========

def _splt(program_id: Optional[AddressLike]) -> Pubkey:
    return resolve_program(program_id, "splt")


def _build(name: str, fields, accounts, program: Pubkey) -> Instruction:
    return build_instruction(SPLT_INSTRUCTIONS, name, fields, accounts, program)


def build_initialize_mint_instruction(
    decimals: int,
    mint: AddressLike,
    mint_authority: AddressLike,
    freeze_authority: Optional[AddressLike] = None,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build initialize_mint

    Args:
        decimals: Mint decimals
        mint: Mint account (already allocated, 82 bytes)
        mint_authority: Authority allowed to mint
        freeze_authority: Optional authority allowed to freeze accounts
    """
    fields = {
        "decimals": decimals,
        "mint_authority": mint_authority,
        "freeze_authority_option": 0 if freeze_authority is None else 1,
        "freeze_authority": freeze_authority or SYSTEM_PROGRAM_ID,
    }
    accounts = [
        account_meta(mint, is_writable=True),
        account_meta(RENT_SYSVAR_ID),
    ]
    return _build("initialize_mint", fields, accounts, _splt(program_id))


def build_initialize_account_instruction(
    account: AddressLike,
    mint: AddressLike,
    owner: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    accounts = [
        account_meta(account, is_writable=True),
        account_meta(mint),
        account_meta(owner),
        account_meta(RENT_SYSVAR_ID),
    ]
    return _build("initialize_account", None, accounts, _splt(program_id))


def build_initialize_multisig_instruction(
    m: int,
    multisig: AddressLike,
    signers: List[AddressLike],
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build initialize_multisig requiring m of the given signers

    Raises:
        InvalidArgument: If m is not within 1..len(signers) or there are too many signers
    """
    if not 1 <= len(signers) <= MAX_SIGNERS:
        raise InvalidArgument(f"Multisig needs 1 to {MAX_SIGNERS} signers", "signers", len(signers))
    if not 1 <= m <= len(signers):
        raise InvalidArgument(f"m must be within 1..{len(signers)}", "m", m)
    accounts = [account_meta(multisig, is_writable=True), account_meta(RENT_SYSVAR_ID)]
    accounts += [account_meta(signer) for signer in signers]
    return _build("initialize_multisig", {"m": m}, accounts, _splt(program_id))


def build_transfer_instruction(
    amount: int,
    source: AddressLike,
    destination: AddressLike,
    authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    accounts = [
        account_meta(source, is_writable=True),
        account_meta(destination, is_writable=True),
        account_meta(authority, is_signer=True),
    ]
    return _build("transfer", {"amount": amount}, accounts, _splt(program_id))


def build_approve_instruction(
    amount: int,
    source: AddressLike,
    delegate: AddressLike,
    owner: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """Build approve letting delegate move up to amount from source"""
    accounts = [
        account_meta(source, is_writable=True),
        account_meta(delegate),
        account_meta(owner, is_signer=True),
    ]
    return _build("approve", {"amount": amount}, accounts, _splt(program_id))


def build_revoke_instruction(
    source: AddressLike,
    owner: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    accounts = [account_meta(source, is_writable=True), account_meta(owner, is_signer=True)]
    return _build("revoke", None, accounts, _splt(program_id))


def build_set_authority_instruction(
    authority_type: AuthorityType,
    target: AddressLike,
    current_authority: AddressLike,
    new_authority: Optional[AddressLike] = None,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build set_authority on a mint or token account

    A None new_authority removes the authority.
    """
    fields = {
        "authority_type": int(authority_type),
        "new_authority_option": 0 if new_authority is None else 1,
        "new_authority": new_authority or SYSTEM_PROGRAM_ID,
    }
    accounts = [
        account_meta(target, is_writable=True),
        account_meta(current_authority, is_signer=True),
    ]
    return _build("set_authority", fields, accounts, _splt(program_id))


def build_mint_to_instruction(
    amount: int,
    mint: AddressLike,
    destination: AddressLike,
    authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    accounts = [
        account_meta(mint, is_writable=True),
        account_meta(destination, is_writable=True),
        account_meta(authority, is_signer=True),
    ]
    return _build("mint_to", {"amount": amount}, accounts, _splt(program_id))


def build_burn_instruction(
    amount: int,
    account: AddressLike,
    mint: AddressLike,
    authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    accounts = [
        account_meta(account, is_writable=True),
        account_meta(mint, is_writable=True),
        account_meta(authority, is_signer=True),
    ]
    return _build("burn", {"amount": amount}, accounts, _splt(program_id))


def build_close_account_instruction(
    account: AddressLike,
    destination: AddressLike,
    authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """Close account, sending its lamports to destination"""
    accounts = [
        account_meta(account, is_writable=True),
        account_meta(destination, is_writable=True),
        account_meta(authority, is_signer=True),
    ]
    return _build("close_account", None, accounts, _splt(program_id))


def _freeze_accounts(account, mint, authority):
    return [
        account_meta(account, is_writable=True),
        account_meta(mint),
        account_meta(authority, is_signer=True),
    ]


def build_freeze_account_instruction(
    account: AddressLike,
    mint: AddressLike,
    authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    return _build("freeze_account", None, _freeze_accounts(account, mint, authority), _splt(program_id))


def build_thaw_account_instruction(
    account: AddressLike,
    mint: AddressLike,
    authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    return _build("thaw_account", None, _freeze_accounts(account, mint, authority), _splt(program_id))


def build_sync_native_instruction(account: AddressLike, program_id: Optional[AddressLike] = None) -> Instruction:
    return _build("sync_native", None, [account_meta(account, is_writable=True)], _splt(program_id))


def build_create_associated_account_instruction(
    payer: AddressLike,
    owner: AddressLike,
    mint: AddressLike,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build create_associated_token_account_idempotent

    Succeeds when the associated account already exists.
    """
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    associated = derive_associated_address(owner, mint, splt_id, splata_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(associated, is_writable=True),
        account_meta(owner),
        account_meta(mint),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
    ]
    return Instruction(splata_id, CREATE_IDEMPOTENT_DATA, accounts)


def build_wrap_instructions(
    lamports: int,
    owner: AddressLike,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> List[Instruction]:
    """
    Wrap lamports into the owner's wrapped SOL account

    Creates the associated account if needed, funds it and syncs the balance.
    """
    if lamports <= 0:
        raise InvalidArgument("Cannot wrap a zero amount", "lamports", lamports)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    wsol_account = derive_associated_address(owner, WRAPPED_SOL_MINT, splt_id, splata_id)

    instructions = [build_create_associated_account_instruction(owner, owner, WRAPPED_SOL_MINT, splt_id, splata_id)]

    transfer_data = struct.pack("<I", SYSTEM_TRANSFER_TAG) + struct.pack("<Q", lamports)
    transfer_accounts = [
        account_meta(owner, is_signer=True, is_writable=True),
        account_meta(wsol_account, is_writable=True),
    ]
    instructions.append(Instruction(Pubkey.from_string(SYSTEM_PROGRAM_ID), transfer_data, transfer_accounts))

    instructions.append(build_sync_native_instruction(wsol_account, splt_id))
    logger.debug(f"Built wrap of {lamports} lamports into {wsol_account}")
    return instructions


def build_unwrap_instruction(
    owner: AddressLike,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Close the owner's wrapped SOL account, returning all lamports to owner"""
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    wsol_account = derive_associated_address(owner, WRAPPED_SOL_MINT, splt_id, splata_id)
    return build_close_account_instruction(wsol_account, owner, owner, splt_id)
