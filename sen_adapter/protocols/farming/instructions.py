"""
Farming program: instruction set, account parsing, addresses and builders

A farm pays reward tokens per period, shared by stakers in proportion to
their shares. Each staker holds one debt account per farm.
"""

from typing import Any, Dict, List, Mapping, Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ...errors import InvalidArgument
from ...layout import InstructionSet, InstructionVariant, u64
from ...schema import DEBT_SCHEMA, FARM_SCHEMA
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
from .constants import FarmingInstruction


FARMING_INSTRUCTIONS = InstructionSet("farming", [
    InstructionVariant(FarmingInstruction.INITIALIZE_FARM, [("reward", u64), ("period", u64)]),
    InstructionVariant(FarmingInstruction.INITIALIZE_ACCOUNTS),
    InstructionVariant(FarmingInstruction.STAKE, [("amount", u64)]),
    InstructionVariant(FarmingInstruction.UNSTAKE, [("amount", u64)]),
    InstructionVariant(FarmingInstruction.HARVEST),
    InstructionVariant(FarmingInstruction.FREEZE),
    InstructionVariant(FarmingInstruction.THAW),
    InstructionVariant(FarmingInstruction.SEED, [("amount", u64)]),
    InstructionVariant(FarmingInstruction.UNSEED, [("amount", u64)]),
    InstructionVariant(FarmingInstruction.TRANSFER_FARM_OWNERSHIP),
    InstructionVariant(FarmingInstruction.CLOSE_DEBT),
    InstructionVariant(FarmingInstruction.CLOSE_FARM),
])


def _program(program_id: Optional[AddressLike]) -> Pubkey:
    return resolve_program(program_id, "farming")


def parse_farm_data(account_data: bytes) -> Dict[str, Any]:
    """Parse a farm account"""
    return FARM_SCHEMA.decode(account_data)


def parse_debt_data(account_data: bytes) -> Dict[str, Any]:
    """Parse a debt account (shares and reward debt of one staker)"""
    return DEBT_SCHEMA.decode(account_data)


def fetch_farm_data(reader: AccountReader, farm_address: str) -> Dict[str, Any]:
    """
    Fetch and parse a farm

    Raises:
        InvalidArgument: If the account does not exist
        LengthMismatch: If the account is not a farm
    """
    return fetch_parsed(reader, farm_address, parse_farm_data)


def fetch_debt_data(reader: AccountReader, debt_address: str) -> Dict[str, Any]:
    return fetch_parsed(reader, debt_address, parse_debt_data)


def derive_treasurer_address(farm: AddressLike, program_id: Optional[AddressLike] = None) -> Pubkey:
    """
    Treasurer of a farm: program address seeded by the farm key alone.

    Raises:
        InvalidArgument: If the farm key is not a strict account
    """
    treasurer = try_create_program_address([bytes(to_pubkey(farm))], _program(program_id))
    if treasurer is None:
        raise InvalidArgument(f"Farm {farm} has no treasurer", "farm", farm)
    return treasurer


def derive_debt_address(owner: AddressLike, farm: AddressLike, program_id: Optional[AddressLike] = None) -> Pubkey:
    """Debt account of owner in farm"""
    program = _program(program_id)
    seeds = [bytes(to_pubkey(owner)), bytes(to_pubkey(farm)), bytes(program)]
    return find_program_address(seeds, program)


def _position_accounts(
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    stake_account: AddressLike,
    rewarded: AddressLike,
    program: Pubkey,
    splt: Optional[AddressLike],
    splata: Optional[AddressLike],
) -> List[AccountMeta]:
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    return [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(derive_debt_address(payer, farm, program), is_writable=True),
        account_meta(stake_account, is_writable=True),
        account_meta(farm_data["treasury_stake"], is_writable=True),
        account_meta(farm_data["mint_stake"]),
        account_meta(rewarded, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(farm_data["mint_reward"]),
        account_meta(derive_treasurer_address(farm, program)),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]


def build_stake_instruction(
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    src: AddressLike,
    rewarded: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build stake

    Args:
        amount: Stake tokens moved from src into the farm
        payer: Staker, owner of src and of the debt account
        farm: Farm address
        farm_data: Parsed farm record (see parse_farm_data)
        src: Stake token source
        rewarded: Reward token account receiving pending rewards
    """
    program = _program(program_id)
    accounts = _position_accounts(payer, farm, farm_data, src, rewarded, program, splt, splata)
    return build_instruction(FARMING_INSTRUCTIONS, "stake", {"amount": amount}, accounts, program)


def build_unstake_instruction(
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    dst: AddressLike,
    rewarded: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build unstake returning amount stake tokens to dst"""
    program = _program(program_id)
    accounts = _position_accounts(payer, farm, farm_data, dst, rewarded, program, splt, splata)
    return build_instruction(FARMING_INSTRUCTIONS, "unstake", {"amount": amount}, accounts, program)


def build_harvest_instruction(
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    rewarded: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(derive_debt_address(payer, farm, program), is_writable=True),
        account_meta(farm_data["treasury_stake"]),
        account_meta(rewarded, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(farm_data["mint_reward"]),
        account_meta(derive_treasurer_address(farm, program)),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]
    return build_instruction(FARMING_INSTRUCTIONS, "harvest", None, accounts, program)


def build_initialize_farm_instruction(
    reward: int,
    period: int,
    payer: AddressLike,
    owner: AddressLike,
    farm: AddressLike,
    mint_stake: AddressLike,
    mint_reward: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build initialize_farm

    The farm key signs the transaction and must be a strict account (see
    create_strict_account). Treasuries are the treasurer's associated
    accounts for both mints.

    Args:
        reward: Reward tokens paid per period
        period: Period length in seconds
        payer: Fee payer
        owner: Farm owner
        farm: New farm address
        mint_stake: Mint staked into the farm
        mint_reward: Mint paid out as reward
    """
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    treasurer = derive_treasurer_address(farm, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(owner),
        account_meta(farm, is_signer=True, is_writable=True),
        account_meta(mint_stake),
        account_meta(derive_associated_address(treasurer, mint_stake, splt_id, splata_id), is_writable=True),
        account_meta(mint_reward),
        account_meta(derive_associated_address(treasurer, mint_reward, splt_id, splata_id), is_writable=True),
        account_meta(treasurer),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]
    fields = {"reward": reward, "period": period}
    return build_instruction(FARMING_INSTRUCTIONS, "initialize_farm", fields, accounts, program)


def build_initialize_accounts_instruction(
    payer: AddressLike,
    owner: AddressLike,
    farm: AddressLike,
    mint_reward: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build initialize_accounts, opening owner's reward account and debt account"""
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(owner),
        account_meta(farm),
        account_meta(mint_reward),
        account_meta(derive_associated_address(owner, mint_reward, splt_id, splata_id), is_writable=True),
        account_meta(derive_debt_address(owner, farm, program), is_writable=True),
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]
    return build_instruction(FARMING_INSTRUCTIONS, "initialize_accounts", None, accounts, program)


def build_seed_instruction(
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    src: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
) -> Instruction:
    """Build seed, topping up the reward treasury from src"""
    program = _program(program_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(src, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(resolve_program(splt, "splt")),
    ]
    return build_instruction(FARMING_INSTRUCTIONS, "seed", {"amount": amount}, accounts, program)


def build_unseed_instruction(
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    dst: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
) -> Instruction:
    """Build unseed, withdrawing reward tokens to dst"""
    program = _program(program_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(dst, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(derive_treasurer_address(farm, program)),
        account_meta(resolve_program(splt, "splt")),
    ]
    return build_instruction(FARMING_INSTRUCTIONS, "unseed", {"amount": amount}, accounts, program)


def _farm_admin(name: str, payer: AddressLike, farm: AddressLike, extra, program_id) -> Instruction:
    program = _program(program_id)
    accounts = [
        account_meta(payer, is_signer=True),
        account_meta(farm, is_writable=True),
    ] + [account_meta(address) for address in extra]
    return build_instruction(FARMING_INSTRUCTIONS, name, None, accounts, program)


def build_freeze_instruction(payer: AddressLike, farm: AddressLike, program_id=None) -> Instruction:
    return _farm_admin("freeze", payer, farm, [], program_id)


def build_thaw_instruction(payer: AddressLike, farm: AddressLike, program_id=None) -> Instruction:
    return _farm_admin("thaw", payer, farm, [], program_id)


def build_transfer_farm_ownership_instruction(
    payer: AddressLike, farm: AddressLike, new_owner: AddressLike, program_id=None
) -> Instruction:
    return _farm_admin("transfer_farm_ownership", payer, farm, [new_owner], program_id)


def build_close_debt_instruction(
    payer: AddressLike,
    farm: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    """Build close_debt; the debt account's lamports go back to payer"""
    program = _program(program_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm),
        account_meta(derive_debt_address(payer, farm, program), is_writable=True),
        account_meta(payer, is_writable=True),
    ]
    return build_instruction(FARMING_INSTRUCTIONS, "close_debt", None, accounts, program)


def build_close_farm_instruction(
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build close_farm

    Remaining rewards go to payer's associated reward account and the farm's
    lamports to payer.
    """
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    dst_reward = derive_associated_address(payer, farm_data["mint_reward"], splt_id, splata_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(dst_reward, is_writable=True),
        account_meta(payer, is_writable=True),
        account_meta(derive_treasurer_address(farm, program)),
        account_meta(splt_id),
    ]
    return build_instruction(FARMING_INSTRUCTIONS, "close_farm", None, accounts, program)
