"""
Stake program: instruction set, account parsing, addresses and builders

Unlike the farming program, every stake opens its own debt account, indexed
per owner and farm. A farm keeps its stake and reward tokens under two
separate treasurers.
"""

import logging
import struct
from typing import Any, Dict, Mapping, Optional, Tuple

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ...errors import InvalidArgument
from ...layout import InstructionSet, InstructionVariant, u32, u64
from ...schema import STAKE_DEBT_SCHEMA, STAKE_FARM_SCHEMA
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
from .constants import REWARD_TREASURER_SEED, STAKE_TREASURER_SEED, StakeInstruction

logger = logging.getLogger(__name__)


STAKE_INSTRUCTIONS = InstructionSet("stake", [
    InstructionVariant(StakeInstruction.INITIALIZE_FARM, [("reward", u64), ("period", u64)]),
    InstructionVariant(StakeInstruction.STAKE, [("index", u32), ("amount", u64)]),
    InstructionVariant(StakeInstruction.HARVEST),
    InstructionVariant(StakeInstruction.UNSTAKE),
    InstructionVariant(StakeInstruction.FREEZE),
    InstructionVariant(StakeInstruction.THAW),
    InstructionVariant(StakeInstruction.SEED, [("amount", u64)]),
    InstructionVariant(StakeInstruction.UNSEED, [("amount", u64)]),
    InstructionVariant(StakeInstruction.TRANSFER_FARM_OWNERSHIP),
])


def _program(program_id: Optional[AddressLike]) -> Pubkey:
    return resolve_program(program_id, "stake")


def _u32(value: int) -> bytes:
    return struct.pack("<I", value)


def parse_stake_farm_data(account_data: bytes) -> Dict[str, Any]:
    """Parse a stake farm account"""
    return STAKE_FARM_SCHEMA.decode(account_data)


def parse_stake_debt_data(account_data: bytes) -> Dict[str, Any]:
    """Parse a stake debt account"""
    return STAKE_DEBT_SCHEMA.decode(account_data)


def fetch_stake_farm_data(reader: AccountReader, farm_address: str) -> Dict[str, Any]:
    """
    Fetch and parse a stake farm

    Raises:
        InvalidArgument: If the account does not exist
        LengthMismatch: If the account is not a stake farm
    """
    return fetch_parsed(reader, farm_address, parse_stake_farm_data)


def fetch_stake_debt_data(reader: AccountReader, debt_address: str) -> Dict[str, Any]:
    return fetch_parsed(reader, debt_address, parse_stake_debt_data)


def derive_debt_address(
    index: int,
    owner: AddressLike,
    farm: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Pubkey:
    """
    Debt account number index of owner in farm

    Args:
        index: Position index, u32
        owner: Staker address
        farm: Farm address

    Raises:
        InvalidArgument: If index does not fit in u32
    """
    if not 0 <= index <= 0xFFFFFFFF:
        raise InvalidArgument.out_of_range("index", index, "u32")
    program = _program(program_id)
    seeds = [_u32(index), bytes(to_pubkey(owner)), bytes(to_pubkey(farm)), bytes(program)]
    return find_program_address(seeds, program)


def _farm_treasurers(farm: Pubkey, program: Pubkey) -> Tuple[Optional[Pubkey], Optional[Pubkey]]:
    return (
        try_create_program_address([_u32(STAKE_TREASURER_SEED), bytes(farm)], program),
        try_create_program_address([_u32(REWARD_TREASURER_SEED), bytes(farm)], program),
    )


def derive_farm_treasurer_addresses(
    farm: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Tuple[Pubkey, Pubkey]:
    """
    Stake treasurer and reward treasurer of a farm

    Raises:
        InvalidArgument: If the farm key does not yield both treasurers
    """
    stake_treasurer, reward_treasurer = _farm_treasurers(to_pubkey(farm), _program(program_id))
    if stake_treasurer is None or reward_treasurer is None:
        raise InvalidArgument(f"Farm {farm} has no treasurers", "farm", farm)
    return stake_treasurer, reward_treasurer


def create_farm_account(program_id: Optional[AddressLike] = None, max_attempts: int = 256) -> Keypair:
    """
    Generate a farm keypair for which both treasurers exist

    Raises:
        InvalidArgument: If none is found within max_attempts
    """
    program = _program(program_id)
    for attempt in range(max_attempts):
        keypair = Keypair()
        if None not in _farm_treasurers(keypair.pubkey(), program):
            logger.debug(f"Farm account found after {attempt + 1} attempt(s): {keypair.pubkey()}")
            return keypair
    raise InvalidArgument(f"No farm account found in {max_attempts} attempts", "max_attempts", max_attempts)


# ========== Builders ==========

def _tail(splt_id: Pubkey, splata_id: Pubkey):
    return [
        account_meta(SYSTEM_PROGRAM_ID),
        account_meta(splt_id),
        account_meta(RENT_SYSVAR_ID),
        account_meta(splata_id),
    ]


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

    The farm key signs and must come from create_farm_account. Each treasury
    is the associated account of its own treasurer.

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
    stake_treasurer, reward_treasurer = derive_farm_treasurer_addresses(farm, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(owner),
        account_meta(farm, is_signer=True, is_writable=True),
        account_meta(mint_stake),
        account_meta(derive_associated_address(stake_treasurer, mint_stake, splt_id, splata_id), is_writable=True),
        account_meta(stake_treasurer),
        account_meta(mint_reward),
        account_meta(derive_associated_address(reward_treasurer, mint_reward, splt_id, splata_id), is_writable=True),
        account_meta(reward_treasurer),
    ] + _tail(splt_id, splata_id)
    fields = {"reward": reward, "period": period}
    return build_instruction(STAKE_INSTRUCTIONS, "initialize_farm", fields, accounts, program)


def build_stake_instruction(
    index: int,
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    src: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build stake, opening debt account number index

    Args:
        index: Debt account index of payer in farm
        amount: Stake tokens moved from src
        farm_data: Parsed stake farm record (see parse_stake_farm_data)
    """
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    stake_treasurer, _ = derive_farm_treasurer_addresses(farm, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(derive_debt_address(index, payer, farm, program), is_writable=True),
        account_meta(src, is_writable=True),
        account_meta(farm_data["treasury_stake"], is_writable=True),
        account_meta(farm_data["mint_stake"]),
        account_meta(stake_treasurer),
    ] + _tail(splt_id, splata_id)
    fields = {"index": index, "amount": amount}
    return build_instruction(STAKE_INSTRUCTIONS, "stake", fields, accounts, program)


def build_harvest_instruction(
    index: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    rewarded: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build harvest of debt account number index into rewarded"""
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    _, reward_treasurer = derive_farm_treasurer_addresses(farm, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(derive_debt_address(index, payer, farm, program), is_writable=True),
        account_meta(rewarded, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(farm_data["mint_reward"]),
        account_meta(reward_treasurer),
    ] + _tail(splt_id, splata_id)
    return build_instruction(STAKE_INSTRUCTIONS, "harvest", None, accounts, program)


def build_unstake_instruction(
    index: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    dst: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build unstake closing debt account number index, stake tokens to dst"""
    program = _program(program_id)
    splt_id, splata_id = resolve_spl_programs(splt, splata)
    stake_treasurer, _ = derive_farm_treasurer_addresses(farm, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(derive_debt_address(index, payer, farm, program), is_writable=True),
        account_meta(payer, is_writable=True),
        account_meta(dst, is_writable=True),
        account_meta(farm_data["treasury_stake"], is_writable=True),
        account_meta(farm_data["mint_stake"]),
        account_meta(stake_treasurer),
    ] + _tail(splt_id, splata_id)
    return build_instruction(STAKE_INSTRUCTIONS, "unstake", None, accounts, program)


def build_seed_instruction(
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    src: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(src, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(resolve_program(splt, "splt")),
    ]
    return build_instruction(STAKE_INSTRUCTIONS, "seed", {"amount": amount}, accounts, program)


def build_unseed_instruction(
    amount: int,
    payer: AddressLike,
    farm: AddressLike,
    farm_data: Mapping[str, Any],
    dst: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    _, reward_treasurer = derive_farm_treasurer_addresses(farm, program)
    accounts = [
        account_meta(payer, is_signer=True, is_writable=True),
        account_meta(farm, is_writable=True),
        account_meta(dst, is_writable=True),
        account_meta(farm_data["treasury_reward"], is_writable=True),
        account_meta(reward_treasurer),
        account_meta(resolve_program(splt, "splt")),
    ]
    return build_instruction(STAKE_INSTRUCTIONS, "unseed", {"amount": amount}, accounts, program)


def _farm_admin(name: str, payer: AddressLike, farm: AddressLike, extra, program_id) -> Instruction:
    accounts = [
        account_meta(payer, is_signer=True),
        account_meta(farm, is_writable=True),
    ] + [account_meta(address) for address in extra]
    return build_instruction(STAKE_INSTRUCTIONS, name, None, accounts, _program(program_id))


def build_freeze_instruction(payer: AddressLike, farm: AddressLike, program_id=None) -> Instruction:
    return _farm_admin("freeze", payer, farm, [], program_id)


def build_thaw_instruction(payer: AddressLike, farm: AddressLike, program_id=None) -> Instruction:
    return _farm_admin("thaw", payer, farm, [], program_id)


def build_transfer_farm_ownership_instruction(
    payer: AddressLike, farm: AddressLike, new_owner: AddressLike, program_id=None
) -> Instruction:
    return _farm_admin("transfer_farm_ownership", payer, farm, [new_owner], program_id)
