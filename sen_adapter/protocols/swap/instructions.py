"""
Swap program instruction set and builders

Builders return solders Instructions; signing and submission belong to the
caller's transaction layer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ...errors import InvalidArgument, PoolUnavailable
from ...layout import InstructionSet, InstructionVariant, u64
from ...types.common import WRAPPED_SOL_MINT
from ...utils.address import (
    AddressLike,
    derive_associated_address,
    to_pubkey,
    try_create_program_address,
    xor_addresses,
)
from ..base import account_meta as _meta
from ..base import build_instruction, resolve_program
from ..base import resolve_spl_programs as _spl_programs
from ..constants import RENT_SYSVAR_ID, SYSTEM_PROGRAM_ID
from .constants import DEFAULT_FEE_RATIO, DEFAULT_TAX_RATIO, SwapInstruction

logger = logging.getLogger(__name__)


SWAP_INSTRUCTIONS = InstructionSet("swap", [
    InstructionVariant(SwapInstruction.INITIALIZE_POOL, [
        ("delta_a", u64), ("delta_b", u64), ("fee_ratio", u64), ("tax_ratio", u64),
    ]),
    InstructionVariant(SwapInstruction.ADD_LIQUIDITY, [("delta_a", u64), ("delta_b", u64)]),
    InstructionVariant(SwapInstruction.REMOVE_LIQUIDITY, [("lpt", u64)]),
    InstructionVariant(SwapInstruction.SWAP, [("amount", u64), ("limit", u64)]),
    InstructionVariant(SwapInstruction.FREEZE_POOL),
    InstructionVariant(SwapInstruction.THAW_POOL),
    InstructionVariant(SwapInstruction.TRANSFER_TAXMAN),
    InstructionVariant(SwapInstruction.TRANSFER_OWNERSHIP),
    InstructionVariant(SwapInstruction.ROUTING, [("amount", u64), ("limit", u64)]),
    InstructionVariant(SwapInstruction.UPDATE_FEE, [("fee_ratio", u64), ("tax_ratio", u64)]),
    InstructionVariant(SwapInstruction.ADD_SIDED_LIQUIDITY, [("delta_a", u64), ("delta_b", u64)]),
    InstructionVariant(SwapInstruction.WRAP_SOL, [("amount", u64)]),
])


def _program(program_id: Optional[AddressLike]) -> Pubkey:
    return resolve_program(program_id, "swap")


def _build(
    name: str,
    fields: Optional[Mapping[str, Any]],
    accounts: List[AccountMeta],
    program: Pubkey,
) -> Instruction:
    return build_instruction(SWAP_INSTRUCTIONS, name, fields, accounts, program)


def _tail(treasurer: Pubkey, splt: Pubkey, splata: Pubkey) -> List[AccountMeta]:
    """Treasurer followed by the system, token, rent and associated-token programs"""
    return [
        _meta(treasurer),
        _meta(SYSTEM_PROGRAM_ID),
        _meta(splt),
        _meta(RENT_SYSVAR_ID),
        _meta(splata),
    ]


# ---------------------------------------------------------------------------
# Address derivation
# ---------------------------------------------------------------------------

def derive_treasurer_address(pool: AddressLike, program_id: Optional[AddressLike] = None) -> Pubkey:
    """
    Treasurer of a pool: program address seeded by the pool key alone.

    Raises:
        InvalidArgument: If the pool key is not a strict account
    """
    treasurer = try_create_program_address([bytes(to_pubkey(pool))], _program(program_id))
    if treasurer is None:
        raise InvalidArgument(f"Pool {pool} has no treasurer; create it with create_strict_account", "pool", pool)
    return treasurer


def derive_proof_address(pool: AddressLike, program_id: Optional[AddressLike] = None) -> Pubkey:
    """
    LP mint freeze authority: program XOR pool XOR treasurer.

    Marks a mint as the LP mint of exactly one pool.
    """
    program = _program(program_id)
    treasurer = derive_treasurer_address(pool, program)
    return xor_addresses(program, xor_addresses(pool, treasurer))


def derive_pool_address(
    mint_authority: AddressLike,
    freeze_authority: AddressLike,
    program_id: Optional[AddressLike] = None,
) -> Optional[Pubkey]:
    """
    Recover the pool behind an LP mint from the mint's authorities.

    Returns:
        Pool address, or None if the mint was not issued by a pool
    """
    program = _program(program_id)
    candidate = xor_addresses(program, xor_addresses(freeze_authority, mint_authority))
    treasurer = try_create_program_address([bytes(candidate)], program)
    if treasurer is None or treasurer != to_pubkey(mint_authority):
        logger.debug(f"Mint authority {mint_authority} is not a pool treasurer")
        return None
    return candidate


def derive_treasury_addresses(
    treasurer: AddressLike,
    mints: Sequence[AddressLike],
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> List[Pubkey]:
    """Associated accounts of the treasurer for each mint"""
    splt_id, splata_id = _spl_programs(splt, splata)
    return [derive_associated_address(treasurer, mint, splt_id, splata_id) for mint in mints]


def find_treasury(mint: str, pool_data: Mapping[str, Any]) -> str:
    """
    Treasury holding mint in a decoded pool record.

    Raises:
        PoolUnavailable: If mint is not one of the pool mints
    """
    if mint == pool_data["mint_a"]:
        return pool_data["treasury_a"]
    if mint == pool_data["mint_b"]:
        return pool_data["treasury_b"]
    raise PoolUnavailable.invalid_state(pool_data.get("address", ""), f"no treasury for mint {mint}")


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_initialize_pool_instruction(
    delta_a: int,
    delta_b: int,
    payer: AddressLike,
    owner: AddressLike,
    pool: AddressLike,
    lpt: AddressLike,
    mint_lpt: AddressLike,
    taxman: AddressLike,
    src_a: AddressLike,
    mint_a: AddressLike,
    src_b: AddressLike,
    mint_b: AddressLike,
    fee_ratio: int = DEFAULT_FEE_RATIO,
    tax_ratio: int = DEFAULT_TAX_RATIO,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build initialize_pool.

    pool and mint_lpt must sign; pool must be a strict account
    (see create_strict_account). Treasurer, proof and treasuries are derived.

    Raises:
        InvalidArgument: If both mints are equal or pool is not strict
    """
    if to_pubkey(mint_a) == to_pubkey(mint_b):
        raise InvalidArgument("Cannot initialize a pool with two same mints", "mint_b", mint_b)
    program = _program(program_id)
    splt_id, splata_id = _spl_programs(splt, splata)
    treasurer = derive_treasurer_address(pool, program)
    proof = xor_addresses(program, xor_addresses(pool, treasurer))
    treasury_a, treasury_b = derive_treasury_addresses(treasurer, [mint_a, mint_b], splt_id, splata_id)

    accounts = [
        _meta(payer, is_signer=True, is_writable=True),
        _meta(owner),
        _meta(pool, is_signer=True, is_writable=True),
        _meta(lpt, is_writable=True),
        _meta(mint_lpt, is_signer=True, is_writable=True),
        _meta(taxman),
        _meta(proof),
        _meta(src_a, is_writable=True),
        _meta(mint_a),
        _meta(treasury_a, is_writable=True),
        _meta(src_b, is_writable=True),
        _meta(mint_b),
        _meta(treasury_b, is_writable=True),
    ] + _tail(treasurer, splt_id, splata_id)
    fields = {"delta_a": delta_a, "delta_b": delta_b, "fee_ratio": fee_ratio, "tax_ratio": tax_ratio}
    return _build("initialize_pool", fields, accounts, program)


def _liquidity_accounts(
    payer, pool, lpt, mint_lpt, account_a, mint_a, treasury_a, account_b, mint_b, treasury_b,
    program, splt_id, splata_id,
) -> List[AccountMeta]:
    treasurer = derive_treasurer_address(pool, program)
    return [
        _meta(payer, is_signer=True),
        _meta(pool, is_writable=True),
        _meta(lpt, is_writable=True),
        _meta(mint_lpt, is_writable=True),
        _meta(account_a, is_writable=True),
        _meta(mint_a),
        _meta(treasury_a, is_writable=True),
        _meta(account_b, is_writable=True),
        _meta(mint_b),
        _meta(treasury_b, is_writable=True),
    ] + _tail(treasurer, splt_id, splata_id)


def build_add_liquidity_instruction(
    delta_a: int,
    delta_b: int,
    payer: AddressLike,
    pool: AddressLike,
    lpt: AddressLike,
    mint_lpt: AddressLike,
    src_a: AddressLike,
    mint_a: AddressLike,
    treasury_a: AddressLike,
    src_b: AddressLike,
    mint_b: AddressLike,
    treasury_b: AddressLike,
    sided: bool = False,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build add_liquidity, or add_sided_liquidity when sided is True.

    With sided liquidity the program swaps the excess side before minting
    (see oracle.sided_deposit for the expected outcome).
    """
    program = _program(program_id)
    splt_id, splata_id = _spl_programs(splt, splata)
    accounts = _liquidity_accounts(
        payer, pool, lpt, mint_lpt, src_a, mint_a, treasury_a, src_b, mint_b, treasury_b,
        program, splt_id, splata_id,
    )
    name = "add_sided_liquidity" if sided else "add_liquidity"
    return _build(name, {"delta_a": delta_a, "delta_b": delta_b}, accounts, program)


def build_remove_liquidity_instruction(
    lpt_amount: int,
    payer: AddressLike,
    pool: AddressLike,
    lpt: AddressLike,
    mint_lpt: AddressLike,
    dst_a: AddressLike,
    mint_a: AddressLike,
    treasury_a: AddressLike,
    dst_b: AddressLike,
    mint_b: AddressLike,
    treasury_b: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """Build remove_liquidity burning lpt_amount"""
    program = _program(program_id)
    splt_id, splata_id = _spl_programs(splt, splata)
    accounts = _liquidity_accounts(
        payer, pool, lpt, mint_lpt, dst_a, mint_a, treasury_a, dst_b, mint_b, treasury_b,
        program, splt_id, splata_id,
    )
    return _build("remove_liquidity", {"lpt": lpt_amount}, accounts, program)


@dataclass
class RouteHop:
    """
    Accounts of one pool in a swap or route

    treasury_taxman defaults to the taxman's associated account for dst_mint.
    """
    pool: AddressLike
    src: AddressLike
    src_mint: AddressLike
    treasury_bid: AddressLike
    dst: AddressLike
    dst_mint: AddressLike
    treasury_ask: AddressLike
    taxman: AddressLike
    treasury_taxman: Optional[AddressLike] = None

    @classmethod
    def from_pool_data(
        cls,
        pool: AddressLike,
        pool_data: Mapping[str, Any],
        src: AddressLike,
        src_mint: str,
        dst: AddressLike,
        dst_mint: str,
    ) -> "RouteHop":
        """Fill treasuries and taxman from a decoded pool record"""
        return cls(
            pool=pool,
            src=src,
            src_mint=src_mint,
            treasury_bid=find_treasury(src_mint, pool_data),
            dst=dst,
            dst_mint=dst_mint,
            treasury_ask=find_treasury(dst_mint, pool_data),
            taxman=pool_data["taxman"],
        )

    def accounts(self, program: Pubkey, splt_id: Pubkey, splata_id: Pubkey) -> List[AccountMeta]:
        treasury_taxman = self.treasury_taxman or derive_associated_address(
            self.taxman, self.dst_mint, splt_id, splata_id
        )
        return [
            _meta(self.pool, is_writable=True),
            _meta(self.src, is_writable=True),
            _meta(self.src_mint),
            _meta(self.treasury_bid, is_writable=True),
            _meta(self.dst, is_writable=True),
            _meta(self.dst_mint),
            _meta(self.treasury_ask, is_writable=True),
            _meta(self.taxman),
            _meta(treasury_taxman, is_writable=True),
        ]


def build_swap_instruction(
    amount: int,
    limit: int,
    payer: AddressLike,
    hop: RouteHop,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build swap.

    Args:
        amount: Amount of src_mint sold
        limit: Minimum acceptable output (see routing.minimum_output)
        payer: Signer owning src
        hop: Pool accounts
    """
    program = _program(program_id)
    splt_id, splata_id = _spl_programs(splt, splata)
    treasurer = derive_treasurer_address(hop.pool, program)
    accounts = [_meta(payer, is_signer=True)]
    accounts += hop.accounts(program, splt_id, splata_id)
    accounts += _tail(treasurer, splt_id, splata_id)
    return _build("swap", {"amount": amount, "limit": limit}, accounts, program)


def build_routing_instruction(
    amount: int,
    limit: int,
    payer: AddressLike,
    hops: Sequence[RouteHop],
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build routing over several pools.

    Programs come first, then per hop the pool accounts followed by the
    pool's treasurer.

    Raises:
        InvalidArgument: If hops is empty
    """
    if not hops:
        raise InvalidArgument("Route needs at least one hop", "hops", hops)
    program = _program(program_id)
    splt_id, splata_id = _spl_programs(splt, splata)
    accounts = [
        _meta(payer, is_signer=True),
        _meta(SYSTEM_PROGRAM_ID),
        _meta(splt_id),
        _meta(RENT_SYSVAR_ID),
        _meta(splata_id),
    ]
    for hop in hops:
        accounts += hop.accounts(program, splt_id, splata_id)
        accounts.append(_meta(derive_treasurer_address(hop.pool, program)))
    return _build("routing", {"amount": amount, "limit": limit}, accounts, program)


def _pool_admin(
    name: str,
    payer: AddressLike,
    pool: AddressLike,
    extra: Optional[AddressLike] = None,
    fields: Optional[Dict[str, int]] = None,
    program_id: Optional[AddressLike] = None,
) -> Instruction:
    program = _program(program_id)
    accounts = [_meta(payer, is_signer=True), _meta(pool, is_writable=True)]
    if extra is not None:
        accounts.append(_meta(extra))
    return _build(name, fields, accounts, program)


def build_freeze_pool_instruction(payer: AddressLike, pool: AddressLike, program_id=None) -> Instruction:
    return _pool_admin("freeze_pool", payer, pool, program_id=program_id)


def build_thaw_pool_instruction(payer: AddressLike, pool: AddressLike, program_id=None) -> Instruction:
    return _pool_admin("thaw_pool", payer, pool, program_id=program_id)


def build_transfer_taxman_instruction(
    payer: AddressLike, pool: AddressLike, new_taxman: AddressLike, program_id=None
) -> Instruction:
    return _pool_admin("transfer_taxman", payer, pool, extra=new_taxman, program_id=program_id)


def build_transfer_ownership_instruction(
    payer: AddressLike, pool: AddressLike, new_owner: AddressLike, program_id=None
) -> Instruction:
    return _pool_admin("transfer_ownership", payer, pool, extra=new_owner, program_id=program_id)


def build_update_fee_instruction(
    fee_ratio: int, tax_ratio: int, payer: AddressLike, pool: AddressLike, program_id=None
) -> Instruction:
    """Build update_fee; ratios are parts per 10^9"""
    from ...utils.numeric import PRECISION

    if fee_ratio + tax_ratio >= PRECISION:
        raise InvalidArgument(f"fee_ratio + tax_ratio must be below {PRECISION}", "fee_ratio", fee_ratio)
    return _pool_admin(
        "update_fee", payer, pool,
        fields={"fee_ratio": fee_ratio, "tax_ratio": tax_ratio},
        program_id=program_id,
    )


def build_wrap_sol_instruction(
    amount: int,
    payer: AddressLike,
    program_id: Optional[AddressLike] = None,
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Instruction:
    """
    Build wrap_sol moving amount lamports into the payer's wrapped SOL account.

    The associated wrapped SOL account is derived and created by the program
    when missing.
    """
    program = _program(program_id)
    splt_id, splata_id = _spl_programs(splt, splata)
    wsol_account = derive_associated_address(payer, WRAPPED_SOL_MINT, splt_id, splata_id)
    accounts = [
        _meta(payer, is_signer=True, is_writable=True),
        _meta(wsol_account, is_writable=True),
        _meta(WRAPPED_SOL_MINT),
        _meta(SYSTEM_PROGRAM_ID),
        _meta(splt_id),
        _meta(RENT_SYSVAR_ID),
        _meta(splata_id),
    ]
    return _build("wrap_sol", {"amount": amount}, accounts, program)
