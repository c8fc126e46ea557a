"""
Swap pool account parser

Decodes pool and LP token accounts and turns them into Pool values.
"""

import logging
from typing import Any, Dict, Optional

from ...errors import PoolUnavailable
from ...schema import ACCOUNT_SCHEMA, POOL_SCHEMA
from ...types import Pool, PoolState, Token
from ..reader import AccountReader, decode_account_data, read_account
from .instructions import derive_pool_address

logger = logging.getLogger(__name__)


def parse_pool_data(account_data: bytes) -> Dict[str, Any]:
    """
    Parse a pool account.

    Layout (257 bytes):
    - pub: owner
    - u8: state
    - pub: mint_lpt
    - pub: taxman
    - pub: mint_a, pub: treasury_a, u64: reserve_a
    - pub: mint_b, pub: treasury_b, u64: reserve_b
    - u64: fee_ratio
    - u64: tax_ratio

    Raises:
        LengthMismatch: If the buffer is not exactly 257 bytes
    """
    return POOL_SCHEMA.decode(account_data)


def parse_lpt_data(account_data: bytes) -> Dict[str, Any]:
    """LP token accounts are plain token accounts"""
    return ACCOUNT_SCHEMA.decode(account_data)


def fetch_pool_data(
    reader: AccountReader,
    pool_address: str,
    program_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Fetch and parse a pool account

    Args:
        reader: Account reader (see protocols.reader)
        pool_address: Pool address
        program_id: Expected owner program (config default if None)

    Returns:
        Parsed pool record

    Raises:
        PoolUnavailable: If the pool is missing or owned by another program
    """
    from ...config import config

    program_id = str(program_id or config.programs.swap)
    account = read_account(reader, pool_address)
    if account is None:
        raise PoolUnavailable.not_found(str(pool_address))

    owner = account.get("owner")
    if owner != program_id:
        raise PoolUnavailable.invalid_state(
            str(pool_address),
            f"Account not owned by swap program (owner={owner})"
        )

    raw_data = decode_account_data(account)
    if raw_data is None:
        raise PoolUnavailable.invalid_state(str(pool_address), "Invalid account data format")

    return parse_pool_data(raw_data)


def fetch_lpt_data(
    reader: AccountReader,
    lpt_address: str,
    program_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Fetch an LP token account together with the pool that issued it.

    The pool is recovered from the LP mint's authorities, so a token account
    of an ordinary mint is rejected.

    Returns:
        Parsed token account with an extra "pool" key

    Raises:
        PoolUnavailable: If the account is missing or its mint is not an LP mint
    """
    from ..splt.instructions import fetch_mint_data

    account = read_account(reader, lpt_address)
    raw_data = decode_account_data(account) if account else None
    if raw_data is None:
        raise PoolUnavailable.not_found(str(lpt_address))
    lpt_data = parse_lpt_data(raw_data)

    mint_data = fetch_mint_data(reader, lpt_data["mint"])
    pool = derive_pool_address(mint_data["mint_authority"], mint_data["freeze_authority"], program_id)
    if pool is None:
        raise PoolUnavailable.invalid_state(str(lpt_address), f"mint {lpt_data['mint']} is not an LP mint")
    return {**lpt_data, "pool": str(pool)}


def pool_state_to_pool(
    pool_address: str,
    state: Dict[str, Any],
    token_a: Optional[Token] = None,
    token_b: Optional[Token] = None,
    reader: Optional[AccountReader] = None,
) -> Pool:
    """
    Convert a parsed pool record to a Pool

    Args:
        pool_address: Pool address
        state: Parsed pool record
        token_a: Optional token A info
        token_b: Optional token B info
        reader: Optional account reader used to look up mint decimals

    Returns:
        Pool dataclass

    Raises:
        PoolUnavailable: If the state byte is not a known pool state
    """
    try:
        pool_state = PoolState(state["state"])
    except ValueError:
        raise PoolUnavailable.invalid_state(str(pool_address), f"unknown pool state {state['state']}")

    if token_a is None:
        token_a = _token_for_mint(state["mint_a"], reader)
    if token_b is None:
        token_b = _token_for_mint(state["mint_b"], reader)

    return Pool(
        address=str(pool_address),
        state=pool_state,
        owner=state["owner"],
        mint_lpt=state["mint_lpt"],
        taxman=state["taxman"],
        token_a=token_a,
        treasury_a=state["treasury_a"],
        reserve_a=state["reserve_a"],
        token_b=token_b,
        treasury_b=state["treasury_b"],
        reserve_b=state["reserve_b"],
        fee_ratio=state["fee_ratio"],
        tax_ratio=state["tax_ratio"],
    )


def _token_for_mint(mint: str, reader: Optional[AccountReader]) -> Token:
    from ...types.common import WRAPPED_SOL

    if mint == WRAPPED_SOL.mint:
        return WRAPPED_SOL
    decimals = 9
    if reader is not None:
        from ..splt.instructions import fetch_mint_data

        decimals = fetch_mint_data(reader, mint)["decimals"]
    else:
        logger.debug(f"No reader for mint {mint[:8]}..., assuming 9 decimals")
    return Token(mint=mint, symbol=mint[:8], decimals=decimals)
