"""
Address helpers

Validation of base58 account keys and derivation of program-owned addresses.
"""

import logging
from typing import List, Optional, Union

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..errors import InvalidArgument

logger = logging.getLogger(__name__)

PUBKEY_LENGTH = 32

AddressLike = Union[str, bytes, Pubkey]


def is_address(value) -> bool:
    """Check whether value is a base58 string of a 32-byte key"""
    if isinstance(value, Pubkey):
        return True
    if not isinstance(value, str) or not value:
        return False
    try:
        return len(base58.b58decode(value)) == PUBKEY_LENGTH
    except ValueError:
        return False


def to_pubkey(value: AddressLike) -> Pubkey:
    """
    Coerce a base58 string, raw 32 bytes or Pubkey into a Pubkey.

    Raises:
        InvalidArgument: If value is not a valid account key
    """
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) != PUBKEY_LENGTH:
            raise InvalidArgument.bad_address(value)
        return Pubkey.from_bytes(bytes(value))
    if not is_address(value):
        raise InvalidArgument.bad_address(value)
    return Pubkey.from_string(value)


def pubkey_to_string(data: bytes) -> str:
    """Encode 32 raw key bytes as base58"""
    return base58.b58encode(data).decode("ascii")


def xor_addresses(a: AddressLike, b: AddressLike) -> Pubkey:
    """Byte-wise XOR of two keys"""
    left = bytes(to_pubkey(a))
    right = bytes(to_pubkey(b))
    return Pubkey.from_bytes(bytes(x ^ y for x, y in zip(left, right)))


def try_create_program_address(seeds: List[bytes], program_id: AddressLike) -> Optional[Pubkey]:
    """
    Program address for exact seeds, or None when they do not yield one.

    No bump search: seeds either land off the curve as given or the address
    does not exist.
    """
    program = to_pubkey(program_id)
    try:
        return Pubkey.create_program_address(seeds, program)
    except Exception as e:
        # solders raises PubkeyError, which it does not export
        logger.debug(f"No program address for seeds: {e}")
        return None


def create_program_address(seeds: List[bytes], program_id: AddressLike) -> Pubkey:
    """
    Program address for exact seeds.

    Raises:
        InvalidArgument: If the seeds do not yield an off-curve address
    """
    address = try_create_program_address(seeds, program_id)
    if address is None:
        raise InvalidArgument("Seeds do not yield a program address", "seeds", seeds)
    return address


def find_program_address(seeds: List[bytes], program_id: AddressLike) -> Pubkey:
    """Canonical program address (bump search) for seeds"""
    address, _ = Pubkey.find_program_address(seeds, to_pubkey(program_id))
    return address


def is_associated_address(value: AddressLike) -> bool:
    """Program-owned addresses are off the ed25519 curve"""
    return not to_pubkey(value).is_on_curve()


def derive_associated_address(
    wallet: AddressLike,
    mint: AddressLike,
    splt_program: Optional[AddressLike] = None,
    splata_program: Optional[AddressLike] = None,
) -> Pubkey:
    """
    Associated token account of wallet for mint.

    Args:
        wallet: Owner address
        mint: Token mint
        splt_program: Token program (defaults to config)
        splata_program: Associated token program (defaults to config)

    Returns:
        Associated token account address
    """
    from ..config import config

    splt = to_pubkey(splt_program or config.programs.splt)
    splata = to_pubkey(splata_program or config.programs.splata)
    seeds = [bytes(to_pubkey(wallet)), bytes(splt), bytes(to_pubkey(mint))]
    return find_program_address(seeds, splata)


def create_strict_account(program_id: AddressLike, max_attempts: int = 256) -> Keypair:
    """
    Generate a keypair whose public key is a valid program-address seed.

    Accounts such as pools and farms must own a treasurer derived from their
    own key alone, so random keypairs are drawn until one qualifies.

    Raises:
        InvalidArgument: If no suitable keypair is found within max_attempts
    """
    program = to_pubkey(program_id)
    for attempt in range(max_attempts):
        keypair = Keypair()
        if try_create_program_address([bytes(keypair.pubkey())], program) is not None:
            logger.debug(f"Strict account found after {attempt + 1} attempt(s): {keypair.pubkey()}")
            return keypair
    raise InvalidArgument(f"No strict account found in {max_attempts} attempts", "max_attempts", max_attempts)
