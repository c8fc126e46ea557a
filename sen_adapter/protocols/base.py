"""
Helpers shared by the program modules

Program id resolution against config, account metas and instruction assembly.
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ..errors import ConfigurationError
from ..layout import InstructionSet
from ..utils.address import AddressLike, to_pubkey

logger = logging.getLogger(__name__)


def resolve_program(program_id: Optional[AddressLike], program: str) -> Pubkey:
    """
    Program id for a program module

    Args:
        program_id: Explicit program id, wins over config
        program: Attribute name on ProgramConfig ("swap", "stake", ...)

    Raises:
        ConfigurationError: If neither argument nor config provides an address
    """
    if program_id:
        return to_pubkey(program_id)
    from ..config import config

    configured = getattr(config.programs, program, "")
    if not configured:
        raise ConfigurationError.missing(f"SEN_{program.upper()}_PROGRAM_ADDRESS")
    return to_pubkey(configured)


def resolve_spl_programs(
    splt: Optional[AddressLike] = None,
    splata: Optional[AddressLike] = None,
) -> Tuple[Pubkey, Pubkey]:
    """Token and associated-token program ids"""
    return resolve_program(splt, "splt"), resolve_program(splata, "splata")


def account_meta(address: AddressLike, is_signer: bool = False, is_writable: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=to_pubkey(address), is_signer=is_signer, is_writable=is_writable)


def build_instruction(
    instructions: InstructionSet,
    name: str,
    fields: Optional[Mapping[str, Any]],
    accounts: List[AccountMeta],
    program: Pubkey,
) -> Instruction:
    """Encode name with fields and wrap it in an Instruction for program"""
    data = instructions.encode(name, fields)
    logger.debug(
        f"Built {instructions.program} instruction {name}: "
        f"{len(accounts)} accounts, {len(data)} bytes"
    )
    return Instruction(program, data, accounts)


def program_error_message(program: str, mapping, code: int) -> str:
    """Message for a custom program error code"""
    if 0 <= code < len(mapping):
        return mapping[code]
    return f"Unknown {program} program error {code}"
