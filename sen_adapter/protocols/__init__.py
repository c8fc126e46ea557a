"""
Sen programs

Each program package carries its instruction set, account parsers, address
derivations and, where needed, instruction builders.
"""

from .base import account_meta, build_instruction, resolve_program, resolve_spl_programs
from .reader import AccountReader, decode_account_data, fetch_parsed, read_account
from .registry import ProgramRegistry, encode_instruction, decode_instruction

__all__ = [
    "account_meta",
    "build_instruction",
    "resolve_program",
    "resolve_spl_programs",
    "AccountReader",
    "decode_account_data",
    "read_account",
    "fetch_parsed",
    "ProgramRegistry",
    "encode_instruction",
    "decode_instruction",
]
