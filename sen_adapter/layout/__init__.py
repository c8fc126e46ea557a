"""
Binary layout codec

Field types, fixed-size records and tagged instruction sets.
"""

from .fields import (
    FieldType,
    IntType,
    BoolType,
    PubkeyType,
    ArrayType,
    u8,
    u16,
    u32,
    u64,
    i64,
    u128,
    i128,
    bool_,
    pub,
    array,
)
from .record import Struct
from .instruction import (
    InstructionVariant,
    InstructionSet,
    DecodedInstruction,
    normalize_name,
)

__all__ = [
    "FieldType",
    "IntType",
    "BoolType",
    "PubkeyType",
    "ArrayType",
    "u8",
    "u16",
    "u32",
    "u64",
    "i64",
    "u128",
    "i128",
    "bool_",
    "pub",
    "array",
    "Struct",
    "InstructionVariant",
    "InstructionSet",
    "DecodedInstruction",
    "normalize_name",
]
