"""
Tagged instruction sets

Every program accepts a closed set of instructions. The payload is a single
tag byte followed by the variant's fixed-width argument record.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..errors import LayoutError, LengthMismatch, UnknownInstruction
from .fields import FieldType
from .record import Struct

logger = logging.getLogger(__name__)

TAG_SIZE = 1


def normalize_name(name: str) -> str:
    """initializePool, initialize_pool and InitializePool share one key"""
    return name.replace("_", "").lower()


class InstructionVariant:
    """One instruction: tag code, snake_case name and argument layout"""

    def __init__(self, code: IntEnum, fields: Iterable[Tuple[str, FieldType]] = ()):
        self.code = int(code)
        self.name = code.name.lower()
        self.layout = Struct(self.name, fields)
        self.span = TAG_SIZE + self.layout.span

    def __repr__(self) -> str:
        return f"InstructionVariant({self.code}, {self.name}, span={self.span})"


@dataclass
class DecodedInstruction:
    """Result of decoding an instruction payload"""
    name: str
    code: int
    fields: Dict[str, Any] = field(default_factory=dict)


class InstructionSet:
    """
    Closed tag -> variant table for a program

    Construction rejects duplicate tags and duplicate (normalized) names.

    Usage:
        data = SWAP_INSTRUCTIONS.encode("swap", {"amount": 10, "limit": 9})
        decoded = SWAP_INSTRUCTIONS.decode(data)
    """

    def __init__(self, program: str, variants: Iterable[InstructionVariant]):
        self.program = program
        self._by_code: Dict[int, InstructionVariant] = {}
        self._by_name: Dict[str, InstructionVariant] = {}

        for variant in variants:
            if variant.code in self._by_code:
                raise LayoutError.duplicate(program, "instruction tag", variant.code)
            key = normalize_name(variant.name)
            if key in self._by_name:
                raise LayoutError.duplicate(program, "instruction name", variant.name)
            self._by_code[variant.code] = variant
            self._by_name[key] = variant

        logger.debug(f"Built instruction set {program}: {len(self._by_code)} variants")

    @property
    def variants(self) -> List[InstructionVariant]:
        return [self._by_code[code] for code in sorted(self._by_code)]

    def get(self, name: str) -> InstructionVariant:
        variant = self._by_name.get(normalize_name(name))
        if variant is None:
            raise UnknownInstruction.unknown_name(self.program, name)
        return variant

    def encode(self, name: str, fields: Optional[Mapping[str, Any]] = None) -> bytes:
        """
        Encode an instruction payload.

        Args:
            name: Variant name in any casing
            fields: Argument values keyed by field name

        Returns:
            Tag byte followed by the argument record, exactly the variant span

        Raises:
            UnknownInstruction: If name is not in the set
            InvalidArgument: If a field is missing or out of range
        """
        variant = self.get(name)
        buffer = bytearray(variant.span)
        buffer[0] = variant.code
        variant.layout.encode_into(buffer, TAG_SIZE, fields or {})
        return bytes(buffer)

    def decode(self, data: bytes) -> DecodedInstruction:
        """
        Decode an instruction payload.

        Raises:
            UnknownInstruction: If the tag is unknown
            LengthMismatch: If the buffer is empty or its length differs from the variant span
        """
        if not data:
            raise LengthMismatch.for_layout(self.program, TAG_SIZE, 0)
        variant = self._by_code.get(data[0])
        if variant is None:
            raise UnknownInstruction.unknown_tag(self.program, data[0])
        if len(data) != variant.span:
            raise LengthMismatch.for_layout(f"{self.program}.{variant.name}", variant.span, len(data))
        return DecodedInstruction(
            name=variant.name,
            code=variant.code,
            fields=variant.layout.decode_from(data, TAG_SIZE),
        )

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._by_name

    def __len__(self) -> int:
        return len(self._by_code)

    def __repr__(self) -> str:
        return f"InstructionSet({self.program}, {len(self)} variants)"
