"""
Instruction set registry

Central lookup of the instruction sets of every Sen program, used to encode
and decode instruction data by program name.
"""

from typing import Any, Dict, List, Mapping, Optional
import logging

from ..errors import LayoutError, UnknownInstruction
from ..layout import DecodedInstruction, InstructionSet

logger = logging.getLogger(__name__)


class ProgramRegistry:
    """
    Registry of program instruction sets

    Usage:
        # Register a set
        ProgramRegistry.register(SWAP_INSTRUCTIONS)

        # Encode by program and instruction name
        data = ProgramRegistry.encode_instruction("swap", "swap", {"amount": 1, "limit": 0})

        # List available programs
        programs = ProgramRegistry.list()
    """

    _sets: Dict[str, InstructionSet] = {}

    @classmethod
    def register(cls, instructions: InstructionSet, name: Optional[str] = None):
        """
        Register an instruction set

        Args:
            instructions: Instruction set
            name: Program name, defaults to instructions.program

        Raises:
            LayoutError: If the name is already registered
        """
        key = (name or instructions.program).lower()
        if key in cls._sets:
            raise LayoutError.duplicate("program registry", "program", key)
        cls._sets[key] = instructions
        logger.debug(f"Registered instruction set: {key} ({len(instructions)} variants)")

    @classmethod
    def get(cls, program: str) -> InstructionSet:
        """
        Instruction set of a program

        Raises:
            UnknownInstruction: If the program is not registered
        """
        key = program.lower()
        if key not in cls._sets:
            cls._ensure_loaded()
        if key not in cls._sets:
            available = ", ".join(sorted(cls._sets)) or "none"
            raise UnknownInstruction.unknown_program(program, available)
        return cls._sets[key]

    @classmethod
    def list(cls) -> List[str]:
        """List registered program names"""
        cls._ensure_loaded()
        return sorted(cls._sets)

    @classmethod
    def is_registered(cls, program: str) -> bool:
        cls._ensure_loaded()
        return program.lower() in cls._sets

    @classmethod
    def encode_instruction(cls, program: str, name: str, fields: Optional[Mapping[str, Any]] = None) -> bytes:
        return cls.get(program).encode(name, fields)

    @classmethod
    def decode_instruction(cls, program: str, data: bytes) -> DecodedInstruction:
        return cls.get(program).decode(data)

    @classmethod
    def _ensure_loaded(cls):
        """Register the built-in program sets"""
        from .farming import FARMING_INSTRUCTIONS
        from .ido import IDO_INSTRUCTIONS
        from .purchasing import PURCHASING_INSTRUCTIONS
        from .splt import SPLT_INSTRUCTIONS
        from .stake import STAKE_INSTRUCTIONS
        from .swap import SWAP_INSTRUCTIONS

        for instructions in (
            SWAP_INSTRUCTIONS,
            SPLT_INSTRUCTIONS,
            FARMING_INSTRUCTIONS,
            STAKE_INSTRUCTIONS,
            IDO_INSTRUCTIONS,
            PURCHASING_INSTRUCTIONS,
        ):
            if instructions.program not in cls._sets:
                cls.register(instructions)


def encode_instruction(program: str, name: str, fields: Optional[Mapping[str, Any]] = None) -> bytes:
    """
    Encode instruction data for a registered program

    Args:
        program: Program name ("swap", "splt", "farming", ...)
        name: Instruction name, case and underscores ignored
        fields: Instruction fields

    Returns:
        Tag byte followed by the encoded fields
    """
    return ProgramRegistry.encode_instruction(program, name, fields)


def decode_instruction(program: str, data: bytes) -> DecodedInstruction:
    """Decode instruction data for a registered program"""
    return ProgramRegistry.decode_instruction(program, data)
