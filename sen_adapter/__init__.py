"""
Sen Adapter - Client core for the Sen Solana programs

Provides:
- Swap oracle (constant-product pricing, liquidity and slippage math)
- Binary codec for instructions and accounts
- Account schema registry
- Instruction builders for swap, SPL token, farming, stake, IDO and purchasing
"""

from .types import (
    Token,
    Pool,
    PoolState,
    FeeResult,
    SwapResult,
    DepositResult,
    WithdrawResult,
    SwapQuote,
    RouteQuote,
)
from .errors import (
    SenAdapterError,
    InvalidArgument,
    DivisionByZero,
    EmptyPool,
    LengthMismatch,
    UnknownInstruction,
    UnknownSchema,
    LayoutError,
    SlippageExceeded,
    PoolUnavailable,
    ConfigurationError,
    ErrorCode,
)
from .schema import (
    AccountKind,
    get_schema,
    list_schemas,
    decode_account,
    encode_account,
    match_schemas,
)
from .protocols import ProgramRegistry, encode_instruction, decode_instruction
from .protocols.swap import oracle

__all__ = [
    # Types
    "Token",
    "Pool",
    "PoolState",
    "FeeResult",
    "SwapResult",
    "DepositResult",
    "WithdrawResult",
    "SwapQuote",
    "RouteQuote",
    # Errors
    "SenAdapterError",
    "InvalidArgument",
    "DivisionByZero",
    "EmptyPool",
    "LengthMismatch",
    "UnknownInstruction",
    "UnknownSchema",
    "LayoutError",
    "SlippageExceeded",
    "PoolUnavailable",
    "ConfigurationError",
    "ErrorCode",
    # Schemas
    "AccountKind",
    "get_schema",
    "list_schemas",
    "decode_account",
    "encode_account",
    "match_schemas",
    # Programs
    "ProgramRegistry",
    "encode_instruction",
    "decode_instruction",
    "oracle",
]

__version__ = "0.1.0"
