"""
Error definitions for the Sen adapter
"""

from .exceptions import (
    ErrorCode,
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
)

__all__ = [
    "ErrorCode",
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
]
