"""
Exception definitions for the Sen adapter

Every error carries an ErrorCode whose leading digit names its family.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    String error codes grouped by family

    1xxx - Bad input and arithmetic
    2xxx - Binary codec
    3xxx - Slippage (a fresh quote may succeed)
    4xxx - Pool lookup and state
    9xxx - Settings
    """
    # Bad input and arithmetic
    INVALID_ARGUMENT = "1001"
    DIVISION_BY_ZERO = "1002"
    EMPTY_POOL = "1003"

    # Binary codec
    LENGTH_MISMATCH = "2001"
    UNKNOWN_INSTRUCTION = "2002"
    UNKNOWN_SCHEMA = "2003"
    LAYOUT_INVALID = "2004"

    # Slippage
    SLIPPAGE_EXCEEDED = "3001"

    # Pool lookup and state
    POOL_NOT_FOUND = "4001"
    POOL_UNAVAILABLE = "4002"
    POOL_INVALID_STATE = "4003"

    # Settings
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class SenAdapterError(Exception):
    """
    Root of the adapter's exceptions

    Attributes:
        message: Text shown after the code in str(error)
        code: ErrorCode of the failure
        recoverable: True when retrying with fresh chain state can succeed
        original_error: Exception this one wraps, if any
        details: Structured context for logs
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class InvalidArgument(SenAdapterError):
    """
    Caller passed a value outside the accepted domain

    Raised when:
    - An amount is negative or not an integer
    - fee_ratio + tax_ratio reaches PRECISION
    - A value does not fit its wire field
    - A field required by a layout is missing
    """

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        value=None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            ErrorCode.INVALID_ARGUMENT,
            recoverable=False,
            original_error=original_error,
            details={"argument": argument, "value": repr(value)} if argument else None,
        )
        self.argument = argument
        self.value = value

    @classmethod
    def negative(cls, argument: str, value) -> "InvalidArgument":
        return cls(f"{argument} must be a non-negative integer, got {value!r}", argument, value)

    @classmethod
    def out_of_range(cls, argument: str, value, kind: str) -> "InvalidArgument":
        return cls(f"{argument}={value!r} does not fit in {kind}", argument, value)

    @classmethod
    def missing_field(cls, layout: str, argument: str) -> "InvalidArgument":
        return cls(f"{layout} requires field '{argument}'", argument)

    @classmethod
    def bad_address(cls, value, error: Exception = None) -> "InvalidArgument":
        return cls(f"Invalid address: {value!r}", "address", value, original_error=error)


class DivisionByZero(SenAdapterError):
    """Arithmetic divisor is zero"""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.DIVISION_BY_ZERO):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def zero_denominator(cls, operation: str) -> "DivisionByZero":
        return cls(f"Division by zero in {operation}")


class EmptyPool(DivisionByZero):
    """
    Pool reserves are empty

    Subclass of DivisionByZero: every curve computation against an empty
    reserve would divide by zero.
    """

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.EMPTY_POOL)

    @classmethod
    def reserves(cls, reserve_a: int, reserve_b: int) -> "EmptyPool":
        return cls(f"Pool is not initialized: reserves ({reserve_a}, {reserve_b})")


class LengthMismatch(SenAdapterError):
    """Raw buffer length does not equal the layout span"""

    def __init__(self, message: str, layout: Optional[str] = None, expected: int = 0, actual: int = 0):
        super().__init__(
            message,
            ErrorCode.LENGTH_MISMATCH,
            recoverable=False,
            details={"layout": layout, "expected": expected, "actual": actual},
        )
        self.layout = layout
        self.expected = expected
        self.actual = actual

    @classmethod
    def for_layout(cls, layout: str, expected: int, actual: int) -> "LengthMismatch":
        return cls(
            f"{layout}: expected {expected} bytes, got {actual}",
            layout=layout,
            expected=expected,
            actual=actual,
        )


class UnknownInstruction(SenAdapterError):
    """Instruction tag or name is not part of the program's instruction set"""

    def __init__(self, message: str, program: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.UNKNOWN_INSTRUCTION,
            recoverable=False,
            details={"program": program},
        )
        self.program = program

    @classmethod
    def unknown_tag(cls, program: str, tag: int) -> "UnknownInstruction":
        return cls(f"{program}: unknown instruction tag {tag}", program)

    @classmethod
    def unknown_name(cls, program: str, name: str) -> "UnknownInstruction":
        return cls(f"{program}: unknown instruction '{name}'", program)

    @classmethod
    def unknown_program(cls, program: str, available: str) -> "UnknownInstruction":
        return cls(f"Unknown program: {program}. Available programs: {available}", program)


class UnknownSchema(SenAdapterError):
    """Account schema name is not registered"""

    def __init__(self, name: str, available: str = ""):
        super().__init__(
            f"Unknown account schema: {name}. Available schemas: {available or 'none'}",
            ErrorCode.UNKNOWN_SCHEMA,
            recoverable=False,
            details={"schema": name},
        )
        self.name = name


class LayoutError(SenAdapterError):
    """Layout definition is malformed (duplicate tag, duplicate name, bad field)"""

    def __init__(self, message: str, layout: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.LAYOUT_INVALID,
            recoverable=False,
            details={"layout": layout},
        )
        self.layout = layout

    @classmethod
    def duplicate(cls, layout: str, what: str, value) -> "LayoutError":
        return cls(f"{layout}: duplicate {what} {value!r}", layout)


class SlippageExceeded(SenAdapterError):
    """
    Swap output came in under the caller's minimum

    Recoverable: the pool moved since the quote, so requoting may succeed.
    """

    def __init__(
        self,
        message: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        slippage_bps: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.SLIPPAGE_EXCEEDED,
            recoverable=True,
            details={"expected": expected, "actual": actual, "slippage_bps": slippage_bps},
        )
        self.expected = expected
        self.actual = actual
        self.slippage_bps = slippage_bps

    @classmethod
    def below_limit(cls, expected: int, actual: int, slippage_bps: int) -> "SlippageExceeded":
        shortfall_bps = (expected - actual) * 10_000 // expected if expected else 0
        return cls(
            f"Swap output {actual} is {shortfall_bps} bps under the quoted {expected} "
            f"(tolerance {slippage_bps} bps)",
            expected=expected,
            actual=actual,
            slippage_bps=slippage_bps,
        )


class PoolUnavailable(SenAdapterError):
    """
    Pool cannot be used for the requested operation

    Covers a missing pool account, an account owned by another program and a
    frozen, uninitialized or empty pool.
    """

    def __init__(
        self,
        message: str,
        pool_address: Optional[str] = None,
        code: ErrorCode = ErrorCode.POOL_UNAVAILABLE,
    ):
        super().__init__(message, code, recoverable=False, details={"pool_address": pool_address})
        self.pool_address = pool_address

    @classmethod
    def not_found(cls, pool_address: str) -> "PoolUnavailable":
        return cls(f"No pool account at {pool_address}", pool_address, ErrorCode.POOL_NOT_FOUND)

    @classmethod
    def invalid_state(cls, pool_address: str, reason: str) -> "PoolUnavailable":
        return cls(f"Pool {pool_address} is unusable: {reason}", pool_address, ErrorCode.POOL_INVALID_STATE)


class ConfigurationError(SenAdapterError):
    """Configuration is missing or invalid"""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFIG_INVALID):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, key: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {key}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, key: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration for {key}: {reason}", ErrorCode.CONFIG_INVALID)
