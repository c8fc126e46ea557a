"""
Test Errors Module

Tests for sen_adapter.errors package.
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_error_code():
    """Test ErrorCode enum"""
    from sen_adapter.errors import ErrorCode

    print("Testing ErrorCode...")

    assert ErrorCode.INVALID_ARGUMENT.value == "1001"
    assert ErrorCode.LENGTH_MISMATCH.value == "2001"
    assert ErrorCode.SLIPPAGE_EXCEEDED.value == "3001"
    assert ErrorCode.POOL_NOT_FOUND.value == "4001"
    assert ErrorCode.CONFIG_MISSING.value == "9002"

    print("  ErrorCode: PASSED")


def test_sen_adapter_error():
    """Test SenAdapterError base class"""
    from sen_adapter.errors import SenAdapterError, ErrorCode

    print("Testing SenAdapterError...")

    error = SenAdapterError(
        message="Test error",
        code=ErrorCode.INVALID_ARGUMENT,
        recoverable=True,
    )

    # __str__ returns "[code] message" format
    assert "[1001] Test error" == str(error)
    assert error.code == ErrorCode.INVALID_ARGUMENT
    assert error.should_retry == True
    assert error.details == {}

    print("  SenAdapterError: PASSED")


def test_invalid_argument():
    """Test InvalidArgument constructors"""
    from sen_adapter.errors import InvalidArgument, ErrorCode

    print("Testing InvalidArgument...")

    error1 = InvalidArgument.negative("bid_amount", -1)
    assert error1.code == ErrorCode.INVALID_ARGUMENT
    assert error1.argument == "bid_amount"
    assert error1.value == -1
    assert error1.recoverable == False

    error2 = InvalidArgument.out_of_range("amount", 1 << 64, "u64")
    assert "u64" in str(error2)

    error3 = InvalidArgument.missing_field("swap", "limit")
    assert error3.argument == "limit"
    assert "swap" in error3.message

    print("  InvalidArgument: PASSED")


def test_codec_errors():
    """Test LengthMismatch, UnknownInstruction, UnknownSchema and LayoutError"""
    from sen_adapter.errors import (
        LengthMismatch,
        UnknownInstruction,
        UnknownSchema,
        LayoutError,
        ErrorCode,
    )

    print("Testing codec errors...")

    error1 = LengthMismatch.for_layout("pool", 257, 256)
    assert error1.expected == 257
    assert error1.actual == 256
    assert error1.layout == "pool"
    assert error1.code == ErrorCode.LENGTH_MISMATCH

    error2 = UnknownInstruction.unknown_tag("swap", 99)
    assert error2.program == "swap"
    assert "99" in str(error2)

    error3 = UnknownSchema("lpt", "account, pool")
    assert error3.code == ErrorCode.UNKNOWN_SCHEMA
    assert "lpt" in str(error3)

    error4 = LayoutError.duplicate("swap", "instruction tag", 3)
    assert error4.layout == "swap"

    print("  codec errors: PASSED")


def test_slippage_exceeded():
    """Test SlippageExceeded exception"""
    from sen_adapter.errors import SlippageExceeded

    print("Testing SlippageExceeded...")

    error = SlippageExceeded.below_limit(expected=10_000, actual=9_900, slippage_bps=50)

    assert error.recoverable == True
    assert error.expected == 10_000
    assert error.actual == 9_900
    assert "100 bps" in error.message

    print("  SlippageExceeded: PASSED")


def test_pool_unavailable():
    """Test PoolUnavailable exception"""
    from sen_adapter.errors import PoolUnavailable, ErrorCode

    print("Testing PoolUnavailable...")

    error1 = PoolUnavailable.not_found("pool123")
    assert error1.recoverable == False
    assert error1.pool_address == "pool123"
    assert error1.code == ErrorCode.POOL_NOT_FOUND

    error2 = PoolUnavailable.invalid_state("pool456", "state is FROZEN")
    assert error2.code == ErrorCode.POOL_INVALID_STATE

    print("  PoolUnavailable: PASSED")


def test_error_inheritance():
    """Test error class inheritance"""
    from sen_adapter.errors import (
        SenAdapterError,
        InvalidArgument,
        DivisionByZero,
        EmptyPool,
        LengthMismatch,
        SlippageExceeded,
        PoolUnavailable,
        ConfigurationError,
    )

    print("Testing Error Inheritance...")

    for cls in (InvalidArgument, DivisionByZero, LengthMismatch, SlippageExceeded,
                PoolUnavailable, ConfigurationError):
        assert issubclass(cls, SenAdapterError)

    # Empty pools surface as division by zero
    assert issubclass(EmptyPool, DivisionByZero)
    try:
        raise EmptyPool.reserves(0, 10)
    except DivisionByZero:
        pass  # Expected

    print("  Error Inheritance: PASSED")


def main():
    """Run all error tests"""
    print("=" * 60)
    print("Sen Adapter Errors Tests")
    print("=" * 60)

    tests = [
        test_error_code,
        test_sen_adapter_error,
        test_invalid_argument,
        test_codec_errors,
        test_slippage_exceeded,
        test_pool_unavailable,
        test_error_inheritance,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
