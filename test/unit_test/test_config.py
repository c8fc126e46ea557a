"""
Test Configuration

Tests for environment-driven config and logging setup.
"""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_program_defaults():
    """Test default program addresses"""
    from sen_adapter.config import ProgramConfig
    from sen_adapter.protocols.swap import DEFAULT_SWAP_PROGRAM_ID

    print("Testing ProgramConfig defaults...")

    with patch.dict(os.environ, {}, clear=True):
        programs = ProgramConfig()

    assert programs.swap == DEFAULT_SWAP_PROGRAM_ID
    assert programs.splt == "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
    assert programs.stake == ""
    assert programs.purchasing == ""

    print("  ProgramConfig defaults: PASSED")


def test_program_override():
    """Test overriding program addresses from the environment"""
    from sen_adapter.config import ProgramConfig

    print("Testing ProgramConfig override...")

    address = "SENBBKVCM7homnf5RX9zqpf1GFe935hnbU4uVzY1Y6M"
    with patch.dict(os.environ, {"SEN_STAKE_PROGRAM_ADDRESS": address}):
        programs = ProgramConfig()

    assert programs.stake == address

    print("  ProgramConfig override: PASSED")


def test_trading_config():
    """Test slippage settings and invalid ints"""
    from sen_adapter.config import TradingConfig

    print("Testing TradingConfig...")

    with patch.dict(os.environ, {}, clear=True):
        assert TradingConfig().default_slippage_bps == 30
        assert TradingConfig().max_slippage_bps == 10_000

    with patch.dict(os.environ, {"SEN_DEFAULT_SLIPPAGE_BPS": "not-a-number"}):
        assert TradingConfig().default_slippage_bps == 30

    with patch.dict(os.environ, {"SEN_DEFAULT_SLIPPAGE_BPS": "75"}):
        assert TradingConfig().default_slippage_bps == 75

    print("  TradingConfig: PASSED")


def test_config_validation():
    """Test rejected settings"""
    from sen_adapter.config import ProgramConfig, TradingConfig
    from sen_adapter.errors import ConfigurationError, ErrorCode

    print("Testing config validation...")

    bad_settings = [
        (ProgramConfig, {"SEN_SWAP_PROGRAM_ADDRESS": "not-a-key"}),
        (TradingConfig, {"SEN_MAX_SLIPPAGE_BPS": "20000"}),
        (TradingConfig, {"SEN_DEFAULT_SLIPPAGE_BPS": "600", "SEN_MAX_SLIPPAGE_BPS": "500"}),
    ]
    for cls, env in bad_settings:
        with patch.dict(os.environ, env):
            try:
                cls()
                assert False, f"{cls.__name__} should reject {env}"
            except ConfigurationError as e:
                assert e.code == ErrorCode.CONFIG_INVALID

    print("  config validation: PASSED")


def test_reload_config():
    """Test reloading the global config"""
    import sen_adapter.config as config_module

    print("Testing reload_config...")

    original = config_module.config
    try:
        with patch.dict(os.environ, {"SEN_MAX_SLIPPAGE_BPS": "500"}):
            reloaded = config_module.reload_config()
        assert reloaded.trading.max_slippage_bps == 500
        assert config_module.get_config() is reloaded
    finally:
        config_module.config = original

    print("  reload_config: PASSED")


def test_setup_logging():
    """Test logging handlers and file output"""
    import tempfile
    from sen_adapter.config import LoggingConfig, setup_logging

    print("Testing setup_logging...")

    with tempfile.TemporaryDirectory() as directory:
        log_file = Path(directory) / "nested" / "sen.log"
        log_config = LoggingConfig(
            log_file=str(log_file),
            log_level="DEBUG",
            console_output=False,
        )
        logger = setup_logging(log_config, logger_name="sen_adapter_test")
        try:
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 1
            logger.debug("written")
            logger.handlers[0].flush()
            assert "written" in log_file.read_text(encoding="utf-8")

            # Calling again replaces handlers instead of stacking them
            logger = setup_logging(log_config, logger_name="sen_adapter_test")
            assert len(logger.handlers) == 1
        finally:
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)

    assert LoggingConfig(log_level="bogus").level == logging.INFO

    print("  setup_logging: PASSED")


def main():
    """Run all config tests"""
    print("=" * 60)
    print("Sen Adapter Config Tests")
    print("=" * 60)

    tests = [
        test_program_defaults,
        test_program_override,
        test_trading_config,
        test_config_validation,
        test_reload_config,
        test_setup_logging,
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
