"""
Adapter settings

Every setting comes from a SEN_* environment variable, optionally seeded from
a .env file next to the package. Program addresses default to the devnet
deployments.
"""

import os
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from dotenv import load_dotenv

from .errors import ConfigurationError

T = TypeVar("T")

ENV_PREFIX = "SEN_"
ENV_FILE = Path(__file__).parent.parent / ".env"


def _load_dotenv() -> None:
    # Variables already exported in the process win over the file
    if ENV_FILE.exists():
        load_dotenv(ENV_FILE, override=False)


_load_dotenv()


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env(name: str, default: T, cast: Callable[[str], T] = str) -> T:
    """
    Read SEN_<name> from the environment.

    An unparsable value falls back to default with a warning.
    """
    key = ENV_PREFIX + name
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logging.getLogger(__name__).warning(f"Ignoring {key}={raw!r}, falling back to {default!r}")
        return default


def _setting(name: str, default, cast=str):
    return field(default_factory=lambda: _env(name, default, cast))


@dataclass
class ProgramConfig:
    """
    Program ids, one per Sen program plus the two SPL programs

    Stake, IDO and purchasing have no public deployment; they stay empty until
    SEN_STAKE_PROGRAM_ADDRESS and friends are set, and builders for them raise
    ConfigurationError until then.
    """
    splt: str = _setting("SPLT_PROGRAM_ADDRESS", "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
    splata: str = _setting("SPLATA_PROGRAM_ADDRESS", "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
    swap: str = _setting("SWAP_PROGRAM_ADDRESS", "D8UuF1jPr5gtxHvnVz3HpxP2UkgtxLs9vwz7ecaTkrGy")
    farming: str = _setting("FARMING_PROGRAM_ADDRESS", "DX4CXjREqTUDPXFKBNbRFHTf4C42ezGWXCnyusvMWhu1")
    stake: str = _setting("STAKE_PROGRAM_ADDRESS", "")
    ido: str = _setting("IDO_PROGRAM_ADDRESS", "")
    purchasing: str = _setting("PURCHASING_PROGRAM_ADDRESS", "")

    def __post_init__(self):
        from .utils.address import is_address

        for item in fields(self):
            value = getattr(self, item.name)
            if value and not is_address(value):
                raise ConfigurationError.invalid(
                    f"{ENV_PREFIX}{item.name.upper()}_PROGRAM_ADDRESS",
                    f"{value!r} is not a base58 account key",
                )


@dataclass
class TradingConfig:
    """Slippage tolerance used by the quote helpers, in basis points"""
    default_slippage_bps: int = _setting("DEFAULT_SLIPPAGE_BPS", 30, int)
    max_slippage_bps: int = _setting("MAX_SLIPPAGE_BPS", 10_000, int)

    def __post_init__(self):
        if not 0 <= self.max_slippage_bps <= 10_000:
            raise ConfigurationError.invalid(
                f"{ENV_PREFIX}MAX_SLIPPAGE_BPS", "must be within 0..10000 bps"
            )
        if not 0 <= self.default_slippage_bps <= self.max_slippage_bps:
            raise ConfigurationError.invalid(
                f"{ENV_PREFIX}DEFAULT_SLIPPAGE_BPS",
                f"must be within 0..{self.max_slippage_bps} bps",
            )


@dataclass
class LoggingConfig:
    """
    Log output settings

    Environment variables (all SEN_ prefixed):
        LOG_FILE: Log file path, empty for no file output
        LOG_LEVEL: Level name (default INFO)
        LOG_FORMAT: logging.Formatter format string
        LOG_CONSOLE: Also log to stderr (default true)
        LOG_MAX_BYTES: Rotate the file past this size (default 5MB)
        LOG_BACKUP_COUNT: Rotated files kept (default 3)
    """
    log_file: str = _setting("LOG_FILE", "")
    log_level: str = _setting("LOG_LEVEL", "INFO")
    log_format: str = _setting("LOG_FORMAT", "%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    console_output: bool = _setting("LOG_CONSOLE", True, _parse_flag)
    max_bytes: int = _setting("LOG_MAX_BYTES", 5 * 1024 * 1024, int)
    backup_count: int = _setting("LOG_BACKUP_COUNT", 3, int)

    @property
    def level(self) -> int:
        """Numeric level; unknown names map to INFO"""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


@dataclass
class Config:
    """
    Settings container

    Usage:
        from sen_adapter.config import config

        config.programs.swap
        config.trading.default_slippage_bps
    """
    programs: ProgramConfig = field(default_factory=ProgramConfig)
    trading: TradingConfig = field(default_factory=TradingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


config = Config()


def get_config() -> Config:
    return config


def reload_config() -> Config:
    """
    Re-read .env and the environment into a fresh global config.

    Modules look config up at call time, so the new values apply immediately.
    """
    global config
    _load_dotenv()
    config = Config()
    return config


def _build_handlers(log_config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        Path(log_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        ))
    if log_config.console_output:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(log_config.log_format)
    for handler in handlers:
        handler.setLevel(log_config.level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "sen_adapter",
) -> logging.Logger:
    """
    Attach file and console handlers to the adapter's root logger.

    Calling it again replaces the handlers it installed before.

    Args:
        log_config: Settings to apply (global config if None)
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    log_config = log_config or config.logging
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_config):
        logger.addHandler(handler)

    if log_config.log_file:
        logger.info(f"Logging to {log_config.log_file} at {logging.getLevelName(log_config.level)}")
    return logger


def enable_file_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """
    Log to a file, by default sen_adapter/log/sen_adapter_<utc timestamp>.log

    Args:
        log_file: Target path
        level: Level name
        console: Keep console output as well
    """
    if log_file is None:
        from datetime import datetime, timezone

        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        log_file = config.logging.log_file or str(Path(__file__).parent / "log" / f"sen_adapter_{stamp}.log")
    return setup_logging(LoggingConfig(log_file=log_file, log_level=level, console_output=console))
