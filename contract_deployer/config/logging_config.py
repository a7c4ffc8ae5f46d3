"""
Logging Configuration for the contract deployer

Provides structured logging with:
- Timestamps
- File rotation (1 file per day)
- Separate error log
- Console and file handlers
"""

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional


# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_dir() -> Path:
    """Directory for log files (LOG_DIR env var, default ./logs)."""
    return Path(os.getenv("LOG_DIR", "logs"))


def get_log_level(default: int = logging.INFO) -> int:
    """Resolve LOG_LEVEL (name or number) to a logging level."""
    raw = os.getenv("LOG_LEVEL")
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Setup a logger with console and file handlers.

    Args:
        name: Logger name (typically the package name)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to console
        detailed: Whether to use detailed format (includes file/line)
        log_to_file: Whether to attach the rotating file handlers

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("contract_deployer", level=logging.DEBUG)
        >>> logger.info("Deploying ETHMessenger to Base...")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not log_to_file:
        return logger

    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    # File handler with daily rotation
    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        log_dir / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_handler = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def get_deployer_logger(debug: bool = False, log_to_file: bool = True) -> logging.Logger:
    """Logger for the whole ``contract_deployer`` package."""
    level = logging.DEBUG if debug else get_log_level()
    return setup_logger(
        "contract_deployer",
        level=level,
        detailed=debug,
        log_to_file=log_to_file,
    )
