"""
================================================================================
Logging Configuration
================================================================================

Centralized Loguru setup for the UI framework.

    - Colored console output on stderr
    - Daily log file: logs/test_YYYY-MM-DD.log
    - Level from LOG_LEVEL env var or `logging.level` in config

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config_loader import get_config


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "{name}:{function}:{line} | {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(level: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """
    Initialize the global Loguru logger.

    Safe to call more than once; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        log_dir: Directory for the daily log file. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = get_config()
    log_level = (level or config.get("logging.level", "DEBUG")).upper()
    directory = Path(log_dir or config.get("logging.dir", "logs"))

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    directory.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(directory / "test_{time:YYYY-MM-DD}.log"),
        level=log_level,
        format=FILE_FORMAT,
        rotation="00:00",
        retention=config.get("logging.retention", "7 days"),
        enqueue=True,
    )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level} (env={config.environment})")


def reset_logger() -> None:
    """Drop configured sinks so init_logger() can run again."""
    global _logger_initialized
    logger.remove()
    _logger_initialized = False


__all__ = [
    "init_logger",
    "reset_logger",
]
