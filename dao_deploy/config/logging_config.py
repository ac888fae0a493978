"""
Logging Configuration for the DAO deployment scripts

Provides structured logging with:
- Timestamps
- Log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
- File rotation (1 file per day)
- Separate error log
- Console and file handlers

plus ``ScriptLog``, the splitter/success vocabulary the deployment scripts
print their progress with.
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
SCRIPT_FORMAT = "%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SPLITTER_WIDTH = 40
WIDE_SPLITTER_WIDTH = 80


def get_log_dir() -> Path:
    """Log directory, ``DAO_DEPLOY_LOG_DIR`` or ``./logs``."""
    log_dir = Path(os.getenv("DAO_DEPLOY_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
    file_logging: bool = True,
) -> logging.Logger:
    """
    Setup a logger with console and file handlers.

    Args:
        name: Logger name (typically script name)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to console
        detailed: Whether to use detailed format (includes file/line)
        file_logging: Whether to attach the rotating file handlers

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("issue_tokens", level=logging.DEBUG)
        >>> logger.info("Network ID: 1")
        >>> logger.error("Transaction reverted", exc_info=True)
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    # Console output is the script transcript, keep it bare unless debugging
    log_format = DETAILED_FORMAT if detailed else SCRIPT_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    # Console handler
    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not file_logging:
        return logger

    log_dir = get_log_dir()

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
    file_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT))
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


class ScriptLog:
    """Deployment transcript helpers on top of a ``logging.Logger``."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def __call__(self, *parts) -> None:
        self.logger.info(" ".join(str(p) for p in parts))

    def splitter(self, *parts) -> None:
        self.logger.info("=" * SPLITTER_WIDTH)
        if parts:
            self(*parts)

    def wide_splitter(self, *parts) -> None:
        self.logger.info("=" * WIDE_SPLITTER_WIDTH)
        if parts:
            self(*parts)

    def success(self, *parts) -> None:
        self.logger.info("✅ " + " ".join(str(p) for p in parts))

    def warning(self, *parts) -> None:
        self.logger.warning("⚠️  " + " ".join(str(p) for p in parts))

    def error(self, *parts) -> None:
        self.logger.error("❌ " + " ".join(str(p) for p in parts))

    def debug(self, *parts) -> None:
        self.logger.debug(" ".join(str(p) for p in parts))


def get_script_log(
    script_name: str,
    debug: bool = False,
    file_logging: bool = True,
) -> ScriptLog:
    """Get the transcript logger for a deployment script."""
    level = logging.DEBUG if debug else logging.INFO
    logger = setup_logger(
        f"script_{script_name}",
        level=level,
        detailed=debug,
        file_logging=file_logging,
    )
    return ScriptLog(logger)
