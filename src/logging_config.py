"""
Logging Configuration for the contract economics engine

The library modules only create loggers (logging.getLogger(__name__)); they
never attach handlers. Applications embedding the engine call
setup_logging() once at startup.

Usage Example:
    from logging_config import setup_logging, setup_negotiation_logging

    setup_logging(level="INFO", log_dir="logs", enable_console=True)
    setup_negotiation_logging(level="DEBUG")  # per-offer utility/threshold traces

Log Files Created:
- logs/contract_economics.log: Main log (INFO+)
- logs/contract_economics_debug.log: Debug log (DEBUG+)

Each file rotates at 10MB with 5 backup files.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import List, Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAIN_LOG_FILE = "contract_economics.log"
DEBUG_LOG_FILE = "contract_economics_debug.log"

ENGINE_PACKAGES = (
    "cap_ledger",
    "player_valuation",
    "player_personality",
    "negotiation",
    "free_agency",
)


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    format_style: str = "simple"
) -> List[logging.Logger]:
    """
    Attach handlers to the engine package loggers.

    Handlers are attached to each package in ENGINE_PACKAGES (not the root
    logger) and replace any handlers a previous call installed, so calling
    this twice does not duplicate output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to the console
        enable_file: Whether to log to rotating files
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of rotated files to keep
        format_style: "detailed" or "simple"

    Returns:
        The configured package loggers
    """
    log_level = getattr(logging, level.upper())
    log_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

    handlers: List[logging.Handler] = []

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

        main_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, MAIN_LOG_FILE),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        main_handler.setLevel(logging.INFO)
        main_handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
        handlers.append(main_handler)

        debug_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, DEBUG_LOG_FILE),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        debug_handler.setLevel(logging.DEBUG)
        debug_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(debug_handler)

    loggers = []
    for package in ENGINE_PACKAGES:
        package_logger = logging.getLogger(package)
        package_logger.setLevel(log_level)
        for old in [h for h in package_logger.handlers if getattr(h, "_engine_handler", False)]:
            package_logger.removeHandler(old)
            old.close()
        for handler in handlers:
            handler._engine_handler = True
            package_logger.addHandler(handler)
        loggers.append(package_logger)

    logging.getLogger("negotiation").info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )

    return loggers


def teardown_logging() -> None:
    """Remove and close every handler installed by setup_logging()."""
    closed = set()
    for package in ENGINE_PACKAGES:
        package_logger = logging.getLogger(package)
        for handler in [h for h in package_logger.handlers if getattr(h, "_engine_handler", False)]:
            package_logger.removeHandler(handler)
            if id(handler) not in closed:
                handler.close()
                closed.add(id(handler))
        package_logger.setLevel(logging.NOTSET)


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: Optional[bool] = None
) -> logging.Logger:
    """
    Set the level of one module's logger.

    Example:
        >>> configure_module_logger("negotiation.engine", level="DEBUG")
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    if propagate is not None:
        logger.propagate = propagate

    return logger


class LogContext:
    """
    Context manager for temporary log level changes.

    Example:
        >>> with LogContext(logging.getLogger("free_agency"), "DEBUG"):
        ...     manager.process_week(1, bids, players)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = getattr(logging, level.upper())
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


def setup_negotiation_logging(level: str = "INFO") -> None:
    """Set the level for the negotiation engine and desk."""
    configure_module_logger("negotiation", level=level)
    configure_module_logger("negotiation.engine", level=level)
    configure_module_logger("negotiation.negotiation_desk", level=level)


def setup_market_logging(level: str = "INFO") -> None:
    """Set the level for weekly market clearing and open free agency."""
    configure_module_logger("free_agency", level=level)
    configure_module_logger("free_agency.fa_week_manager", level=level)
    configure_module_logger("free_agency.open_fa_manager", level=level)
