"""
Logging configuration and management for SkyVendas.

Provides centralized logging configuration with:
- Log levels driven by LOG_LEVEL / DEBUG
- Console and rotating file handlers
- Log retention cleanup
- Timing of page fetches
"""

from datetime import datetime
import logging
import logging.handlers
import os
from pathlib import Path
import sys
import time
from typing import Any

# -------------------- Configuration --------------------


# Log directory
LOG_DIR = Path.home() / ".cache" / "skyvendas" / "logs"

# Log retention
LOG_RETENTION_DAYS = 3

# Log format strings
CONSOLE_FORMAT = "%(name)s %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

# Date format for logs
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# -------------------- Global State --------------------


_loggers_configured = set()


# -------------------- Utility Functions --------------------


def get_log_level() -> int:
    """
    Get the current log level from environment configuration.

    Checks LOG_LEVEL environment variable first, then DEBUG flag.

    Returns:
        Logging level constant (logging.DEBUG, logging.INFO, etc.)
    """
    level_str = os.getenv("LOG_LEVEL", "").upper()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    if level_str in level_map:
        return level_map[level_str]

    # Fall back to DEBUG env var
    if os.getenv("DEBUG", "").lower() in ("true", "1", "yes"):
        return logging.DEBUG

    return logging.INFO


def get_log_file_path() -> Path:
    """
    Get the path to the current log file.

    Creates log directory if it doesn't exist.
    """
    log_dir = LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    today = datetime.now().strftime("%Y-%m-%d")
    return log_dir / f"skyvendas-{today}.log"


def cleanup_old_logs() -> None:
    """Remove log files older than LOG_RETENTION_DAYS."""
    log_dir = LOG_DIR

    if not log_dir.exists():
        return

    cutoff = time.time() - (LOG_RETENTION_DAYS * 24 * 60 * 60)

    try:
        for log_file in log_dir.glob("skyvendas-*.log"):
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                logging.getLogger(__name__).info(f"Removed old log file: {log_file}")
    except OSError as e:
        logging.getLogger(__name__).warning(f"Failed to cleanup old logs: {e}")


# -------------------- Setup Functions --------------------


def setup_logging(
    name: str,
    level: int | None = None,
    console: bool = True,
    file: bool = True,
) -> logging.Logger:
    """
    Setup logging for a module with consistent formatting.

    Args:
        name: Logger name (usually __name__)
        level: Log level (defaults to get_log_level())
        console: Add console handler
        file: Add file handler

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(__name__)
        >>> logger.info("Loading first page")
    """
    # Avoid configuring the same logger twice
    if name in _loggers_configured:
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(level or get_log_level())
    logger.handlers.clear()
    logger.propagate = False

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logger.level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    if file:
        file_handler = logging.handlers.RotatingFileHandler(
            get_log_file_path(),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logger.level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    _loggers_configured.add(name)

    return logger


# -------------------- Performance Monitoring --------------------


class PerformanceMonitor:
    """
    Context manager for monitoring operation performance.

    Example:
        >>> with PerformanceMonitor(logger, "Fetch page", page=2):
        ...     page = await fetch_page(2)
    """

    def __init__(
        self,
        logger: logging.Logger,
        operation_name: str,
        log_level: int = logging.DEBUG,
        **metadata: Any,
    ) -> None:
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = log_level
        self.metadata = metadata
        self.start_time: float | None = None

    def __enter__(self) -> "PerformanceMonitor":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.start_time is None:
            return

        elapsed = time.perf_counter() - self.start_time
        outcome = "failed" if exc_type is not None else "completed"
        msg = f"{self.operation_name} {outcome} in {elapsed:.2f}s"

        if self.metadata:
            metadata_str = ", ".join(f"{k}={v}" for k, v in self.metadata.items())
            msg = f"{msg} ({metadata_str})"

        self.logger.log(self.log_level, msg)


# -------------------- Initialization --------------------


def initialize_logging(file: bool = True) -> None:
    """
    Initialize logging for the application.

    Sets up the root logger and performs initial cleanup.
    Should be called once at application startup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(get_log_level())
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(get_log_level())
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if file:
        file_handler = logging.handlers.RotatingFileHandler(
            get_log_file_path(),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)
        cleanup_old_logs()

    logging.getLogger(__name__).debug(
        f"Logging initialized. Level: {logging.getLevelName(get_log_level())}"
    )
