"""
Logging configuration for spot-sync.

This module sets up the logging system with multiple outputs:
    - Console: Real-time progress with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - sync_failures.log: Failed write chunks and failed libraries

The log files are only created when a log directory is configured;
console output is always enabled.

Access tokens are never passed to the logger. Messages name libraries,
URLs and HTTP status codes only.

Usage:
    from spot_sync.core.logger import setup_logging, get_logger

    setup_logging(log_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Starting sync")
    log_sync_failure(logger, "liked_songs", "chunk 2/3", "remote_error", "HTTP 500")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log file name stems (a timestamp is appended per run)
LOG_FULL_FILENAME = "log_full"
LOG_ERRORS_FILENAME = "log_errors"
SYNC_FAILURES_FILENAME = "sync_failures"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking tqdm progress bars.

    tqdm progress bars write to stderr and use carriage returns to update in-place.
    Standard logging to stderr can interfere with this, causing visual glitches.
    This handler uses tqdm.write() which properly coordinates with active progress bars.
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class SyncFailureHandler(logging.Handler):
    """
    Handler that captures sync failures for the failure report file.

    This handler listens for log records that carry sync failure information
    and writes them to sync_failures.log in a simple, human-readable format:

        liked_songs | chunk 2/3 (50 items)
        remote_error: HTTP 500

        37i9dQZF1DXcBWIGoYBM5M | library
        auth_error: HTTP 401

    The handler looks for specific extra fields in log records:
        - 'sync_failed_library': The library identifier
        - 'sync_failed_unit': Which unit of work failed (chunk, library)
        - 'sync_failed_reason': The failure reason value
        - 'sync_failed_detail': Free-form detail (optional)

    Only records containing these fields are written to the report.

    Attributes:
        report_path: Path to the sync_failures.log file.
        report_file: Open file handle (opened by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        """
        Write failure info to the report if present in the log record.

        Args:
            record: The log record to check and potentially write.
        """
        if not hasattr(record, "sync_failed_library"):
            return

        if self.report_file is None:
            return

        try:
            library = getattr(record, "sync_failed_library", "unknown")
            unit = getattr(record, "sync_failed_unit", "library")
            reason = getattr(record, "sync_failed_reason", "unknown")
            detail = getattr(record, "sync_failed_detail", "")

            self.report_file.write(f"{library} | {unit}\n")
            self.report_file.write(f"{reason}: {detail}\n\n" if detail else f"{reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, level: str = "INFO") -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        log_dir: Directory where log files will be created.
                 If None, only console logging is configured.
        level: Console log level name (e.g. "INFO", "DEBUG").

    Behavior:
        1. Configure root logger level to DEBUG
        2. Create console handler (TqdmLoggingHandler) at the given level
        3. If log_dir is given:
           - Create log_dir if it doesn't exist
           - log_full_{timestamp}.log at DEBUG
           - log_errors_{timestamp}.log filtered to ERROR+
           - sync_failures_{timestamp}.log via SyncFailureHandler
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    # aiohttp is chatty at DEBUG and may echo request headers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_handler = logging.FileHandler(
        log_dir / f"{LOG_FULL_FILENAME}_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(
        log_dir / f"{LOG_ERRORS_FILENAME}_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    failures_handler = SyncFailureHandler(log_dir / f"{SYNC_FAILURES_FILENAME}_{timestamp}.log")
    failures_handler.open()
    root_logger.addHandler(failures_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    This is a convenience wrapper around logging.getLogger() that ensures
    consistent logger naming throughout the application.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'spot_sync.sync.engine'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().
    """
    return logging.getLogger(name)


def format_transfer_message(library: str, transferred: int, fetched: int) -> str:
    """
    Format a per-library transfer message with colors.

    Args:
        library: Library name or identifier.
        transferred: Number of items written to the destination.
        fetched: Number of items read from the source.

    Returns:
        Colored message string, green when everything was written.
    """
    color = Colors.GREEN if transferred == fetched else Colors.YELLOW
    return f"{library}: {color}{transferred}/{fetched}{Colors.RESET} items transferred"


def log_sync_failure(
    logger: logging.Logger,
    library_id: str,
    unit: str,
    reason: str,
    detail: str = ""
) -> None:
    """
    Log a failed unit of sync work.

    This is a convenience function that logs a failure with the correct
    extra fields for the SyncFailureHandler to pick up.

    Args:
        logger: The logger to use for the message.
        library_id: The library the failure belongs to.
        unit: The unit of work, e.g. "chunk 2/3 (50 items)" or "library".
        reason: Failure reason value (see FailureReason).
        detail: Description of why the unit failed.

    Example:
        log_sync_failure(
            logger,
            library_id="liked_songs",
            unit="chunk 2/3 (50 items)",
            reason="remote_error",
            detail="HTTP 500"
        )
    """
    logger.error(
        f"Sync failed: {library_id} [{unit}] {reason}" + (f" - {detail}" if detail else ""),
        extra={
            "sync_failed_library": library_id,
            "sync_failed_unit": unit,
            "sync_failed_reason": reason,
            "sync_failed_detail": detail,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    This function should be called at application exit to ensure all
    log handlers are properly flushed and closed.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
