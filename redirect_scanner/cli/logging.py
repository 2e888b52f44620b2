"""
Logging utilities for the redirect_scanner CLI.

Provides logging setup and header printing with tqdm compatibility.
"""

import logging
import sys
import time
from pathlib import Path

from redirect_scanner.utils.tqdm_logging import TqdmLoggingHandler

# External loggers that clutter the console during a scan
NOISY_LOGGERS = ["urllib3", "requests", "playwright", "asyncio"]


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes after each record so logs survive a crash."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(
    script_name: str,
    log_to_file: bool = False,
    log_dir: Path = Path("logs"),
    verbose: bool = False,
    tqdm_compatible: bool = True,
) -> logging.Logger:
    """
    Set up logging for a script.

    Console output goes through TqdmLoggingHandler so status lines do not
    break the progress bar. With log_to_file, DEBUG and above (including
    absorbed probe failures) also go to logs/<script>_<timestamp>.log.

    Args:
        script_name: Name of the script (logger name and log file prefix)
        log_to_file: Also write a DEBUG log file
        log_dir: Directory for log files
        verbose: Show DEBUG messages on the console
        tqdm_compatible: Use TqdmLoggingHandler for the console

    Returns:
        Configured logger instance
    """
    console_level = logging.DEBUG if verbose else logging.INFO

    if tqdm_compatible:
        console_handler: logging.Handler = TqdmLoggingHandler(level=console_level)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    handlers = [console_handler]

    log_file = None
    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{script_name}_{timestamp}.log"
        file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(threadName)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    # Script logger and package logger share the same handlers
    for name in (script_name, "redirect_scanner"):
        named_logger = logging.getLogger(name)
        named_logger.setLevel(logging.DEBUG)
        named_logger.handlers = list(handlers)
        named_logger.propagate = False  # Don't duplicate through the root logger

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.ERROR)

    logger = logging.getLogger(script_name)
    if log_file:
        logger.info(f"Log file: {log_file}")
    return logger


def print_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard section header.

    Args:
        title: Header text
        logger: Optional logger instance (default: this module's logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)
