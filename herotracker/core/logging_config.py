"""
Logging configuration for Hero Tracker.

Sets up the root logger with colour-coded console output. Library modules only
ever call logging.getLogger(__name__); handlers are attached here, once, by the
command line entry point (or by an embedding application).
"""

import logging
import sys
from typing import Optional, TextIO
from colorama import Fore, Back, Style, init

# Initialize colorama for cross-platform color support
init(autoreset=True)

DEFAULT_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colours the level name.

    Colors:
    - DEBUG: Cyan
    - INFO: Green
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Red on white background
    """

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def format(self, record):
        """Format log record with a coloured level name."""
        color = self.COLORS.get(record.levelname, '')

        # Other handlers share the record, so put the plain name back afterwards
        original_levelname = record.levelname
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def setup_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    use_colors: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure logging for Hero Tracker.

    Console output goes to stderr by default so that command output written
    to stdout (including --json documents) stays machine readable.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        format_string: Optional custom format string
        use_colors: Whether to use colored console output
        stream: Console stream (defaults to sys.stderr)

    Returns:
        Configured root logger

    Example:
        logger = setup_logging(level='DEBUG', log_file='herotracker.log')
        logger.debug("Resolved level 26 from 838000 XP")
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(numeric_level)

    if use_colors:
        console_handler.setFormatter(ColoredFormatter(format_string))
    else:
        console_handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(console_handler)

    # File handler (optional) - no colors in file output
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


__all__ = ['setup_logging', 'get_logger', 'ColoredFormatter']
