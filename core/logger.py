"""
===================================================
Centralized logging configuration for the SQL layer.
===================================================

Provides consistent logging setup for applications using the builders:
- Console output with colored level names
- Optional UTF-8 log file
- Defaults taken from core.config (LOG_LEVEL, LOG_FILE, LOG_DIR)

Library modules never configure logging themselves; they only call
logging.getLogger(__name__). Importing this module installs a default
console handler when the root logger has none.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='queries.log')
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendered SQL: SELECT * FROM users")
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import config

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
COLORED_FORMAT = '%(emoji)s %(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Formatter adding ANSI colors and emoji markers to console output.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
        EMOJI: Dict mapping log levels to emoji indicators
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    EMOJI = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        # Work on a copy so other handlers still see the plain level name
        record = copy.copy(record)
        levelname = record.levelname
        record.emoji = self.EMOJI.get(levelname, '')
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> None:
    """Configure the root logger with console and/or file handlers.

    Should be called once at application startup. Arguments left as None
    fall back to core.config.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'queries.log')
        log_dir: Optional log directory path
        console_output: If True, output to stdout
        use_colors: If True, use ColoredFormatter for the console

    Example:
        >>> setup_logging(log_level='DEBUG', log_file='queries.log', log_dir='logs')
    """
    level_name = (log_level or config.logging.level).upper()
    level = getattr(logging, level_name)
    log_file = log_file or config.logging.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if use_colors:
            console_formatter = ColoredFormatter(COLORED_FORMAT, datefmt=DATE_FORMAT)
        else:
            console_formatter = logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else config.logging.log_dir
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)


def get_module_logger(module_name: str) -> logging.Logger:
    """Convenience alias of get_logger() without a level override."""
    return logging.getLogger(module_name)


def _init_default_logging():
    """Install default console logging if nothing configured the root logger."""
    if not logging.getLogger().handlers:
        setup_logging(console_output=True, use_colors=True)


# Auto-initialize on import
_init_default_logging()
