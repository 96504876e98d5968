"""Logging configuration and utilities for py_puttcalc library.

The module exposes a pre-configured logger instance and utility functions for managing
file-based logging. By default, only console logging is enabled with INFO level,
but file logging can be enabled as needed for debugging solver behaviour.

Global Variables:
    - logger: Pre-configured logger instance for the library.
    - file_handler: Global file handler reference (None when file logging disabled).

Functions:
    enable_file_logging: Enable logging to a file with DEBUG level.
    disable_file_logging: Disable file logging and clean up resources.

Examples:
    ```python
    from py_puttcalc.logger import enable_file_logging, disable_file_logging, logger

    enable_file_logging("putt_debug.log")  # DEBUG and above
    logger.debug("Euler ran 312 iterations")
    disable_file_logging()
    ```
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
console_handler.setLevel(logging.DEBUG)  # Lowest level for console

logger: logging.Logger = logging.getLogger('py_puttcalc')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

# File handler (optional, added dynamically)
file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "putt_debug.log", level: int = logging.DEBUG) -> logging.FileHandler:
    """Enable logging to a file.

    Args:
        filename: Name of the log file to create. Defaults to "putt_debug.log".
                 The file is opened in append mode.
        level: Lowest level written to the file. Defaults to DEBUG, which includes
               the per-run iteration counts of the engines.

    Returns:
        The installed handler.

    Note:
        If file logging is already enabled, the existing file handler is
        replaced with a new one using the specified filename.
    """
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(level)
    file_formatter = logging.Formatter("%(asctime)s:%(levelname)s:%(name)s:%(message)s")
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)
    return file_handler


def disable_file_logging() -> None:
    """Disable file logging and close the file handle.

    Safe to call when file logging is not enabled.
    """
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
