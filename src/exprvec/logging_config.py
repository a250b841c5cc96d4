"""
Logging Configuration
Sets up the package logger for the vector library.

exprvec itself never calls `setup_logging`: importing the package attaches no
handlers, and the module loggers (`exprvec.model.vector`, ...) only propagate
until the embedding application opts in:

    from exprvec.logging_config import setup_logging
    setup_logging(logging.DEBUG)

Without an explicit level the EXPRVEC_LOG_LEVEL environment variable decides.
"""
import logging
import sys
from typing import Optional

from exprvec.config import default_log_level


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'exprvec' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO). When omitted,
               the level is taken from the EXPRVEC_LOG_LEVEL environment variable.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = default_log_level()

    # Get the logger for our package
    logger = logging.getLogger("exprvec")
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs when an
    # embedding application calls this more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
