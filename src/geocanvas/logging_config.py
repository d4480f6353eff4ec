"""
Logging Configuration
Sets up the global logger for the application.

Scene edits, tool changes and drags log at DEBUG, so ``--debug`` is the
switch for following an interaction step by step.
"""
import logging
import sys
from typing import Optional

LOGGER_NAMESPACE = "geocanvas"


def resolve_level(debug: bool = False) -> int:
    """Level for the command line's ``--debug`` flag."""
    return logging.DEBUG if debug else logging.INFO


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for the 'geocanvas' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    # Get the logger for our package
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs when main() runs twice
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

    logger.info("Logging initialized (level %s).", logging.getLevelName(level))
