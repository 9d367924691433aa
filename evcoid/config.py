"""
Configuration for evcoid

Reads environment variables (optionally from a .env file):
- EVCOID_LOG_LEVEL: level for the "evcoid" logger (default WARNING)
"""
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL_ENV = "EVCOID_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_log_level() -> int:
    """
    Level configured in EVCOID_LOG_LEVEL.

    Raises:
        ValueError: If the variable holds an unknown level name
    """
    name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(
            f"{LOG_LEVEL_ENV} invalid: {name!r}. "
            f"Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return level


def setup_logging(level: Optional[int] = None) -> logging.Logger:
    """
    Attach a stdout handler to the "evcoid" logger.

    Never called by the library itself; applications opt in.

    Args:
        level: Logging level. If None, uses get_log_level()
    """
    if level is None:
        level = get_log_level()

    logger = logging.getLogger("evcoid")
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    return logger
