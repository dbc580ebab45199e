"""
Logging Module.

Every module logs through `get_logger(__name__)`: one stdout handler per
logger, level taken from LOG_LEVEL (INFO when unset or unknown).
"""

import logging
import os
import sys

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get('LOG_LEVEL', 'INFO').upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger for `name`, attaching the stdout handler on first use.

    Args:
        name (str): Module name, usually __name__.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(_level_from_env())
    # Records are already printed here; the root logger would print them twice
    logger.propagate = False

    return logger
