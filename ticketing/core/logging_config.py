# ticketing/core/logging_config.py
"""Structured logger setup shared by the host and the ticket plugin."""

import logging
from pythonjsonlogger.json import JsonFormatter

from ticketing.core.config import get_settings


def get_logger(name: str) -> logging.Logger:
    """
    Configure a JSON logger once and reuse it.

    Calling this again for the same name returns the already configured logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(get_settings().LOG_LEVEL.upper())
    logger.propagate = False
    return logger
