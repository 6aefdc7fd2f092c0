"""Minimal logging utilities for minifyx.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from minifyx.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Protected %d regions", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "minifyx." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'minifyx.mymodule'
    """
    if not (name == "minifyx" or name.startswith("minifyx.")):
        name = f"minifyx.{name}"
    return logging.getLogger(name)
