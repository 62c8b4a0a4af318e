"""Minimal logging utilities for Speckles.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from speckles.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering tree")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "speckles." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'speckles.mymodule'
    """
    if not (name == "speckles" or name.startswith("speckles.")):
        name = f"speckles.{name}"
    return logging.getLogger(name)
