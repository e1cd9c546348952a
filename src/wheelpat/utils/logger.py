"""Minimal logging utilities for wheelpat.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from wheelpat.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Dropped unmatched line")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "wheelpat." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("compiler")
        >>> logger.name
        'wheelpat.compiler'
    """
    if not (name == "wheelpat" or name.startswith("wheelpat.")):
        name = f"wheelpat.{name}"
    return logging.getLogger(name)
