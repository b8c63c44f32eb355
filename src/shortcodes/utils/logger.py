"""Minimal logging utilities for shortcodes.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from shortcodes.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiling shortcode pattern")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "shortcodes." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'shortcodes.mymodule'
    """
    if not (name == "shortcodes" or name.startswith("shortcodes.")):
        name = f"shortcodes.{name}"
    return logging.getLogger(name)
