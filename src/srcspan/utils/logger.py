"""Minimal logging utilities for srcspan.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure output.

Example:
    >>> from srcspan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolving span")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "srcspan." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("bug")
        >>> logger.name
        'srcspan.bug'
    """
    if not (name == "srcspan" or name.startswith("srcspan.")):
        name = f"srcspan.{name}"
    return logging.getLogger(name)
