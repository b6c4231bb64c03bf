"""Utility modules for srcspan.

Provides:
- logger: get_logger for logging
"""

from srcspan.utils.logger import get_logger

__all__ = [
    "get_logger",
]
