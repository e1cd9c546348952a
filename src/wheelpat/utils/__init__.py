"""Utility modules for wheelpat.

Provides:
- logger: get_logger for logging
"""

from wheelpat.utils.logger import get_logger

__all__ = [
    "get_logger",
]
