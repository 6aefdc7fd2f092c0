"""Utility modules for minifyx.

Provides:
- logger: get_logger for namespaced logging
"""

from minifyx.utils.logger import get_logger

__all__ = [
    "get_logger",
]
