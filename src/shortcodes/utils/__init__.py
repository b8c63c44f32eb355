"""Utility modules for shortcodes.

Provides:
- logger: get_logger for logging
- text: stripcslashes and whitespace normalization for attribute values
"""

from shortcodes.utils.logger import get_logger
from shortcodes.utils.text import normalize_spaces, stripcslashes

__all__ = [
    "get_logger",
    "normalize_spaces",
    "stripcslashes",
]
