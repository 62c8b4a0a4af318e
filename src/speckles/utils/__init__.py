"""Utility modules for Speckles.

Provides:
- text: escape_html for text content
- logger: get_logger for logging
"""

from speckles.utils.logger import get_logger
from speckles.utils.text import escape_html

__all__ = [
    "escape_html",
    "get_logger",
]
