"""Utility modules for enlace.

Provides:
- logger: get_logger for logging
- text: attribute escaping and display-text shortening
"""

from enlace.utils.logger import get_logger
from enlace.utils.text import escape_attr, strip_prefix, truncate

__all__ = [
    "escape_attr",
    "get_logger",
    "strip_prefix",
    "truncate",
]
