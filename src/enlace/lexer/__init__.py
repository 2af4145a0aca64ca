"""Tokenizing scanner.

Scans text once per pass, passing existing anchors and tag markup through
verbatim and cutting plain text into candidate tokens for the active pass.
"""

from enlace.lexer.core import Replacement, ScanState, Scanner, TokenProcessor
from enlace.lexer.modes import PARSING, Mode, ScanMode

__all__ = [
    "PARSING",
    "Mode",
    "Replacement",
    "ScanMode",
    "ScanState",
    "Scanner",
    "TokenProcessor",
]
