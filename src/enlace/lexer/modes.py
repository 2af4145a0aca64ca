"""Scanner operating modes and character classes.

This module defines the finite state machine modes for the scanner. A mode
is a kind plus a tag nesting level; ``Mode`` values are immutable and
compared by value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ScanMode(Enum):
    """Scanner operating modes.

    The scanner switches between modes based on context:
    - PARSING: Plain text outside any tag, tokens go to the handler
    - SKIP_ANCHOR: Inside an existing <a>...</a>, everything passes through
    - OPEN_TAG: Reading a tag name after "<"
    - ATTRS: Inside a tag's attributes, everything passes through
    - IN_TAG: Text content of an open tag, tokens go to the handler
    - CLOSE_TAG: Reading a closing tag after "</"

    """

    PARSING = auto()
    SKIP_ANCHOR = auto()
    OPEN_TAG = auto()
    ATTRS = auto()
    IN_TAG = auto()
    CLOSE_TAG = auto()


@dataclass(frozen=True, slots=True)
class Mode:
    """A scanner mode with its tag nesting level.

    For tag modes ``level`` is the depth of the tag being read (1 = outermost).
    For SKIP_ANCHOR it is the depth to resume at once ``</a>`` is seen
    (0 = back to PARSING).
    """

    kind: ScanMode
    level: int = 0

    def __repr__(self) -> str:
        if self.kind is ScanMode.PARSING:
            return "Mode(PARSING)"
        return f"Mode({self.kind.name}, {self.level})"


PARSING = Mode(ScanMode.PARSING)


def in_tag(level: int) -> Mode:
    """Mode for text content at ``level``; level 0 is plain PARSING."""
    return PARSING if level == 0 else Mode(ScanMode.IN_TAG, level)


# Token boundaries for ordinary passes
BOUNDARIES: frozenset[str] = frozenset(" \n")

# Token boundaries for the phone pass: numbers may contain spaces
LINE_BOUNDARIES: frozenset[str] = frozenset("\n")

# Tag name delimiters that start the attribute section
ATTR_START: frozenset[str] = frozenset(" \n")

# Characters that may follow "<a" in an anchor opener
ANCHOR_FOLLOW: frozenset[str] = frozenset(" \t\n>")

ANCHOR_OPEN = "<a"
ANCHOR_CLOSE = "</a>"
CLOSE_TAG_OPEN = "</"
