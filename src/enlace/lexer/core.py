"""State-machine scanner that isolates linkable text from existing markup.

One scan is one pass over the text for a single entity kind. Plain text is
cut into candidate tokens at boundaries and offered to the pass's token
processor; existing anchors, tag names and attributes pass through verbatim.

The loop is an explicit cursor over the input, so arbitrarily long text
never grows the call stack.

Thread Safety:
Scanner instances hold only their processor and boundary set. All per-scan
state lives in a fresh ScanState, so one Scanner may run concurrently.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from enlace.lexer.modes import (
    ANCHOR_CLOSE,
    ANCHOR_FOLLOW,
    ANCHOR_OPEN,
    ATTR_START,
    BOUNDARIES,
    CLOSE_TAG_OPEN,
    LINE_BOUNDARIES,
    PARSING,
    Mode,
    ScanMode,
    in_tag,
)

# (candidate, user_acc) -> (replacement, user_acc)
TokenProcessor = Callable[[str, Any], tuple[str, Any]]


@dataclass(frozen=True, slots=True)
class Replacement:
    """An input span handed to the processor and the output span it became.

    Attributes:
        source_start: Input offset of the processed buffer
        source_end: Input offset just past the processed buffer
        start: Output offset of the processor's result
        end: Output offset just past the processor's result

    """

    source_start: int
    source_end: int
    start: int
    end: int


@dataclass(slots=True)
class ScanState:
    """Mutable state of one scan.

    The pending buffer is always the slice ``text[start:pos]`` of the input,
    so buffer and output together cover the processed prefix exactly.

    Attributes:
        output: Finalized output fragments
        mode: Current scanner mode
        start: Input offset where the pending buffer begins
        length: Total length of the output so far
        replacements: One entry per processor call, in input order

    """

    output: list[str] = field(default_factory=list)
    mode: Mode = PARSING
    start: int = 0
    length: int = 0
    replacements: list[Replacement] = field(default_factory=list)

    def emit(self, s: str) -> None:
        if s:
            self.output.append(s)
            self.length += len(s)

    def build(self) -> str:
        return "".join(self.output)


class Scanner:
    """Tokenizing scanner for one pass.

    Usage:
        >>> scanner = Scanner(lambda token, acc: (token.upper(), acc))
        >>> scanner.scan("see <a href='x'>this</a> and that", None)
        ("SEE <a href='x'>this</a> AND THAT", None)

    """

    __slots__ = ("_boundaries", "_process")

    def __init__(self, process: TokenProcessor, *, split_on_space: bool = True) -> None:
        """Initialize scanner.

        Args:
            process: Called with each candidate token and the user accumulator
            split_on_space: Treat spaces as token boundaries. The phone pass
                turns this off so numbers like ``(555) 555-5555`` reach the
                processor whole.
        """
        self._process = process
        self._boundaries = BOUNDARIES if split_on_space else LINE_BOUNDARIES

    def scan(self, text: str, user_acc: Any = None) -> tuple[str, Any]:
        """Scan text, replacing accepted tokens.

        Args:
            text: Input text, possibly containing HTML markup
            user_acc: Opaque accumulator threaded through the processor

        Returns:
            (transformed_text, user_acc)

        Complexity: O(n) scanner steps where n = len(text)
        """
        text, user_acc, _ = self.scan_with_replacements(text, user_acc)
        return text, user_acc

    def scan_with_replacements(
        self, text: str, user_acc: Any = None
    ) -> tuple[str, Any, list[Replacement]]:
        """Scan text like scan(), also reporting where each processed token went.

        Returns:
            (transformed_text, user_acc, replacements)
        """
        state = ScanState()
        pos = 0
        text_len = len(text)

        while pos < text_len:
            pos, user_acc = self._step(text, pos, state, user_acc)

        # End of input: whatever is still buffered goes through the processor
        # as plain text, whatever mode we are in.
        user_acc = self._flush(text, text_len, state, user_acc)
        return state.build(), user_acc, state.replacements

    # =========================================================================
    # Transitions
    # =========================================================================

    def _step(self, text: str, pos: int, state: ScanState, user_acc: Any) -> tuple[int, Any]:
        """Apply one transition at ``pos``; returns the new position and accumulator."""
        mode = state.mode
        kind = mode.kind
        char = text[pos]

        if kind is ScanMode.SKIP_ANCHOR:
            return self._skip_anchor(text, pos, state), user_acc

        if kind is ScanMode.ATTRS:
            return self._skip_attrs(text, pos, state), user_acc

        if kind is ScanMode.PARSING or kind is ScanMode.IN_TAG:
            if char == "<":
                if _is_anchor_open(text, pos):
                    user_acc = self._flush(text, pos, state, user_acc)
                    state.emit(ANCHOR_OPEN)
                    state.mode = Mode(ScanMode.SKIP_ANCHOR, mode.level)
                    pos += len(ANCHOR_OPEN)
                    state.start = pos
                    return pos, user_acc

                if kind is ScanMode.IN_TAG and text.startswith(CLOSE_TAG_OPEN, pos):
                    user_acc = self._flush(text, pos, state, user_acc)
                    state.emit(CLOSE_TAG_OPEN)
                    state.mode = Mode(ScanMode.CLOSE_TAG, mode.level)
                    pos += len(CLOSE_TAG_OPEN)
                    state.start = pos
                    return pos, user_acc

                if state.start == pos or _is_tag_open(text, pos):
                    # "<" opens a (possibly nested) tag when the buffer is
                    # empty or a tag name follows
                    user_acc = self._flush(text, pos, state, user_acc)
                    state.mode = Mode(ScanMode.OPEN_TAG, mode.level + 1)
                    return pos + 1, user_acc

        elif kind is ScanMode.OPEN_TAG:
            if char in ATTR_START:
                state.emit(text[state.start : pos + 1])
                state.mode = Mode(ScanMode.ATTRS, mode.level)
                state.start = pos + 1
                return pos + 1, user_acc
            if char == ">":
                state.emit(text[state.start : pos + 1])
                state.mode = Mode(ScanMode.IN_TAG, mode.level)
                state.start = pos + 1
                return pos + 1, user_acc

        elif kind is ScanMode.CLOSE_TAG:
            if char == ">":
                state.emit(text[state.start : pos + 1])
                state.mode = in_tag(mode.level - 1)
                state.start = pos + 1
                return pos + 1, user_acc

        # Default: extend the buffer, or cut a token at a boundary
        if char in self._boundaries:
            user_acc = self._flush(text, pos, state, user_acc)
            state.emit(char)
            state.start = pos + 1
        return pos + 1, user_acc

    def _skip_anchor(self, text: str, pos: int, state: ScanState) -> int:
        """Pass an existing anchor's body through untouched, up to and including ``</a>``."""
        end = text.find(ANCHOR_CLOSE, pos)
        if end == -1:
            state.emit(text[pos:])
            state.start = len(text)
            return len(text)
        end += len(ANCHOR_CLOSE)
        state.emit(text[pos:end])
        state.mode = in_tag(state.mode.level)
        state.start = end
        return end

    def _skip_attrs(self, text: str, pos: int, state: ScanState) -> int:
        """Pass a tag's attributes through untouched, up to and including ``>``."""
        end = text.find(">", pos)
        if end == -1:
            state.emit(text[pos:])
            state.start = len(text)
            return len(text)
        end += 1
        state.emit(text[pos:end])
        state.mode = Mode(ScanMode.IN_TAG, state.mode.level)
        state.start = end
        return end

    def _flush(self, text: str, pos: int, state: ScanState, user_acc: Any) -> Any:
        """Run the processor on the pending buffer and emit its result."""
        buffer = text[state.start : pos]
        if buffer:
            replacement, user_acc = self._process(buffer, user_acc)
            out_start = state.length
            state.emit(replacement)
            state.replacements.append(
                Replacement(state.start, pos, out_start, state.length)
            )
        state.start = pos
        return user_acc


def _is_anchor_open(text: str, pos: int) -> bool:
    """Check for ``<a`` followed by whitespace, ``>`` or end of input."""
    if not text.startswith(ANCHOR_OPEN, pos):
        return False
    follow = pos + len(ANCHOR_OPEN)
    return follow == len(text) or text[follow] in ANCHOR_FOLLOW


def _is_tag_open(text: str, pos: int) -> bool:
    """Check for ``<`` followed by an ASCII letter or ``/``."""
    follow = pos + 1
    if follow == len(text):
        return False
    char = text[follow]
    return char == "/" or (char.isascii() and char.isalpha())


__all__ = ["Replacement", "ScanState", "Scanner", "TokenProcessor"]
