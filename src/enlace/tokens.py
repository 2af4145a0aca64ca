"""Recognized token definitions.

A matcher that accepts a candidate returns one of these frozen dataclasses;
the renderer turns it into markup. ``kind`` tags the variant so callers can
dispatch without isinstance chains.

Thread Safety:
Tokens are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """Entity kinds recognized by the matchers."""

    URL = auto()
    EMAIL = auto()
    PHONE = auto()
    MENTION = auto()
    HASHTAG = auto()
    EXTRA = auto()


@dataclass(frozen=True, slots=True)
class Url:
    """A bare domain or http(s) URL, exactly as written."""

    text: str

    @property
    def kind(self) -> TokenKind:
        return TokenKind.URL


@dataclass(frozen=True, slots=True)
class Email:
    """An email address."""

    address: str

    @property
    def kind(self) -> TokenKind:
        return TokenKind.EMAIL


@dataclass(frozen=True, slots=True)
class PhoneMatch:
    """One phone number found inside a chunk.

    Attributes:
        text: The matched substring as written
        start: Offset of the match in the chunk
        end: Offset one past the match
        digits: The match with every non-digit removed

    """

    text: str
    start: int
    end: int
    digits: str


@dataclass(frozen=True, slots=True)
class Phone:
    """All non-overlapping phone numbers found in one chunk, in order."""

    matches: tuple[PhoneMatch, ...]

    @property
    def kind(self) -> TokenKind:
        return TokenKind.PHONE


@dataclass(frozen=True, slots=True)
class Mention:
    """A mention such as ``@user`` or ``@user@example.com``.

    ``handle`` keeps the leading ``@``.
    """

    handle: str

    @property
    def kind(self) -> TokenKind:
        return TokenKind.MENTION

    @property
    def name(self) -> str:
        """The handle without its leading ``@``."""
        return self.handle[1:]


@dataclass(frozen=True, slots=True)
class Hashtag:
    """A hashtag; ``tag`` excludes the ``#``."""

    tag: str

    @property
    def kind(self) -> TokenKind:
        return TokenKind.HASHTAG


@dataclass(frozen=True, slots=True)
class ExtraScheme:
    """A URI in one of the extra allow-listed schemes (magnet, ipfs, xmpp...)."""

    uri: str

    @property
    def kind(self) -> TokenKind:
        return TokenKind.EXTRA


RecognizedToken = Url | Email | Phone | Mention | Hashtag | ExtraScheme

__all__ = [
    "Email",
    "ExtraScheme",
    "Hashtag",
    "Mention",
    "Phone",
    "PhoneMatch",
    "RecognizedToken",
    "TokenKind",
    "Url",
]
