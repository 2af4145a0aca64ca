"""Matcher for URIs in non-web schemes.

Tokens are accepted on their scheme prefix alone, except ``xmpp:`` whose
remainder must be a valid email address.
"""

from __future__ import annotations

from enlace.matchers.email import is_email
from enlace.tlds import TldSet
from enlace.tokens import ExtraScheme, TokenKind

EXTRA_PREFIXES: tuple[str, ...] = (
    "magnet:?",
    "dweb://",
    "dat://",
    "gopher://",
    "ipfs://",
    "ipns://",
    "irc://",
    "ircs://",
    "irc6://",
    "mumble://",
    "ssb://",
)

XMPP_PREFIX = "xmpp:"


def is_extra(token: str, tlds: TldSet) -> bool:
    """Check for an allow-listed scheme prefix or a valid ``xmpp:`` address."""
    if token.startswith(XMPP_PREFIX):
        return is_email(token[len(XMPP_PREFIX) :], tlds)
    return token.startswith(EXTRA_PREFIXES)


class ExtraSchemeMatcher:
    """Matcher for magnet, dweb, dat, gopher, ipfs, ipns, irc, mumble, ssb and xmpp."""

    __slots__ = ("_tlds",)

    def __init__(self, tlds: TldSet) -> None:
        self._tlds = tlds

    @property
    def kind(self) -> TokenKind:
        return TokenKind.EXTRA

    def match(self, candidate: str) -> ExtraScheme | None:
        if is_extra(candidate, self._tlds):
            return ExtraScheme(candidate)
        return None
