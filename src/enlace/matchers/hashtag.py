"""Hashtag matcher.

A hashtag is ``#`` followed by Unicode word characters in any script. There
is no dot or TLD rule here: ``example.com#frag`` stays intact only because
the URL pass runs before the hashtag pass.
"""

from __future__ import annotations

import re

from enlace.tokens import Hashtag, TokenKind

HASHTAG_RE = re.compile(r"^#(?P<tag>\w+)")


def match_hashtag(token: str) -> Hashtag | None:
    """Match a hashtag at the start of a token.

    Examples:
        >>> match_hashtag("#漢字")
        Hashtag(tag='漢字')
        >>> match_hashtag("example.com#frag") is None
        True
    """
    match = HASHTAG_RE.match(token)
    if match is None:
        return None
    return Hashtag(match.group("tag"))


class HashtagMatcher:
    """Matcher for #hashtags."""

    __slots__ = ()

    @property
    def kind(self) -> TokenKind:
        return TokenKind.HASHTAG

    def match(self, candidate: str) -> Hashtag | None:
        return match_hashtag(candidate)
