"""Mention matcher.

Handles local mentions (``@user``) and remote ones (``@user@example.com``).
The handle may start with any handle character other than ``@``, so
``@.user`` matches and ``@@user`` never does. It ends on a letter, digit,
underscore or hyphen. Remote domains are not TLD-checked.
"""

from __future__ import annotations

import re

from enlace.tokens import Mention, TokenKind

_HANDLE = r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]*[a-zA-Z0-9_-]"
_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"

MENTION_RE = re.compile(rf"^@{_HANDLE}(?:@{_LABEL}(?:\.{_LABEL})*)?")


def match_mention(token: str) -> Mention | None:
    """Match a mention at the start of a token.

    Only the matched prefix becomes the mention; anything after it (such as
    trailing punctuation) is left for the caller to keep.

    Examples:
        >>> match_mention("@user,")
        Mention(handle='@user')
        >>> match_mention("@@user") is None
        True
    """
    match = MENTION_RE.match(token)
    if match is None:
        return None
    return Mention(match.group(0))


class MentionMatcher:
    """Matcher for @mentions."""

    __slots__ = ()

    @property
    def kind(self) -> TokenKind:
        return TokenKind.MENTION

    def match(self, candidate: str) -> Mention | None:
        return match_mention(candidate)
