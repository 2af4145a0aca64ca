"""URL matcher.

Bare domains (``example.com/path``) are always eligible; ``http://`` and
``https://`` prefixes are accepted only when the scheme option is on. Both
shapes end in the RFC 3986 path/query/fragment character set, and the host
must end in a known TLD or be an IPv4 address.
"""

from __future__ import annotations

import re

from enlace.tlds import TldSet, valid_tld
from enlace.tokens import TokenKind, Url

# Runs of dots, or a bare dotted number such as a version string (1.2, 1.2.3)
INVALID_URL_RE = re.compile(r"(\.\.+)|(^(\d+\.){1,2}\d+$)")

_TAIL = r"[\w\-._~%:/?#\[\]@!$&'()*+,;=.]+"

URL_RE = re.compile(rf"^[\w.-]+(?:\.[\w.-]+)+{_TAIL}$")

SCHEME_URL_RE = re.compile(rf"^(?:https?://)?[\w.-]+(?:\.[\w.-]+)+{_TAIL}$")


def is_invalid_shape(token: str) -> bool:
    """Check for shapes that are never links: ``..`` runs and version numbers."""
    return INVALID_URL_RE.search(token) is not None


def classify_url(token: str, scheme: bool, tlds: TldSet) -> bool:
    """Decide whether a token is a linkable URL.

    Args:
        token: Candidate text
        scheme: Accept an ``http://``/``https://`` prefix
        tlds: Known top-level domains

    Returns:
        True if the token should be linked
    """
    if is_invalid_shape(token):
        return False
    pattern = SCHEME_URL_RE if scheme else URL_RE
    if pattern.match(token) is None:
        return False
    return valid_tld(token, tlds)


class UrlMatcher:
    """Matcher for bare domains and http(s) URLs."""

    __slots__ = ("_scheme", "_tlds")

    def __init__(self, tlds: TldSet, *, scheme: bool = False) -> None:
        self._tlds = tlds
        self._scheme = scheme

    @property
    def kind(self) -> TokenKind:
        return TokenKind.URL

    def match(self, candidate: str) -> Url | None:
        if classify_url(candidate, self._scheme, self._tlds):
            return Url(candidate)
        return None
