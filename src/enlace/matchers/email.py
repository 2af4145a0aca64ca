"""Email matcher.

Uses the HTML "valid e-mail address" grammar
(https://html.spec.whatwg.org/#valid-e-mail-address), then validates the
domain's TLD the same way URLs are validated.
"""

from __future__ import annotations

import re

from enlace.matchers.url import is_invalid_shape
from enlace.tlds import TldSet, valid_tld
from enlace.tokens import Email, TokenKind

_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"

EMAIL_RE = re.compile(rf"^[a-zA-Z0-9.!#$%&'*+/=?^_`{{|}}~-]+@{_LABEL}(?:\.{_LABEL})*$")


def is_email(token: str, tlds: TldSet) -> bool:
    """Check that a token is an email address with a known TLD."""
    if is_invalid_shape(token):
        return False
    if EMAIL_RE.match(token) is None:
        return False
    return valid_tld(token, tlds)


class EmailMatcher:
    """Matcher for email addresses."""

    __slots__ = ("_tlds",)

    def __init__(self, tlds: TldSet) -> None:
        self._tlds = tlds

    @property
    def kind(self) -> TokenKind:
        return TokenKind.EMAIL

    def match(self, candidate: str) -> Email | None:
        if is_email(candidate, self._tlds):
            return Email(candidate)
        return None
