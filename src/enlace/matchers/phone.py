"""Phone number matcher.

Recognizes North American Numbering Plan numbers and short extensions inside
a chunk of text. The scanner hands this matcher whole lines during the phone
pass, since numbers such as ``(555) 555-5555`` contain spaces.

Every quantifier in the pattern is bounded, so the scan is linear in the
chunk length even on hostile input.
"""

from __future__ import annotations

import re

from enlace.tokens import Phone, PhoneMatch, TokenKind

# Area codes and exchanges restricted to NANP leading-digit patterns
_AREA = r"(?:[2-9]1[02-9]|[2-9][02-8]1|[2-9][02-8][02-9])"
_EXCHANGE = r"(?:[2-9]1[02-9]|[2-9][02-9]1|[2-9][02-9]{2})"
_SEP = r"\s?(?:[.-]\s?)?"

PHONE_RE = re.compile(
    r"(?<![\w/])"
    r"(?:"
    r"x\d{2,7}"
    r"|"
    rf"(?:(?:\+?1{_SEP})?(?:\(\s?{_AREA}\s?\)|{_AREA}){_SEP})?"
    rf"{_EXCHANGE}{_SEP}[0-9]{{4}}"
    r")"
    r"(?!\d)"
)

_NON_DIGIT_RE = re.compile(r"\D")


def find_phones(chunk: str) -> tuple[PhoneMatch, ...]:
    """Find every non-overlapping phone number in a chunk, left to right."""
    return tuple(
        PhoneMatch(
            text=m.group(0),
            start=m.start(),
            end=m.end(),
            digits=_NON_DIGIT_RE.sub("", m.group(0)),
        )
        for m in PHONE_RE.finditer(chunk)
    )


class PhoneMatcher:
    """Matcher for phone numbers; accepts a chunk holding one or more."""

    __slots__ = ()

    @property
    def kind(self) -> TokenKind:
        return TokenKind.PHONE

    def match(self, candidate: str) -> Phone | None:
        matches = find_phones(candidate)
        if not matches:
            return None
        return Phone(matches)
