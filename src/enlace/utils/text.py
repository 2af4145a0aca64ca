"""Text processing utilities for enlace.

Canonical implementations of the small string operations the link renderer
applies to display text and attribute values.

Example:
    >>> from enlace.utils.text import strip_prefix, truncate
    >>> truncate(strip_prefix("https://www.example.com/a/long/path"), 12)
    'example.c...'
"""

from __future__ import annotations

import re

_SCHEME_PREFIX_RE = re.compile(r"^https?://")
_WWW_PREFIX_RE = re.compile(r"^www\.")

ELLIPSIS = "..."


def strip_prefix(url: str) -> str:
    """Remove a leading ``http://``/``https://`` and then a leading ``www.``.

    Examples:
        >>> strip_prefix("https://www.example.com")
        'example.com'
        >>> strip_prefix("ftp://example.com")
        'ftp://example.com'
    """
    url = _SCHEME_PREFIX_RE.sub("", url, count=1)
    return _WWW_PREFIX_RE.sub("", url, count=1)


def truncate(text: str, length: int | None) -> str:
    """Shorten text to at most ``length`` characters, ending in an ellipsis.

    Lengths below 3 leave the text alone: there is no room for the marker.

    Args:
        text: Display text
        length: Maximum length including the ellipsis (None = unlimited)

    Returns:
        The text unchanged when short enough, otherwise a prefix plus ``...``

    Examples:
        >>> truncate("example.com", 8)
        'examp...'
        >>> truncate("example.com", 2)
        'example.com'
    """
    if length is None or length < len(ELLIPSIS) or len(text) <= length:
        return text
    return text[: length - len(ELLIPSIS)] + ELLIPSIS


def escape_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute.

    Only the double quote is replaced. Everything else in a token already
    appeared verbatim in the surrounding text, so ampersands and the like are
    kept as written.

    Examples:
        >>> escape_attr('say "hi"')
        'say &quot;hi&quot;'
    """
    if not value:
        return ""
    return value.replace('"', "&quot;")
