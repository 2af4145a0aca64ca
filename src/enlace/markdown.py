"""Markdown-style link substitution.

Rewrites ``[text](url)`` into a rendered link. This is a plain regex pass
over the whole text rather than a scanner pass; it runs before the email
and URL passes so bracket syntax is never mistaken for plain text.

Existing anchors and tag markup are passed over, the same way the scanner
treats them.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from enlace.lexer import Replacement

# [text](url): text may not nest brackets or span lines, url has no spaces
# or parentheses
MARKDOWN_LINK_RE = re.compile(r"\[(?P<text>[^\[\]\n]*)\]\((?P<url>[^()\s]+)\)")

# An anchor through its </a> (or the end of an unterminated one), or any
# other tag. Tried before the link pattern at every position.
_MARKUP = r"<a(?:[\s>].*?(?:</a>|\Z)|\Z)|<[A-Za-z/][^>]*>"

_REWRITE_RE = re.compile(rf"(?P<markup>{_MARKUP})|{MARKDOWN_LINK_RE.pattern}", re.DOTALL)


def rewrite_markdown(
    text: str, render: Callable[[str, str], str]
) -> tuple[str, list[Replacement]]:
    """Replace every ``[text](url)`` outside markup with ``render(text, url)``.

    Returns:
        (rewritten_text, replacements), one replacement per rendered link
    """
    parts: list[str] = []
    replacements: list[Replacement] = []
    pos = 0
    length = 0
    for match in _REWRITE_RE.finditer(text):
        if match.group("markup") is not None:
            continue
        head = text[pos : match.start()]
        rendered = render(match.group("text"), match.group("url"))
        parts.append(head)
        parts.append(rendered)
        length += len(head)
        replacements.append(
            Replacement(match.start(), match.end(), length, length + len(rendered))
        )
        length += len(rendered)
        pos = match.end()
    parts.append(text[pos:])
    return "".join(parts), replacements


def substitute_markdown(text: str, render: Callable[[str, str], str]) -> str:
    """Replace every ``[text](url)`` outside markup with ``render(text, url)``.

    Example:
        >>> substitute_markdown("see [docs](https://x.dev)", lambda t, u: f"<{u}|{t}>")
        'see <https://x.dev|docs>'
    """
    return rewrite_markdown(text, render)[0]
