"""HTML link renderer.

Assembles ``<a>`` tags for accepted tokens: href (with the scheme defaulted
for bare domains), class, target and rel attributes, and display text with
optional prefix stripping and truncation.

Output shape follows ``options.output``:

- TEXT: ``'<a href="...">text</a>'``
- FRAGMENTS: ``['<a ', 'href="..."', '>', 'text', '</a>']``
- SAFE: ``[Safe('<a href="...">'), 'text', Safe('</a>')]``, so that an
  auto-escaping template escapes the display text but trusts the tags

Thread Safety:
HtmlLinkRenderer is stateless; one instance can serve every thread.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from enlace.config import OutputMode
from enlace.tokens import Email, ExtraScheme, Hashtag, Mention, PhoneMatch, Url
from enlace.utils.text import escape_attr, strip_prefix, truncate

if TYPE_CHECKING:
    from enlace.config import LinkOptions
    from enlace.tokens import RecognizedToken

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_OPAQUE_SCHEMES = ("mailto:", "tel:")


@dataclass(frozen=True, slots=True)
class Safe:
    """A markup fragment that must not be escaped again."""

    value: str

    def __str__(self) -> str:
        return self.value


Fragment = Union[str, Safe]
Markup = Union[str, list[Fragment]]


def markup_text(markup: Markup) -> str:
    """Flatten markup of any output shape into a single string."""
    if isinstance(markup, str):
        return markup
    return "".join(str(fragment) for fragment in markup)


def add_scheme(url: str) -> str:
    """Default a schemeless URL to ``http://``.

    Examples:
        >>> add_scheme("example.com")
        'http://example.com'
        >>> add_scheme("https://example.com")
        'https://example.com'
    """
    if _SCHEME_RE.match(url) or url.startswith(_OPAQUE_SCHEMES):
        return url
    return "http://" + url


class HtmlLinkRenderer:
    """Render recognized tokens as HTML anchors.

    Usage:
        >>> from enlace.config import LinkOptions
        >>> HtmlLinkRenderer().render_url(Url("example.com"), "example.com", LinkOptions())
        '<a href="http://example.com" class="auto-linker" target="_blank" rel="noopener noreferrer">example.com</a>'

    """

    __slots__ = ()

    def render(self, token: RecognizedToken | PhoneMatch, raw: str, options: LinkOptions) -> Markup:
        """Render any recognized token by dispatching on its type."""
        match token:
            case Url():
                return self.render_url(token, raw, options)
            case Email():
                return self.render_email(token, raw, options)
            case PhoneMatch():
                return self.render_phone(token, raw, options)
            case Mention():
                return self.render_mention(token, raw, options)
            case Hashtag():
                return self.render_hashtag(token, raw, options)
            case ExtraScheme():
                return self.render_extra(token, raw, options)
            case _:
                raise TypeError(f"cannot render {type(token).__name__}")

    def render_url(self, token: Url, raw: str, options: LinkOptions) -> Markup:
        href = add_scheme(token.text)
        display = token.text
        if options.strip_prefix:
            display = strip_prefix(display)
        display = truncate(display, options.truncate)
        return self._tag(self._link_attrs(href, options), display, options)

    def render_email(self, token: Email, raw: str, options: LinkOptions) -> Markup:
        attrs = [("href", f"mailto:{token.address}"), *self._class_attr(options)]
        return self._tag(attrs, token.address, options)

    def render_phone(self, token: PhoneMatch, raw: str, options: LinkOptions) -> Markup:
        attrs = [("href", f"tel:{token.digits}"), *self._class_attr(options)]
        return self._tag(attrs, token.text, options)

    def render_mention(self, token: Mention, raw: str, options: LinkOptions) -> Markup:
        href = (options.mention_prefix or "") + token.name
        return self._tag(self._link_attrs(href, options), token.handle, options)

    def render_hashtag(self, token: Hashtag, raw: str, options: LinkOptions) -> Markup:
        href = (options.hashtag_prefix or "") + token.tag
        return self._tag(self._link_attrs(href, options), f"#{token.tag}", options)

    def render_extra(self, token: ExtraScheme, raw: str, options: LinkOptions) -> Markup:
        return self._tag(self._link_attrs(token.uri, options), token.uri, options)

    def render_markdown(self, text: str, url: str, options: LinkOptions) -> Markup:
        return self._tag(self._link_attrs(url, options), text, options)

    # =========================================================================
    # Attribute assembly
    # =========================================================================

    def _link_attrs(self, href: str, options: LinkOptions) -> list[tuple[str, str]]:
        """href, class, target and rel, in that order, omitting unset ones."""
        attrs = [("href", href), *self._class_attr(options)]
        if options.new_window:
            attrs.append(("target", "_blank"))
        rel = options.rel(href) if callable(options.rel) else options.rel
        if rel is not None:
            attrs.append(("rel", rel))
        return attrs

    def _class_attr(self, options: LinkOptions) -> list[tuple[str, str]]:
        if options.class_ is None:
            return []
        return [("class", options.class_)]

    def _tag(self, attrs: list[tuple[str, str]], content: str, options: LinkOptions) -> Markup:
        attr_text = " ".join(f'{name}="{escape_attr(value)}"' for name, value in attrs)
        if options.output is OutputMode.FRAGMENTS:
            return ["<a ", attr_text, ">", content, "</a>"]
        if options.output is OutputMode.SAFE:
            return [Safe(f"<a {attr_text}>"), content, Safe("</a>")]
        return f"<a {attr_text}>{content}</a>"
