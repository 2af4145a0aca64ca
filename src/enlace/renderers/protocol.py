"""Renderer protocol.

Defines the contract a link renderer fulfils. The default implementation is
``HtmlLinkRenderer``; any object with these methods can be swapped in, e.g.
to emit a different markup language.

Thread Safety:
Renderers must be stateless. Per-call state belongs to the caller.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from enlace.config import LinkOptions
    from enlace.renderers.html import Markup
    from enlace.tokens import (
        Email,
        ExtraScheme,
        Hashtag,
        Mention,
        PhoneMatch,
        RecognizedToken,
        Url,
    )


@runtime_checkable
class LinkRenderer(Protocol):
    """Protocol for rendering accepted tokens into link markup.

    Each method receives the recognized token, the raw buffer it was found
    in, and the active options, and returns markup shaped by
    ``options.output``.

    """

    def render(self, token: RecognizedToken | PhoneMatch, raw: str, options: LinkOptions) -> Markup:
        """Render any recognized token, dispatching on its type."""
        ...

    def render_url(self, token: Url, raw: str, options: LinkOptions) -> Markup:
        """Render a URL link."""
        ...

    def render_email(self, token: Email, raw: str, options: LinkOptions) -> Markup:
        """Render a mailto: link."""
        ...

    def render_phone(self, token: PhoneMatch, raw: str, options: LinkOptions) -> Markup:
        """Render a tel: link for one phone number."""
        ...

    def render_mention(self, token: Mention, raw: str, options: LinkOptions) -> Markup:
        """Render a mention link."""
        ...

    def render_hashtag(self, token: Hashtag, raw: str, options: LinkOptions) -> Markup:
        """Render a hashtag link."""
        ...

    def render_extra(self, token: ExtraScheme, raw: str, options: LinkOptions) -> Markup:
        """Render a link in one of the extra schemes."""
        ...

    def render_markdown(self, text: str, url: str, options: LinkOptions) -> Markup:
        """Render a ``[text](url)`` link."""
        ...
