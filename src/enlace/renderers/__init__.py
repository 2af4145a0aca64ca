"""Link renderers.

- html: HtmlLinkRenderer, the default anchor-tag builder
- protocol: LinkRenderer, the contract custom renderers implement
"""

from enlace.renderers.html import HtmlLinkRenderer, Markup, Safe, add_scheme, markup_text
from enlace.renderers.protocol import LinkRenderer

__all__ = [
    "HtmlLinkRenderer",
    "LinkRenderer",
    "Markup",
    "Safe",
    "add_scheme",
    "markup_text",
]
