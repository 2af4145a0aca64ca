"""
Enlace — Autolinking for plain text and HTML fragments

Finds URLs, email addresses, phone numbers, @mentions, #hashtags and
non-web scheme URIs in text and wraps them in anchor tags, leaving existing
anchors and tag attributes untouched.

Quick Start:
    >>> from enlace import link
    >>> link("Visit google.com")
    'Visit <a href="http://google.com" class="auto-linker" target="_blank" rel="noopener noreferrer">google.com</a>'

    >>> # Options as keyword overrides
    >>> link("ping @user", mention=True, mention_prefix="https://example.com/u/")

    >>> # Or a reusable Linker
    >>> from enlace import Linker, LinkOptions
    >>> linker = Linker(LinkOptions(email=True, new_window=False))
    >>> html = linker("mail me@example.com")

Custom Handlers:
    >>> def handler(candidate, raw, options, acc):
    ...     return f"<b>{candidate}</b>", acc + [candidate]
    >>> link("#tag and #other", hashtag=True, hashtag_handler=handler, user_acc=[])
    ('<b>#tag</b> and <b>#other</b>', ['#tag', '#other'])

Installation:
    pip install enlace               # Zero runtime dependencies
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from enlace.config import (
    LinkOptions,
    OutputMode,
    default_options_context,
    get_default_options,
    reset_default_options,
    set_default_options,
)
from enlace.errors import EnlaceError, HandlerError, OptionError
from enlace.pipeline import Pipeline
from enlace.renderers.html import HtmlLinkRenderer, Safe
from enlace.renderers.protocol import LinkRenderer
from enlace.tlds import TldSet, load_tlds
from enlace.tokens import TokenKind

__version__ = "0.1.0"

# Marks "no accumulator supplied" so None stays a valid accumulator value
_UNSET: Any = object()


def link(
    text: str,
    options: LinkOptions | Mapping[str, Any] | None = None,
    user_acc: Any = _UNSET,
    **overrides: Any,
) -> Any:
    """Link every enabled entity in ``text``.

    Args:
        text: Input text, possibly containing HTML markup
        options: LinkOptions, or a mapping of option keys applied over the
            context defaults (uses the context defaults if None)
        user_acc: Accumulator threaded through custom handlers. When given,
            the return value is ``(result, user_acc)``.
        **overrides: Option keys applied on top of ``options``

    Returns:
        The linked text (a string, or a fragment list for non-text output
        modes), or ``(result, user_acc)`` if an accumulator was supplied

    Raises:
        OptionError: If an option value is invalid
        HandlerError: If a custom handler breaks its return contract

    Example:
        >>> link("see example.com", new_window=False, rel=False)
        'see <a href="http://example.com" class="auto-linker">example.com</a>'
    """
    resolved = _resolve_options(options)
    if overrides:
        resolved = resolved.merged(**overrides)

    if user_acc is _UNSET:
        result, _ = Pipeline(resolved).run(text, None)
        return result
    return Pipeline(resolved).run(text, user_acc)


def _resolve_options(options: LinkOptions | Mapping[str, Any] | None) -> LinkOptions:
    if options is None:
        return get_default_options()
    if isinstance(options, LinkOptions):
        return options
    if isinstance(options, Mapping):
        return get_default_options().merged(**options)
    raise OptionError("options", f"expected LinkOptions or a mapping, got {type(options).__name__}")


class Linker:
    """High-level linker with fixed options.

    Usage:
        >>> linker = Linker(LinkOptions(phone=True))
        >>> linker("call 555-555-5555")
        'call <a href="tel:5555555555" class="auto-linker">555-555-5555</a>'

        >>> # Threading an accumulator through custom handlers
        >>> html, acc = linker.link("call 555-555-5555", user_acc=[])

    Thread Safety:
        The pipeline holds only immutable configuration, and every call
        creates its own scan state. Safe to share one Linker across threads.

    """

    __slots__ = ("_pipeline",)

    def __init__(
        self,
        options: LinkOptions | None = None,
        *,
        tlds: TldSet | None = None,
        renderer: LinkRenderer | None = None,
    ) -> None:
        """Initialize linker.

        Args:
            options: Link options (uses the context defaults if None)
            tlds: Known TLDs (uses the bundled list if None)
            renderer: Link renderer (uses HtmlLinkRenderer if None)
        """
        if options is None:
            options = get_default_options()
        self._pipeline = Pipeline(options, tlds=tlds, renderer=renderer)

    @property
    def options(self) -> LinkOptions:
        return self._pipeline.options

    def __call__(self, text: str) -> Any:
        """Link text and return the result alone."""
        result, _ = self._pipeline.run(text, None)
        return result

    def link(self, text: str, user_acc: Any = None) -> tuple[Any, Any]:
        """Link text, threading ``user_acc`` through custom handlers.

        Returns:
            (result, user_acc)
        """
        return self._pipeline.run(text, user_acc)


__all__ = [
    "EnlaceError",
    "HandlerError",
    "HtmlLinkRenderer",
    "LinkOptions",
    "LinkRenderer",
    "Linker",
    "OptionError",
    "OutputMode",
    "Safe",
    "TldSet",
    "TokenKind",
    "default_options_context",
    "get_default_options",
    "link",
    "load_tlds",
    "reset_default_options",
    "set_default_options",
]
