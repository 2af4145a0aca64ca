"""Link options and ContextVar-based defaults for enlace.

``LinkOptions`` is the fully populated, immutable configuration a link call
runs with. Every key has an explicit default, so the pipeline never has to
ask whether an option is present.

Context-wide defaults play the role of application-level configuration:
set them once (per thread or per async task) and every ``link()`` call that
does not pass its own options picks them up.

Thread Safety:
    LinkOptions is frozen. Defaults live in a ContextVar, so each thread has
    independent storage and no locks are needed.

Usage:
    from enlace.config import LinkOptions, default_options_context

    options = LinkOptions(mention=True, mention_prefix="https://example.com/u/")

    with default_options_context(LinkOptions(new_window=False)):
        html = link("Visit example.com")

"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any

from enlace.errors import OptionError

# (candidate, raw_buffer, options, user_acc) -> (replacement, user_acc)
HandlerFunc = Callable[[str, str, Any, Any], Any]

RelFunc = Callable[[str], str | None]


class OutputMode(Enum):
    """Shape of the value returned by ``link()``.

    - TEXT: a single string
    - FRAGMENTS: a flat list of string fragments
    - SAFE: a flat list where generated link tags are ``Safe`` fragments and
      everything else is a plain string, for auto-escaping templates

    """

    TEXT = "text"
    FRAGMENTS = "fragments"
    SAFE = "safe"


_HANDLER_FIELDS = ("href_handler", "mention_handler", "hashtag_handler")

# Keys where a literal False means "unset"
_FALSE_MEANS_NONE = frozenset(
    {
        "class_",
        "rel",
        "mention_prefix",
        "hashtag_prefix",
        "exclude_pattern",
        "truncate",
        "href_handler",
        "mention_handler",
        "hashtag_handler",
    }
)


@dataclass(frozen=True, slots=True)
class LinkOptions:
    """Immutable link configuration.

    Attributes:
        url: Link bare domains and URLs
        scheme: Also accept ``http://``/``https://`` prefixed URLs
        phone: Link NANP phone numbers and short extensions
        email: Link email addresses
        mention: Link ``@user`` and ``@user@domain`` mentions
        hashtag: Link ``#tag`` hashtags
        extra: Link magnet/dweb/ipfs/irc/... URIs and ``xmpp:`` addresses
        markdown: Rewrite ``[text](url)`` into links
        class_: Value of the class attribute (None omits it)
        rel: Value of the rel attribute, or a function of the href
        new_window: Add ``target="_blank"``
        href_handler: Replaces the default accept path for URLs
        mention_handler: Replaces the default accept path for mentions
        hashtag_handler: Replaces the default accept path for hashtags
        mention_prefix: Prepended to the handle to build mention hrefs
        hashtag_prefix: Prepended to the tag to build hashtag hrefs
        exclude_pattern: Skip the URL pass for text starting with this
        strip_prefix: Drop ``http(s)://`` and ``www.`` from display text
        truncate: Maximum display length, ``...`` included (None = off)
        output: Shape of the returned value

    """

    url: bool = True
    scheme: bool = False
    phone: bool = False
    email: bool = False
    mention: bool = False
    hashtag: bool = False
    extra: bool = False
    markdown: bool = False
    class_: str | None = "auto-linker"
    rel: str | RelFunc | None = "noopener noreferrer"
    new_window: bool = True
    href_handler: HandlerFunc | None = None
    mention_handler: HandlerFunc | None = None
    hashtag_handler: HandlerFunc | None = None
    mention_prefix: str | None = None
    hashtag_prefix: str | None = None
    exclude_pattern: str | None = None
    strip_prefix: bool = False
    truncate: int | None = None
    output: OutputMode = OutputMode.TEXT

    def __post_init__(self) -> None:
        for name in _HANDLER_FIELDS:
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise OptionError(name, f"expected a callable, got {type(value).__name__}")

        for name in ("class_", "mention_prefix", "hashtag_prefix", "exclude_pattern"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise OptionError(name, f"expected a string, got {type(value).__name__}")

        if self.rel is not None and not (isinstance(self.rel, str) or callable(self.rel)):
            raise OptionError("rel", "expected a string or a callable taking the href")

        if self.truncate is not None and (
            isinstance(self.truncate, bool)
            or not isinstance(self.truncate, int)
            or self.truncate < 0
        ):
            raise OptionError("truncate", f"expected a non-negative int, got {self.truncate!r}")

        if not isinstance(self.output, OutputMode):
            raise OptionError("output", f"unknown output mode {self.output!r}")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> LinkOptions:
        """Create LinkOptions from a dictionary.

        Accepts the plain key names used in configuration files (``class``
        instead of ``class_``, ``False`` meaning "unset", ``iodata`` as an
        alias for the output mode). Unknown keys are silently ignored.

        Args:
            config_dict: Dictionary with option values.

        Returns:
            New LinkOptions instance.

        Example:
            >>> options = LinkOptions.from_dict({"class": False, "email": True})
            >>> options.class_ is None
            True

        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        return cls(**_normalize(config_dict, valid_fields))

    def merged(self, **overrides: Any) -> LinkOptions:
        """Return a copy with ``overrides`` applied.

        Overrides use the same normalization as ``from_dict``; unknown keys
        raise ``OptionError`` since they come straight from a call site.
        """
        valid_fields = {f.name for f in dataclasses.fields(self)}
        for key in overrides:
            if _canonical_key(key) not in valid_fields:
                raise OptionError(key, "unknown option")
        return dataclasses.replace(self, **_normalize(overrides, valid_fields))


def _canonical_key(key: str) -> str:
    if key == "class":
        return "class_"
    if key == "iodata":
        return "output"
    return key


def _normalize(raw: dict[str, Any], valid_fields: set[str]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        key = _canonical_key(key)
        if key not in valid_fields:
            continue
        if key in _FALSE_MEANS_NONE and value is False:
            value = None
        if key == "output":
            value = _output_mode(value)
        normalized[key] = value
    return normalized


def _output_mode(value: Any) -> Any:
    if isinstance(value, OutputMode):
        return value
    # iodata-style flags: True -> fragments, False -> text
    if value is True:
        return OutputMode.FRAGMENTS
    if value is False or value is None:
        return OutputMode.TEXT
    try:
        return OutputMode(value)
    except ValueError:
        raise OptionError("output", f"unknown output mode {value!r}") from None


# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: LinkOptions = LinkOptions()

_default_options: ContextVar[LinkOptions] = ContextVar(
    "default_link_options",
    default=_DEFAULT_OPTIONS,
)


def get_default_options() -> LinkOptions:
    """Get the default options for the current context."""
    return _default_options.get()


def set_default_options(options: LinkOptions) -> None:
    """Set default options for the current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _default_options.set(options)


def reset_default_options() -> None:
    """Reset to the built-in defaults.

    Reuses the module-level _DEFAULT_OPTIONS singleton, avoiding allocation.
    """
    _default_options.set(_DEFAULT_OPTIONS)


@contextmanager
def default_options_context(options: LinkOptions) -> Iterator[None]:
    """Context manager for temporary default options.

    Example:
        >>> with default_options_context(LinkOptions(email=True)):
        ...     link("mail me at user@example.com")
        >>> # Previous defaults restored here

    Thread Safety:
        Only affects the current thread's context. Properly restores the
        previous defaults even if an exception is raised.

    """
    previous = _default_options.get()
    _default_options.set(options)
    try:
        yield
    finally:
        _default_options.set(previous)


__all__ = [
    "HandlerFunc",
    "LinkOptions",
    "OutputMode",
    "default_options_context",
    "get_default_options",
    "reset_default_options",
    "set_default_options",
]
