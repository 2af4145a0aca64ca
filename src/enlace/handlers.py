"""Token handlers.

A handler decides what an accepted token turns into. Every overridable
entity kind has a slot in the options (``href_handler``,
``mention_handler``, ``hashtag_handler``); when a slot is filled, the
function installed there fully replaces the default rendering.

Handler functions are called as ``fn(candidate, raw_buffer, options,
user_acc)`` and return ``(replacement, user_acc)``. Returning a bare string
is shorthand for leaving the accumulator unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from enlace.errors import HandlerError
from enlace.tokens import Phone

if TYPE_CHECKING:
    from enlace.config import HandlerFunc, LinkOptions
    from enlace.matchers import Matcher
    from enlace.renderers.html import Markup
    from enlace.renderers.protocol import LinkRenderer


@runtime_checkable
class TokenHandler(Protocol):
    """Protocol for turning an accepted candidate into replacement text."""

    def handle(
        self, candidate: str, raw_buffer: str, options: LinkOptions, user_acc: Any
    ) -> tuple[str, Any]:
        """Produce the replacement for ``candidate``.

        Args:
            candidate: The matched text (for mentions, ``@user``; for
                hashtags, ``#tag``; for phones, one number)
            raw_buffer: The whole token the candidate was found in
            options: Active link options
            user_acc: Caller accumulator

        Returns:
            (replacement, user_acc)
        """
        ...


class RenderingHandler:
    """Default handler: classify the candidate again and render it.

    ``emit`` flattens the rendered markup to text; the pipeline uses it to
    remember which links it generated.
    """

    __slots__ = ("_emit", "_matcher", "_renderer")

    def __init__(
        self,
        matcher: Matcher,
        renderer: LinkRenderer,
        emit: Callable[[Markup], str],
    ) -> None:
        self._matcher = matcher
        self._renderer = renderer
        self._emit = emit

    def handle(
        self, candidate: str, raw_buffer: str, options: LinkOptions, user_acc: Any
    ) -> tuple[str, Any]:
        token = self._matcher.match(candidate)
        if token is None:
            return candidate, user_acc
        if isinstance(token, Phone):
            token = token.matches[0]
        return self._emit(self._renderer.render(token, raw_buffer, options)), user_acc


class FunctionHandler:
    """Adapts a user-supplied handler function and enforces its return contract."""

    __slots__ = ("_fn", "_slot")

    def __init__(self, fn: HandlerFunc, slot: str) -> None:
        self._fn = fn
        self._slot = slot

    def handle(
        self, candidate: str, raw_buffer: str, options: LinkOptions, user_acc: Any
    ) -> tuple[str, Any]:
        result = self._fn(candidate, raw_buffer, options, user_acc)
        if isinstance(result, str):
            return result, user_acc
        if isinstance(result, tuple) and len(result) == 2 and isinstance(result[0], str):
            return result
        raise HandlerError(
            self._slot,
            f"expected (replacement, user_acc) or a string, got {type(result).__name__}",
        )


__all__ = ["FunctionHandler", "RenderingHandler", "TokenHandler"]
