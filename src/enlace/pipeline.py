"""Multi-pass link pipeline.

Runs one scanner pass per enabled entity kind, always in the same order:

    phone -> mention -> extra -> markdown -> email -> url -> hashtag

The order carries meaning. Phone runs first because its grammar tolerates
embedded spaces. Markdown runs before email and URL so bracket syntax is
rewritten whole. URL runs before hashtag so ``example.com#frag`` is linked as
a URL before the hashtag grammar can see ``#frag``. Links produced by one
pass are ordinary anchors to the passes after it, so they are never linked
twice.

In fragment output modes, the spans of generated links are carried through
every later pass by offset, so an anchor that was already in the input is
never mistaken for a generated one, even when their markup is identical.

Thread Safety:
A Pipeline holds only immutable configuration (options, TLD set, matchers,
renderer). Per-call state (handlers, the generated-link registry and spans)
is created fresh in run(), so one Pipeline can serve concurrent calls.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from enlace.config import LinkOptions, OutputMode
from enlace.handlers import FunctionHandler, RenderingHandler, TokenHandler
from enlace.lexer import Replacement, Scanner
from enlace.markdown import rewrite_markdown
from enlace.matchers import (
    EmailMatcher,
    ExtraSchemeMatcher,
    HashtagMatcher,
    Matcher,
    MentionMatcher,
    PhoneMatcher,
    UrlMatcher,
)
from enlace.renderers.html import Fragment, HtmlLinkRenderer, Markup, markup_text
from enlace.renderers.protocol import LinkRenderer
from enlace.tlds import TldSet, load_tlds
from enlace.tokens import Email, ExtraScheme, Hashtag, Mention, Phone, RecognizedToken, Url
from enlace.utils.logger import get_logger

logger = get_logger(__name__)

PASS_ORDER: tuple[str, ...] = ("phone", "mention", "extra", "markdown", "email", "url", "hashtag")

# Option slot whose handler replaces the default accept path, per pass
_OVERRIDE_SLOTS = {
    "url": "href_handler",
    "mention": "mention_handler",
    "hashtag": "hashtag_handler",
}

# (start, end, markup) of a generated link in the current text
LinkSpan = tuple[int, int, Markup]


class EntityPass:
    """One scan of the text for a single entity kind.

    Feeds each candidate token to the matcher; accepted spans are replaced
    by the handler's output and everything else in the token is kept.

    After run(), ``replacements`` maps each processed token to its output
    span and ``generated`` lists the ``(start, end, text)`` of every handler
    output in the new text.
    """

    __slots__ = (
        "_handler",
        "_matcher",
        "_options",
        "_pieces",
        "_scanner",
        "generated",
        "name",
        "replaced",
        "replacements",
    )

    def __init__(
        self,
        name: str,
        matcher: Matcher,
        handler: TokenHandler,
        options: LinkOptions,
        *,
        split_on_space: bool = True,
    ) -> None:
        self.name = name
        self.replaced = 0
        self.replacements: list[Replacement] = []
        self.generated: list[tuple[int, int, str]] = []
        self._pieces: list[list[tuple[int, str]]] = []
        self._matcher = matcher
        self._handler = handler
        self._options = options
        self._scanner = Scanner(self._process, split_on_space=split_on_space)

    def run(self, text: str, user_acc: Any) -> tuple[str, Any]:
        self._pieces = []
        text, user_acc, self.replacements = self._scanner.scan_with_replacements(
            text, user_acc
        )
        # One pieces list per processor call, so they line up with replacements
        self.generated = [
            (r.start + offset, r.start + offset + len(piece), piece)
            for r, pieces in zip(self.replacements, self._pieces, strict=True)
            for offset, piece in pieces
        ]
        return text, user_acc

    def _process(self, buffer: str, user_acc: Any) -> tuple[str, Any]:
        pieces: list[tuple[int, str]] = []
        self._pieces.append(pieces)
        token = self._matcher.match(buffer)
        if token is None:
            return buffer, user_acc

        parts: list[str] = []
        pos = 0
        length = 0
        for start, end, candidate in _spans(token):
            head = buffer[pos:start]
            replacement, user_acc = self._handler.handle(
                candidate, buffer, self._options, user_acc
            )
            parts.append(head)
            parts.append(replacement)
            length += len(head)
            pieces.append((length, replacement))
            length += len(replacement)
            pos = end
            self.replaced += 1
        parts.append(buffer[pos:])
        return "".join(parts), user_acc


def _spans(token: RecognizedToken) -> Iterator[tuple[int, int, str]]:
    """(start, end, matched_text) of each replaceable span within the buffer."""
    match token:
        case Phone():
            for m in token.matches:
                yield m.start, m.end, m.text
            return
        case Url():
            text = token.text
        case Email():
            text = token.address
        case Mention():
            text = token.handle
        case Hashtag():
            text = f"#{token.tag}"
        case ExtraScheme():
            text = token.uri
    yield 0, len(text), text


class Pipeline:
    """Configured link pipeline.

    Usage:
        >>> pipeline = Pipeline(LinkOptions(email=True))
        >>> text, acc = pipeline.run("write to me@example.com", None)

    """

    __slots__ = ("_matchers", "_options", "_renderer", "_tlds")

    def __init__(
        self,
        options: LinkOptions,
        *,
        tlds: TldSet | None = None,
        renderer: LinkRenderer | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            options: Link options
            tlds: Known TLDs (defaults to the bundled list)
            renderer: Link renderer (defaults to HtmlLinkRenderer)
        """
        self._options = options
        self._tlds = tlds if tlds is not None else load_tlds()
        self._renderer = renderer if renderer is not None else HtmlLinkRenderer()
        self._matchers: dict[str, Matcher] = {
            "phone": PhoneMatcher(),
            "mention": MentionMatcher(),
            "extra": ExtraSchemeMatcher(self._tlds),
            "email": EmailMatcher(self._tlds),
            "url": UrlMatcher(self._tlds, scheme=options.scheme),
            "hashtag": HashtagMatcher(),
        }

    @property
    def options(self) -> LinkOptions:
        return self._options

    def run(self, text: str, user_acc: Any = None) -> tuple[str | list[Fragment], Any]:
        """Run every enabled pass over ``text``.

        Args:
            text: Input text
            user_acc: Opaque accumulator handed to custom handlers

        Returns:
            (result, user_acc); result is a string in TEXT output mode and a
            flat fragment list otherwise
        """
        options = self._options
        registry: dict[str, Markup] = {}
        links: list[LinkSpan] = []
        track = options.output is not OutputMode.TEXT

        def emit(markup: Markup) -> str:
            rendered = markup_text(markup)
            if not isinstance(markup, str):
                registry[rendered] = markup
            return rendered

        for name in PASS_ORDER:
            if not getattr(options, name):
                continue

            if name == "markdown":
                text, replacements = rewrite_markdown(
                    text, lambda t, u: emit(self._renderer.render_markdown(t, u, options))
                )
                if track:
                    generated = [(r.start, r.end, text[r.start : r.end]) for r in replacements]
                    links = _carry(links, replacements, generated, registry)
                logger.debug("markdown pass replaced %d links", len(replacements))
                continue

            if name == "url" and options.exclude_pattern and text.startswith(options.exclude_pattern):
                logger.debug("url pass skipped: text starts with %r", options.exclude_pattern)
                continue

            entity_pass = EntityPass(
                name,
                self._matchers[name],
                self._handler_for(name, emit),
                options,
                split_on_space=name != "phone",
            )
            text, user_acc = entity_pass.run(text, user_acc)
            if track:
                links = _carry(links, entity_pass.replacements, entity_pass.generated, registry)
            logger.debug("%s pass replaced %d tokens", name, entity_pass.replaced)

        return assemble(text, links, options.output), user_acc

    def _handler_for(self, name: str, emit: Any) -> TokenHandler:
        slot = _OVERRIDE_SLOTS.get(name)
        if slot is not None:
            fn = getattr(self._options, slot)
            if fn is not None:
                return FunctionHandler(fn, slot)
        return RenderingHandler(self._matchers[name], self._renderer, emit)


def _carry(
    links: list[LinkSpan],
    replacements: Sequence[Replacement],
    generated: Sequence[tuple[int, int, str]],
    registry: dict[str, Markup],
) -> list[LinkSpan]:
    """Move link spans through one pass and add the links it generated.

    Both ``links`` and ``replacements`` are in text order. A link that a
    replacement overlaps no longer exists in the new text and is dropped.
    """
    carried: list[LinkSpan] = []
    delta = 0
    i = 0
    for start, end, markup in links:
        while i < len(replacements) and replacements[i].source_end <= start:
            r = replacements[i]
            delta += (r.end - r.start) - (r.source_end - r.source_start)
            i += 1
        if i < len(replacements) and replacements[i].source_start < end:
            continue
        carried.append((start + delta, end + delta, markup))

    # Handler output that is not rendered markup (a custom handler's string)
    # stays plain text
    carried.extend((start, end, registry[s]) for start, end, s in generated if s in registry)
    carried.sort(key=lambda span: span[0])
    return carried


def assemble(text: str, links: Sequence[LinkSpan], output: OutputMode) -> str | list[Fragment]:
    """Shape the final text for the requested output mode.

    In fragment modes, each ``(start, end, markup)`` span of a link generated
    during this call is expanded back into its rendered fragments; all other
    text, including anchors that were already in the input, stays plain.
    """
    if output is OutputMode.TEXT:
        return text

    result: list[Fragment] = []
    pos = 0
    for start, end, markup in links:
        if start > pos:
            result.append(text[pos:start])
        result.extend(markup)
        pos = end
    if pos < len(text):
        result.append(text[pos:])
    return result


__all__ = ["PASS_ORDER", "EntityPass", "Pipeline", "assemble"]
