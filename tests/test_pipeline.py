"""Tests for the pass pipeline, handlers and per-pass logging."""

import logging

import pytest

from enlace.config import LinkOptions, OutputMode
from enlace.errors import HandlerError
from enlace.handlers import FunctionHandler, RenderingHandler, TokenHandler
from enlace.matchers import PhoneMatcher, UrlMatcher
from enlace.pipeline import PASS_ORDER, EntityPass, Pipeline, assemble
from enlace.renderers import HtmlLinkRenderer, Safe
from enlace.tlds import load_tlds
from enlace.tokens import Url

TLDS = load_tlds()


def bracket(candidate, raw, options, acc):
    return f"[{candidate}]", acc


class TestPassOrder:
    """Passes run in a fixed order."""

    def test_order(self) -> None:
        assert PASS_ORDER == ("phone", "mention", "extra", "markdown", "email", "url", "hashtag")

    def test_phone_before_url(self) -> None:
        """A dotted phone number is claimed by the phone pass."""
        result, _ = Pipeline(LinkOptions(phone=True)).run("555.555.5555")
        assert result == '<a href="tel:5555555555" class="auto-linker">555.555.5555</a>'

    def test_email_before_url(self) -> None:
        """Dotted local parts are linked as emails, not URLs."""
        result, _ = Pipeline(LinkOptions(email=True)).run("first.last@example.com")
        assert result.startswith('<a href="mailto:first.last@example.com"')

    def test_mention_before_email(self) -> None:
        """Remote mentions are claimed before the email pass sees them."""
        options = LinkOptions(mention=True, mention_prefix="/u/", email=True)
        result, _ = Pipeline(options).run("@bob@example.com")
        assert 'href="/u/bob@example.com"' in result
        assert "mailto:" not in result


class TestEntityPass:
    """A single pass over the text."""

    def test_counts_replacements(self) -> None:
        entity_pass = EntityPass(
            "url", UrlMatcher(TLDS), FunctionHandler(bracket, "href_handler"), LinkOptions()
        )
        assert entity_pass.run("a.com b x.org", None) == ("[a.com] b [x.org]", None)
        assert entity_pass.replaced == 2

    def test_phone_spans_in_line(self) -> None:
        """Every phone number in a line is replaced, text around them is kept."""
        entity_pass = EntityPass(
            "phone",
            PhoneMatcher(),
            FunctionHandler(bracket, "phone"),
            LinkOptions(),
            split_on_space=False,
        )
        result, _ = entity_pass.run("call 555-555-5555 or 555-555-1234 now", None)
        assert result == "call [555-555-5555] or [555-555-1234] now"
        assert entity_pass.replaced == 2

    def test_rejected_token_unchanged(self) -> None:
        entity_pass = EntityPass(
            "url", UrlMatcher(TLDS), FunctionHandler(bracket, "href_handler"), LinkOptions()
        )
        assert entity_pass.run("notes.txt", None) == ("notes.txt", None)
        assert entity_pass.replaced == 0

    def test_generated_offsets(self) -> None:
        """Handler output positions are reported in the new text."""
        entity_pass = EntityPass(
            "url", UrlMatcher(TLDS), FunctionHandler(bracket, "href_handler"), LinkOptions()
        )
        entity_pass.run("a.com b x.org", None)
        assert entity_pass.generated == [(0, 7, "[a.com]"), (10, 17, "[x.org]")]

    def test_generated_offsets_within_token(self) -> None:
        """Several phone numbers in one token get their own offsets."""
        entity_pass = EntityPass(
            "phone",
            PhoneMatcher(),
            FunctionHandler(bracket, "phone"),
            LinkOptions(),
            split_on_space=False,
        )
        entity_pass.run("call 555-555-5555 or 555-555-1234 now", None)
        assert entity_pass.generated == [
            (5, 19, "[555-555-5555]"),
            (23, 37, "[555-555-1234]"),
        ]


class TestHandlers:
    """Handler adapters."""

    def test_function_handler_tuple(self) -> None:
        handler = FunctionHandler(lambda c, r, o, a: (c * 2, a + 1), "href_handler")
        assert handler.handle("x", "x", LinkOptions(), 0) == ("xx", 1)

    def test_function_handler_string(self) -> None:
        handler = FunctionHandler(lambda c, r, o, a: c.upper(), "href_handler")
        assert handler.handle("x", "x", LinkOptions(), "acc") == ("X", "acc")

    @pytest.mark.parametrize("bad", [None, 1, ("a",), (1, 2), ["a", 1]])
    def test_function_handler_contract(self, bad: object) -> None:
        handler = FunctionHandler(lambda c, r, o, a: bad, "mention_handler")
        with pytest.raises(HandlerError) as exc_info:
            handler.handle("@x", "@x", LinkOptions(), None)
        assert exc_info.value.handler == "mention_handler"

    def test_rendering_handler(self) -> None:
        emitted = []

        def emit(markup):
            emitted.append(markup)
            return str(markup)

        handler = RenderingHandler(UrlMatcher(TLDS), HtmlLinkRenderer(), emit)
        replacement, acc = handler.handle("x.com", "x.com", LinkOptions(), 7)
        assert acc == 7
        assert replacement.startswith('<a href="http://x.com"')
        assert emitted == [replacement]

    def test_handlers_satisfy_protocol(self) -> None:
        assert isinstance(FunctionHandler(bracket, "href_handler"), TokenHandler)
        handler = RenderingHandler(UrlMatcher(TLDS), HtmlLinkRenderer(), str)
        assert isinstance(handler, TokenHandler)


class TestCustomRenderer:
    """The renderer can be swapped out."""

    def test_subclass(self) -> None:
        class ShoutingRenderer(HtmlLinkRenderer):
            def render_url(self, token, raw, options):
                return f"<{token.text.upper()}>"

        result, _ = Pipeline(LinkOptions(), renderer=ShoutingRenderer()).run("see x.com")
        assert result == "see <X.COM>"

    def test_custom_tlds(self) -> None:
        pipeline = Pipeline(LinkOptions(href_handler=bracket), tlds=frozenset({"internal"}))
        assert pipeline.run("wiki.internal x.com")[0] == "[wiki.internal] x.com"


class TestAssemble:
    """Final output shaping."""

    def test_text_mode_returns_text(self) -> None:
        assert assemble("abc", [], OutputMode.TEXT) == "abc"

    def test_only_listed_spans_are_split(self) -> None:
        """Identical markup outside the listed spans stays plain."""
        generated = '<a href="x">x</a>'
        markup = [Safe('<a href="x">'), "x", Safe("</a>")]
        text = f"{generated} and {generated}!"
        start = len(generated) + len(" and ")
        links = [(start, start + len(generated), markup)]
        assert assemble(text, links, OutputMode.SAFE) == [f"{generated} and ", *markup, "!"]


class TestLinkSpans:
    """Generated links are followed through every later pass."""

    def test_existing_identical_anchor_stays_plain(self) -> None:
        existing, _ = Pipeline(LinkOptions()).run("foo.com")
        result, _ = Pipeline(LinkOptions(output=OutputMode.SAFE)).run(f"foo.com {existing}")
        assert len([f for f in result if isinstance(f, Safe)]) == 2
        assert result[-1] == " " + existing

    def test_link_shifted_by_later_pass(self) -> None:
        """A phone link stays split after the URL pass grows the text before it."""
        options = LinkOptions(phone=True, output=OutputMode.SAFE)
        result, _ = Pipeline(options).run("a.com 555-555-5555")
        assert len([f for f in result if isinstance(f, Safe)]) == 4
        assert [f for f in result if not isinstance(f, Safe)] == ["a.com", " ", "555-555-5555"]

    def test_markdown_link_tracked(self) -> None:
        options = LinkOptions(markdown=True, output=OutputMode.SAFE)
        result, _ = Pipeline(options).run("see [docs](http://x.com) and y.com")
        assert [f for f in result if not isinstance(f, Safe)] == ["see ", "docs", " and ", "y.com"]

    def test_custom_handler_output_stays_plain(self) -> None:
        options = LinkOptions(href_handler=bracket, output=OutputMode.SAFE)
        result, _ = Pipeline(options).run("a.com b")
        assert result == ["[a.com] b"]


class TestLogging:
    """Each pass logs at DEBUG."""

    def test_pass_counts_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="enlace")
        Pipeline(LinkOptions(email=True)).run("a.com b.com me@example.com")
        assert "email pass replaced 1 tokens" in caplog.messages
        assert "url pass replaced 2 tokens" in caplog.messages

    def test_markdown_count_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="enlace")
        Pipeline(LinkOptions(markdown=True)).run("[a](x.com) [b](y.com)")
        assert "markdown pass replaced 2 links" in caplog.messages

    def test_disabled_passes_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="enlace")
        Pipeline(LinkOptions()).run("hello")
        assert caplog.messages == ["url pass replaced 0 tokens"]

    def test_excluded_url_pass_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="enlace")
        Pipeline(LinkOptions(exclude_pattern="```")).run("```x.com")
        assert any("url pass skipped" in message for message in caplog.messages)

    def test_logger_name(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="enlace")
        Pipeline(LinkOptions()).run("x.com")
        assert {record.name for record in caplog.records} == {"enlace.pipeline"}
