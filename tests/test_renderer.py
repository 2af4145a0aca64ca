"""Tests for HtmlLinkRenderer and attribute assembly."""

import pytest

from enlace.config import LinkOptions, OutputMode
from enlace.renderers import HtmlLinkRenderer, LinkRenderer, Safe, add_scheme, markup_text
from enlace.tokens import Email, ExtraScheme, Hashtag, Mention, PhoneMatch, Url

ATTRS = 'class="auto-linker" target="_blank" rel="noopener noreferrer"'


@pytest.fixture
def renderer() -> HtmlLinkRenderer:
    return HtmlLinkRenderer()


class TestAddScheme:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("example.com", "http://example.com"),
            ("http://example.com", "http://example.com"),
            ("https://example.com", "https://example.com"),
            ("ftp://example.com", "ftp://example.com"),
            ("mailto:me@example.com", "mailto:me@example.com"),
            ("tel:5555555555", "tel:5555555555"),
        ],
    )
    def test_add_scheme(self, url: str, expected: str) -> None:
        assert add_scheme(url) == expected


class TestRenderKinds:
    """One test per token kind."""

    def test_url(self, renderer: HtmlLinkRenderer) -> None:
        result = renderer.render_url(Url("example.com"), "example.com", LinkOptions())
        assert result == f'<a href="http://example.com" {ATTRS}>example.com</a>'

    def test_url_display_options(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(strip_prefix=True, truncate=8)
        result = renderer.render_url(Url("https://www.example.com"), "", options)
        assert result == f'<a href="https://www.example.com" {ATTRS}>examp...</a>'

    def test_email(self, renderer: HtmlLinkRenderer) -> None:
        result = renderer.render_email(Email("me@example.com"), "", LinkOptions())
        assert result == '<a href="mailto:me@example.com" class="auto-linker">me@example.com</a>'

    def test_phone(self, renderer: HtmlLinkRenderer) -> None:
        token = PhoneMatch("(555) 555-5555", 0, 14, "5555555555")
        result = renderer.render_phone(token, "", LinkOptions(class_=None))
        assert result == '<a href="tel:5555555555">(555) 555-5555</a>'

    def test_mention(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(mention_prefix="https://x/", new_window=False, rel=None)
        result = renderer.render_mention(Mention("@bob"), "@bob", options)
        assert result == '<a href="https://x/bob" class="auto-linker">@bob</a>'

    def test_hashtag(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(hashtag_prefix="/t/", class_=None, new_window=False, rel=None)
        result = renderer.render_hashtag(Hashtag("tag"), "#tag", options)
        assert result == '<a href="/t/tag">#tag</a>'

    def test_extra(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(class_=None, new_window=False, rel=None)
        result = renderer.render_extra(ExtraScheme("ipfs://Qm1"), "", options)
        assert result == '<a href="ipfs://Qm1">ipfs://Qm1</a>'

    def test_markdown_escapes_quotes(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(class_=None, new_window=False, rel=None)
        result = renderer.render_markdown("t", 'http://x.com/"q"', options)
        assert result == '<a href="http://x.com/&quot;q&quot;">t</a>'

    def test_rel_callable(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(rel=lambda href: f"me {href}", new_window=False, class_=None)
        result = renderer.render_url(Url("x.com"), "", options)
        assert result == '<a href="http://x.com" rel="me http://x.com">x.com</a>'


class TestDispatch:
    def test_render_dispatches(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions()
        assert renderer.render(Url("x.com"), "", options) == renderer.render_url(
            Url("x.com"), "", options
        )
        assert renderer.render(Email("a@x.com"), "", options) == renderer.render_email(
            Email("a@x.com"), "", options
        )

    def test_unknown_token(self, renderer: HtmlLinkRenderer) -> None:
        with pytest.raises(TypeError):
            renderer.render(object(), "", LinkOptions())  # type: ignore[arg-type]

    def test_satisfies_protocol(self, renderer: HtmlLinkRenderer) -> None:
        assert isinstance(renderer, LinkRenderer)


class TestOutputShapes:
    def test_fragments(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(output=OutputMode.FRAGMENTS, class_=None, new_window=False, rel=None)
        result = renderer.render_url(Url("x.com"), "", options)
        assert result == ["<a ", 'href="http://x.com"', ">", "x.com", "</a>"]
        assert markup_text(result) == '<a href="http://x.com">x.com</a>'

    def test_safe(self, renderer: HtmlLinkRenderer) -> None:
        options = LinkOptions(output=OutputMode.SAFE, class_=None, new_window=False, rel=None)
        result = renderer.render_url(Url("x.com"), "", options)
        assert result == [Safe('<a href="http://x.com">'), "x.com", Safe("</a>")]
        assert markup_text(result) == '<a href="http://x.com">x.com</a>'

    def test_safe_str(self) -> None:
        assert str(Safe("<b>")) == "<b>"
