"""Tests for the InlineStyle facade and the inline_html shortcut."""

import httpx
import pytest

from inlinestyle import (
    InlineStyle,
    InlineStyleConfig,
    MalformedDeclaration,
    MalformedStylesheet,
    ResourceFetcher,
    inline_html,
)
from inlinestyle.errors import DocumentError, ResourceNotFound


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _loaded(markup: str, **config) -> InlineStyle:
    inliner = InlineStyle(config=InlineStyleConfig(pretty_print=False, **config))
    inliner.load_html_string(markup)
    return inliner


def _style(inliner: InlineStyle, selector: str) -> str | None:
    return inliner.document.select(selector)[0].get("style")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoading:
    def test_no_document_loaded(self):
        with pytest.raises(DocumentError):
            InlineStyle().get_html()

    def test_load_string(self):
        inliner = _loaded("<p>hi</p>")
        assert "<p>hi</p>" in inliner.get_html()

    def test_control_characters_stripped(self):
        inliner = _loaded("<p>a\x00b\x1fc</p>")
        assert "<p>abc</p>" in inliner.get_html()

    def test_load_file(self, tmp_path):
        path = tmp_path / "mail.html"
        path.write_text("<p>from file</p>", encoding="utf-8")
        inliner = InlineStyle()
        inliner.load_html_file(path)
        assert "from file" in inliner.get_html()

    def test_load_file_honours_meta_charset(self, tmp_path):
        path = tmp_path / "latin.html"
        path.write_bytes(
            b'<html><head><meta charset="iso-8859-1"></head><body><p>caf\xe9</p></body></html>'
        )
        inliner = InlineStyle()
        inliner.load_html_file(path)
        assert "café" in inliner.get_html()

    def test_load_file_defaults_to_utf8(self, tmp_path):
        path = tmp_path / "mail.html"
        path.write_text("<p>café</p>", encoding="utf-8")
        inliner = InlineStyle()
        inliner.load_html_file(path)
        assert "café" in inliner.get_html()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ResourceNotFound):
            InlineStyle().load_html_file(tmp_path / "missing.html")


# ---------------------------------------------------------------------------
# Applying stylesheets and rules
# ---------------------------------------------------------------------------


class TestApplyStylesheet:
    def test_single_stylesheet(self):
        inliner = _loaded('<p class="x">hi</p>')
        inliner.apply_stylesheet("p { color: red; } p.x { color: blue !important; }")
        assert _style(inliner, "p") == "color:blue !important"

    def test_returns_self(self):
        inliner = _loaded("<p>hi</p>")
        assert inliner.apply_stylesheet("p { a: 1 }") is inliner
        assert inliner.apply_rule("p", "b: 2") is inliner
        assert _style(inliner, "p") == "a:1;b:2"

    def test_list_of_stylesheets(self):
        inliner = _loaded('<p id="a">hi</p>')
        inliner.apply_stylesheet(["#a { color: red; margin: 0 }", "p { color: blue }"])
        assert _style(inliner, "p") == "color:blue;margin:0"

    def test_malformed_stylesheet_aborts_batch(self):
        inliner = _loaded("<p>hi</p>")
        with pytest.raises(MalformedStylesheet):
            inliner.apply_stylesheet(["p { color: red }", "p color: blue }", "p { margin: 0 }"])
        assert _style(inliner, "p") == "color:red"

    def test_malformed_declaration(self):
        inliner = _loaded("<p>hi</p>")
        with pytest.raises(MalformedDeclaration):
            inliner.apply_stylesheet("p { color }")

    def test_broken_selector_produces_no_change(self):
        inliner = _loaded("<p>hi</p>")
        before = inliner.get_html()
        inliner.apply_stylesheet(":::broken { color: red }")
        assert inliner.get_html() == before

    def test_apply_rule_empty_selector(self):
        inliner = _loaded("<p>hi</p>")
        inliner.apply_rule("", "color: red")
        assert _style(inliner, "p") is None


class TestStylesheetHelpers:
    def test_parse_and_sort(self):
        rules = InlineStyle.parse_stylesheet("#a { x: 1 } p { x: 2 }")
        ordered = InlineStyle.sort_selectors_on_specificity(rules)
        assert [r.selector for r in ordered] == ["p", "#a"]

    def test_score(self):
        assert InlineStyle.get_score_for_selector("#a.b c") == (1, 1, 1)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


class TestExtractStylesheets:
    def test_style_element(self):
        inliner = _loaded("<html><head><style>body{color:red}</style></head><body></body></html>")
        assert inliner.extract_stylesheets() == ["body{color:red}"]
        assert "<style" not in inliner.get_html()

    def test_base_from_config(self, tmp_path):
        (tmp_path / "a.css").write_text("p{margin:0}", encoding="utf-8")
        inliner = _loaded('<html><head><link href="a.css"></head></html>', base_uri=str(tmp_path))
        assert inliner.extract_stylesheets() == ["p{margin:0}"]
        assert "<link" not in inliner.get_html()

    def test_base_argument_overrides_config(self, tmp_path):
        (tmp_path / "a.css").write_text("p{margin:0}", encoding="utf-8")
        inliner = _loaded('<html><head><link href="a.css"></head></html>', base_uri="/nowhere")
        assert inliner.extract_stylesheets(base=str(tmp_path)) == ["p{margin:0}"]

    def test_unreachable_link_kept(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        fetcher = ResourceFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))
        inliner = InlineStyle(fetcher=fetcher)
        inliner.load_html_string('<html><head><link href="http://cdn.test/a.css"></head></html>')
        assert inliner.extract_stylesheets() == []
        assert "<link" in inliner.get_html()

    def test_with_xpath(self):
        inliner = _loaded("<html><head><style id='keep'>a{}</style><style id='take'>b{}</style></head></html>")
        assert inliner.extract_stylesheets_with_xpath("//style[@id='take']") == ["b{}"]
        assert "a{}" in inliner.get_html()


# ---------------------------------------------------------------------------
# inline_html
# ---------------------------------------------------------------------------


class TestInlineHtml:
    def test_end_to_end(self):
        markup = (
            "<html><head><style>p { color: red } .note { font-size: 12px }</style></head>"
            '<body><p class="note">hi</p><p>there</p></body></html>'
        )
        html = inline_html(markup, config=InlineStyleConfig(pretty_print=False))
        assert '<p class="note" style="color:red;font-size:12px">hi</p>' in html
        assert '<p style="color:red">there</p>' in html
        assert "<style" not in html

    def test_extra_stylesheets_after_embedded(self):
        markup = "<html><head><style>p { color: red }</style></head><body><p>hi</p></body></html>"
        html = inline_html(markup, ["p { color: blue }"], config=InlineStyleConfig(pretty_print=False))
        assert '<p style="color:blue">hi</p>' in html

    def test_without_extraction(self):
        markup = "<html><head><style>p { color: red }</style></head><body><p>hi</p></body></html>"
        html = inline_html(markup, extract=False)
        assert "<style>" in html
        assert "style=" not in html
