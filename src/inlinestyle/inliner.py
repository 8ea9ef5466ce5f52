"""InlineStyle: load a document, pull out its stylesheets, and inline them."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from inlinestyle.config import InlineStyleConfig
from inlinestyle.document import Document, decode_markup, read_markup, strip_control_chars
from inlinestyle.errors import DocumentError
from inlinestyle.fetch import ResourceFetcher
from inlinestyle.stylesheet import (
    Rule,
    Specificity,
    parse_declarations,
    parse_stylesheet,
    score_selector,
    sort_rules,
)
from inlinestyle.transforms import (
    StylesheetExtractor,
    apply_rule,
    extract_with_xpath,
    inline_stylesheets,
)

logger = logging.getLogger(__name__)


class InlineStyle:
    """Stateful inliner bound to one loaded document.

    Typical use::

        inliner = InlineStyle()
        inliner.load_html_string(markup)
        inliner.apply_stylesheet(inliner.extract_stylesheets())
        html = inliner.get_html()
    """

    def __init__(
        self,
        config: InlineStyleConfig | None = None,
        fetcher: ResourceFetcher | None = None,
    ) -> None:
        self.config = config or InlineStyleConfig()
        self.fetcher = fetcher or ResourceFetcher(self.config)
        self._document: Document | None = None

    @property
    def document(self) -> Document:
        if self._document is None:
            raise DocumentError("No document loaded")
        return self._document

    # --- loading -------------------------------------------------------------

    def load_html_file(self, path: str | Path) -> None:
        """Load markup from *path*, honouring its BOM or ``<meta>`` charset.

        Raises ``ResourceNotFound`` if the file cannot be read.
        """
        self.load_html_string(decode_markup(read_markup(path)))

    def load_html_string(self, markup: str) -> None:
        if self.config.strip_control_chars:
            markup = strip_control_chars(markup)
        self._document = Document.from_string(markup)

    # --- inlining ------------------------------------------------------------

    def apply_stylesheet(self, stylesheet: str | Iterable[str]) -> InlineStyle:
        """Inline one stylesheet, or several in the given order.

        Each stylesheet is parsed, ordered and applied before the next one is
        looked at, so a malformed stylesheet leaves the earlier ones applied.
        """
        stylesheets = [stylesheet] if isinstance(stylesheet, str) else list(stylesheet)
        inline_stylesheets(self.document, stylesheets)
        logger.info("Applied %d stylesheet(s)", len(stylesheets))
        return self

    def apply_rule(self, selector: str, style: str) -> InlineStyle:
        """Apply a single rule given as a selector and a declaration string."""
        apply_rule(self.document, selector, parse_declarations(style))
        return self

    def get_html(self) -> str:
        return self.document.to_html(pretty_print=self.config.pretty_print)

    # --- extraction ----------------------------------------------------------

    def extract_stylesheets(
        self, node: etree._Element | None = None, base: str | None = None
    ) -> list[str]:
        """Remove ``<style>`` and fetchable ``<link>`` nodes and return their CSS.

        *node* defaults to the whole document and *base* to ``config.base_uri``.
        """
        extractor = StylesheetExtractor(
            self.fetcher,
            base_uri=self.config.base_uri if base is None else base,
            max_workers=self.config.max_fetch_workers,
        )
        return extractor.extract(self.document.root if node is None else node)

    def extract_stylesheets_with_xpath(self, query: str) -> list[str]:
        return extract_with_xpath(self.document, query)

    # --- stylesheet helpers --------------------------------------------------

    @staticmethod
    def parse_stylesheet(stylesheet: str) -> list[Rule]:
        return parse_stylesheet(stylesheet)

    @staticmethod
    def sort_selectors_on_specificity(rules: Iterable[Rule]) -> list[Rule]:
        return sort_rules(rules)

    @staticmethod
    def get_score_for_selector(selector: str) -> Specificity:
        return score_selector(selector)


def inline_html(
    markup: str,
    stylesheets: Iterable[str] | None = None,
    extract: bool = True,
    config: InlineStyleConfig | None = None,
    fetcher: ResourceFetcher | None = None,
) -> str:
    """Inline *markup* in one call and return the resulting HTML.

    Embedded stylesheets (when *extract* is set) are applied first, followed
    by any extra *stylesheets*.
    """
    inliner = InlineStyle(config=config, fetcher=fetcher)
    try:
        inliner.load_html_string(markup)
        sheets: list[str] = inliner.extract_stylesheets() if extract else []
        sheets.extend(stylesheets or [])
        inliner.apply_stylesheet(sheets)
    finally:
        if fetcher is None:
            inliner.fetcher.close()
    return inliner.get_html()
