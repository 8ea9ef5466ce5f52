"""Stylesheet extraction: pull <style> and <link> stylesheets out of a document."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from lxml import etree

from inlinestyle.document import Document, remove_node
from inlinestyle.fetch import FetchResult, ResourceFetcher

logger = logging.getLogger(__name__)


def resolve_href(href: str, base_uri: str = "") -> str:
    """Prefix a relative *href* with *base_uri*; absolute URIs pass through."""
    if base_uri and "://" not in href:
        return f"{base_uri.rstrip('/')}/{href.lstrip('/')}"
    return href


def _text_content(node: etree._Element) -> str:
    return str(node.xpath("string()"))


class StylesheetExtractor:
    """Collect stylesheets from a subtree and detach the nodes they came from.

    ``<style>`` elements contribute their text.  ``<link href>`` elements are
    fetched; only a successful, non-empty fetch consumes the link, otherwise
    it stays in the document.  The result is in document order even when the
    links are fetched concurrently.
    """

    def __init__(
        self,
        fetcher: ResourceFetcher,
        base_uri: str = "",
        max_workers: int = 1,
    ) -> None:
        self.fetcher = fetcher
        self.base_uri = base_uri
        self.max_workers = max_workers

    def extract(self, node: etree._Element) -> list[str]:
        # (node, style text); links carry None until fetched.
        found: list[tuple[etree._Element, str | None]] = []
        uris: list[str] = []

        # Pre-order walk; nothing is detached until the walk is over.
        stack = [node]
        while stack:
            current = stack.pop()
            name = current.tag.lower()
            if name == "style":
                found.append((current, _text_content(current)))
            elif name == "link" and current.get("href") is not None:
                found.append((current, None))
                uris.append(resolve_href(current.get("href"), self.base_uri))
            stack.extend(
                reversed([child for child in current if isinstance(child.tag, str)])
            )

        results = iter(self._fetch_all(uris))
        stylesheets: list[str] = []
        consumed: list[etree._Element] = []
        for candidate, text in found:
            if text is None:
                result = next(results)
                if not (result.ok and result.content):
                    continue
                text = result.text
            stylesheets.append(text)
            consumed.append(candidate)

        for candidate in consumed:
            remove_node(candidate)
        logger.info("Extracted %d stylesheet(s)", len(stylesheets))
        return stylesheets

    def extract_from(self, document: Document) -> list[str]:
        return self.extract(document.root)

    def _fetch_all(self, uris: list[str]) -> list[FetchResult]:
        if self.max_workers <= 1 or len(uris) <= 1:
            return [self.fetcher.fetch(uri) for uri in uris]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(uris))) as pool:
            return list(pool.map(self.fetcher.fetch, uris))


def extract_with_xpath(document: Document, query: str) -> list[str]:
    """Take the text of every node selected by an XPath *query* and remove the nodes."""
    nodes = [n for n in document.xpath(query) if isinstance(n, etree._Element)]
    stylesheets = [_text_content(n) for n in nodes]
    for n in nodes:
        document.remove(n)
    return stylesheets
