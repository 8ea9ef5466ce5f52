"""Document model: a thin wrapper around an lxml HTML tree.

Selectors are translated to XPath with cssselect.  Translation failures are
returned as :class:`SelectorSyntaxError` values instead of being raised, so
callers decide explicitly how to recover.
"""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import lxml.html
from lxml import etree
from lxml.cssselect import CSSSelector, SelectorError

from inlinestyle.errors import DocumentError, ResourceNotFound, SelectorSyntaxError

logger = logging.getLogger(__name__)

# Characters that are illegal in XML 1.0 and make libxml2 truncate input.
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]+")

# Declared charset in <meta charset=...> or <meta http-equiv ... content="...; charset=...">.
_META_CHARSET_RE = re.compile(rb"""<meta[^>]+charset\s*=\s*["']?\s*([-\w.:]+)""", re.IGNORECASE)
_PRESCAN_BYTES = 1024
_WIDE_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)


def strip_control_chars(markup: str) -> str:
    return _CONTROL_CHARS_RE.sub("", markup)


def sniff_html_encoding(markup: bytes, default: str = "utf-8") -> str:
    """Return the encoding of raw markup from its BOM or ``<meta>`` charset.

    Only the first kilobyte is scanned.  Unknown charset names fall back to
    *default*.
    """
    if markup.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if markup.startswith(_WIDE_BOMS):
        return "utf-16"
    match = _META_CHARSET_RE.search(markup[:_PRESCAN_BYTES])
    if match is None:
        return default
    try:
        return codecs.lookup(match.group(1).decode("ascii")).name
    except (LookupError, UnicodeDecodeError):
        return default


def decode_markup(markup: bytes) -> str:
    """Decode raw markup using :func:`sniff_html_encoding`."""
    return markup.decode(sniff_html_encoding(markup), errors="replace")


@dataclass(frozen=True)
class CompiledSelector:
    """A selector translated into an executable XPath query."""

    selector: str
    query: CSSSelector

    @property
    def xpath(self) -> str:
        return self.query.path

    def match(self, root: etree._Element) -> list[etree._Element]:
        """Return matching elements in document order, without duplicates."""
        return self.query(root)


def compile_selector(selector: str) -> CompiledSelector | SelectorSyntaxError:
    """Translate *selector* into a query, or return the error describing why not."""
    try:
        query = CSSSelector(selector, translator="html")
    except (SelectorError, etree.XPathError) as exc:
        return SelectorSyntaxError(
            f"Cannot translate selector {selector!r}: {exc}",
            selector=selector,
            cause=exc,
        )
    return CompiledSelector(selector=selector, query=query)


def read_markup(path: str | Path) -> bytes:
    """Read a markup file as raw bytes so its declared charset can be honoured.

    Raises :class:`ResourceNotFound` if the file cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ResourceNotFound(f"File could not be found: {path}", path=str(path), cause=exc) from exc


def remove_node(node: etree._Element) -> None:
    """Detach *node* from its parent, keeping the text that follows it."""
    parent = node.getparent()
    if parent is None:
        return
    if node.tail:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
    parent.remove(node)


class Document:
    """A mutable HTML document."""

    def __init__(self, root: lxml.html.HtmlElement) -> None:
        self.root = root

    @classmethod
    def from_string(cls, markup: str | bytes) -> Document:
        """Parse *markup* into a document.

        Bytes are decoded with the charset announced by a BOM or ``<meta>``
        tag, falling back to UTF-8.  Fragments are wrapped in
        ``<html><body>`` the way browsers do it.

        Raises :class:`DocumentError` if nothing can be parsed.
        """
        if isinstance(markup, bytes):
            markup = decode_markup(markup)
        try:
            try:
                root = lxml.html.document_fromstring(markup)
            except ValueError:
                # lxml refuses str input carrying an XML encoding declaration.
                parser = lxml.html.HTMLParser(encoding="utf-8")
                root = lxml.html.document_fromstring(markup.encode("utf-8"), parser=parser)
        except (etree.ParserError, etree.XMLSyntaxError) as exc:
            raise DocumentError(f"Cannot parse document: {exc}", cause=exc) from exc
        return cls(root)

    # --- traversal -----------------------------------------------------------

    def nodes(self) -> Iterator[etree._Element]:
        """Yield every element in pre-order, skipping comments and PIs."""
        for node in self.root.iter():
            if isinstance(node.tag, str):
                yield node

    def select(self, selector: str) -> list[etree._Element]:
        """Return the elements matching a CSS *selector*.

        An untranslatable selector matches nothing.
        """
        compiled = compile_selector(selector)
        if isinstance(compiled, SelectorSyntaxError):
            logger.debug("Skipping selector %r: %s", selector, compiled)
            return []
        return compiled.match(self.root)

    def xpath(self, query: str) -> list:
        try:
            return self.root.xpath(query)
        except etree.XPathError as exc:
            raise DocumentError(f"Invalid XPath query {query!r}: {exc}", cause=exc) from exc

    def remove(self, node: etree._Element) -> None:
        remove_node(node)

    # --- serialization -------------------------------------------------------

    def to_html(self, pretty_print: bool = True) -> str:
        """Serialize the document, keeping its doctype if it had one."""
        return etree.tostring(
            self.root.getroottree(),
            method="html",
            encoding="unicode",
            pretty_print=pretty_print,
        )
