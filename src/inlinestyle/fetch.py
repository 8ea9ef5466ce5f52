"""Retrieval of external stylesheets referenced by ``<link>`` elements."""
from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from inlinestyle.config import InlineStyleConfig
from inlinestyle.errors import FetchFailure

logger = logging.getLogger(__name__)

_HTTP_SCHEMES = ("http", "https")

# A stylesheet may only declare its encoding as the very first bytes.
_CHARSET_RULE_RE = re.compile(rb'^@charset "([^"]+)";')
_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def sniff_css_encoding(content: bytes, default: str = "utf-8") -> str:
    """Return the encoding declared by a byte-order mark or leading ``@charset``.

    Unknown encoding names fall back to *default*.
    """
    for bom, encoding in _BOMS:
        if content.startswith(bom):
            return encoding
    match = _CHARSET_RULE_RE.match(content)
    if match is None:
        return default
    name = match.group(1).decode("ascii", errors="replace")
    try:
        return codecs.lookup(name).name
    except LookupError:
        return default


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single fetch: content on success, an error otherwise."""

    uri: str
    content: bytes = b""
    encoding: str = "utf-8"
    error: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding, errors="replace")


class ResourceFetcher:
    """Fetch ``http(s)://`` URIs with :mod:`httpx` and everything else from disk.

    :meth:`fetch` never raises; failures come back as a :class:`FetchResult`
    whose ``error`` is set.
    """

    def __init__(
        self,
        config: InlineStyleConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config or InlineStyleConfig()
        # Built once up front; fetch() is called from several threads at once.
        self._client = client or httpx.Client(
            timeout=self._config.fetch_timeout,
            follow_redirects=True,
            headers={"User-Agent": self._config.user_agent},
        )

    @property
    def client(self) -> httpx.Client:
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ResourceFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, uri: str) -> FetchResult:
        scheme = urlparse(uri).scheme.lower()
        if scheme in _HTTP_SCHEMES:
            result = self._fetch_http(uri)
        else:
            result = self._fetch_file(uri, scheme)
        if not result.ok:
            logger.debug("Fetch failed for %s: %s", uri, result.error)
        return result

    def _fetch_http(self, uri: str) -> FetchResult:
        try:
            resp = self._client.get(uri)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return FetchResult(uri=uri, error=FetchFailure(str(exc), uri=uri, cause=exc))
        if resp.status_code >= 400:
            return FetchResult(
                uri=uri,
                error=FetchFailure(f"HTTP {resp.status_code} for {uri}", uri=uri),
            )
        encoding = resp.charset_encoding or sniff_css_encoding(resp.content)
        return FetchResult(uri=uri, content=resp.content, encoding=encoding)

    def _fetch_file(self, uri: str, scheme: str) -> FetchResult:
        path = unquote(urlparse(uri).path) if scheme == "file" else uri
        try:
            content = Path(path).read_bytes()
        except OSError as exc:
            return FetchResult(uri=uri, error=FetchFailure(str(exc), uri=uri, cause=exc))
        return FetchResult(uri=uri, content=content, encoding=sniff_css_encoding(content))
