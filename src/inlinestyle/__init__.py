"""inlinestyle: move stylesheet rules into inline style attributes."""
from __future__ import annotations

from inlinestyle._version import __version__
from inlinestyle.config import InlineStyleConfig
from inlinestyle.document import Document, compile_selector
from inlinestyle.errors import (
    DocumentError,
    FetchFailure,
    InlineStyleError,
    MalformedDeclaration,
    MalformedStylesheet,
    ResourceNotFound,
    SelectorSyntaxError,
)
from inlinestyle.fetch import FetchResult, ResourceFetcher
from inlinestyle.inliner import InlineStyle, inline_html
from inlinestyle.stylesheet import (
    Declaration,
    Rule,
    Specificity,
    merge_declarations,
    parse_declarations,
    parse_stylesheet,
    score_selector,
    serialize_declarations,
    sort_rules,
)

__all__ = [
    "__version__",
    # Facade
    "InlineStyle",
    "InlineStyleConfig",
    "inline_html",
    # Document / fetch
    "Document",
    "compile_selector",
    "ResourceFetcher",
    "FetchResult",
    # Stylesheet pipeline
    "parse_stylesheet",
    "parse_declarations",
    "serialize_declarations",
    "merge_declarations",
    "score_selector",
    "sort_rules",
    "Declaration",
    "Rule",
    "Specificity",
    # Errors
    "InlineStyleError",
    "MalformedStylesheet",
    "MalformedDeclaration",
    "SelectorSyntaxError",
    "FetchFailure",
    "ResourceNotFound",
    "DocumentError",
]
