"""Hand-written parser for author stylesheets.

Syntax example:
    /* comments are dropped */
    h1, h2 { color: navy; margin: 0 }
    p.note { font-size: 12px !important; }
"""

from __future__ import annotations

import re

from inlinestyle.errors import MalformedStylesheet
from inlinestyle.stylesheet.declarations import parse_declarations
from inlinestyle.stylesheet.model import Rule

__all__ = ["parse_stylesheet", "strip_comments"]

# Non-nesting /* ... */ comments.
_COMMENT_RE = re.compile(r"/\*[^*]*\*+([^/][^*]*\*+)*/")


def strip_comments(source: str) -> str:
    return _COMMENT_RE.sub("", source)


def parse_stylesheet(source: str) -> list[Rule]:
    """Parse stylesheet text into rules, one per selector, in source order.

    Selector groups (``h1, h2 { ... }``) expand into one rule per selector
    sharing a single declaration block.  Empty selectors are kept; they never
    match anything.

    Raises :class:`MalformedStylesheet` when a block has no ``{`` and
    :class:`~inlinestyle.errors.MalformedDeclaration` for a bad declaration.
    """
    rules: list[Rule] = []
    source = strip_comments(source).strip().strip("}")
    for block in source.split("}"):
        if not block.strip():
            continue
        selector_group, brace, body = block.partition("{")
        if not brace:
            raise MalformedStylesheet(
                f"Rule block has no '{{': {block.strip()!r}", block=block
            )
        declarations = parse_declarations(body.strip().strip(";"))
        for selector in selector_group.split(","):
            rules.append(Rule(selector=selector.strip(), declarations=declarations))
    return rules
