"""Stylesheet application transform: writes rule declarations into style attributes."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from inlinestyle.document import Document
from inlinestyle.stylesheet import (
    DeclarationBlock,
    Rule,
    merge_declarations,
    parse_declarations,
    parse_stylesheet,
    serialize_declarations,
    sort_rules,
)

logger = logging.getLogger(__name__)


def apply_rule(document: Document, selector: str, declarations: DeclarationBlock) -> int:
    """Merge *declarations* into the style of every element matching *selector*.

    Returns the number of elements updated.  Empty and untranslatable
    selectors update nothing.
    """
    if not selector:
        return 0

    nodes = document.select(selector)
    for node in nodes:
        current = parse_declarations(node.get("style", ""))
        merged = merge_declarations(current, declarations)
        node.set("style", serialize_declarations(merged))
    logger.debug("Rule %r matched %d element(s)", selector, len(nodes))
    return len(nodes)


def apply_rules(document: Document, rules: Iterable[Rule]) -> Document:
    """Apply *rules* in the given order; later rules see earlier results."""
    for rule in rules:
        apply_rule(document, rule.selector, rule.declarations)
    return document


class InlineStylesheetTransform:
    """Inline one stylesheet into a document.

    The stylesheet is parsed when the transform is applied, its rules are
    ordered by ascending specificity (stable on ties), then applied one after
    another.  Because each element's ``style`` attribute is rewritten after
    every matching rule, higher-specificity rules land last and win unless an
    earlier declaration was marked ``!important``.
    """

    def __init__(self, stylesheet: str) -> None:
        self.stylesheet = stylesheet

    def apply(self, document: Document) -> Document:
        rules = sort_rules(parse_stylesheet(self.stylesheet))
        logger.debug("Applying %d rule(s)", len(rules))
        return apply_rules(document, rules)
