from inlinestyle.stylesheet.declarations import (
    merge_declarations,
    parse_declarations,
    serialize_declarations,
)
from inlinestyle.stylesheet.model import (
    Declaration,
    DeclarationBlock,
    Rule,
    Specificity,
    is_important,
)
from inlinestyle.stylesheet.parser import parse_stylesheet
from inlinestyle.stylesheet.specificity import score_selector, sort_rules

__all__ = [
    "parse_stylesheet",
    "parse_declarations",
    "serialize_declarations",
    "merge_declarations",
    "score_selector",
    "sort_rules",
    "is_important",
    "Declaration",
    "DeclarationBlock",
    "Rule",
    "Specificity",
]
