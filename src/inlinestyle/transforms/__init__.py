from collections.abc import Iterable

from inlinestyle.document import Document
from inlinestyle.transforms.base import Transform
from inlinestyle.transforms.extract import StylesheetExtractor, extract_with_xpath, resolve_href
from inlinestyle.transforms.stylesheet import InlineStylesheetTransform, apply_rule, apply_rules


def apply_transforms(document: Document, transforms: Iterable[Transform]) -> Document:
    """Apply *transforms* to *document* in order."""
    for t in transforms:
        document = t.apply(document)
    return document


def inline_stylesheets(document: Document, stylesheets: Iterable[str]) -> Document:
    """Inline each stylesheet in turn; each one is fully applied before the next."""
    return apply_transforms(
        document, [InlineStylesheetTransform(ss) for ss in stylesheets]
    )
