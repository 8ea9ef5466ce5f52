"""Selector specificity scoring and rule sequencing."""

from __future__ import annotations

import re
from collections.abc import Iterable

from inlinestyle.stylesheet.model import Rule, Specificity

__all__ = ["score_selector", "sort_rules"]

# A pattern-counting approximation of CSS specificity.  Existing stylesheets
# are tuned against these counts, so the quirks are kept as they are (for
# instance ``:[^not]`` excludes any pseudo-class starting with n, o or t).
_ID_RE = re.compile(r"#\w", re.IGNORECASE | re.ASCII)
_CLASS_RE = re.compile(r"\.\w", re.IGNORECASE | re.ASCII)
_TYPE_RE = re.compile(r"^\w|\ \w|\(\w|\:[^not]", re.IGNORECASE | re.ASCII)


def score_selector(selector: str) -> Specificity:
    """Return the (ids, classes, types) specificity of *selector*."""
    return Specificity(
        ids=len(_ID_RE.findall(selector)),
        classes=len(_CLASS_RE.findall(selector)),
        types=len(_TYPE_RE.findall(selector)),
    )


def sort_rules(rules: Iterable[Rule]) -> list[Rule]:
    """Order *rules* by ascending specificity.

    ``sorted`` is stable, so rules of equal specificity keep source order and
    the later one is applied last.
    """
    return sorted(rules, key=lambda rule: score_selector(rule.selector))
