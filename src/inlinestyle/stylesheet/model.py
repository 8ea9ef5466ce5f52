"""Stylesheet model: Declaration, Rule, and Specificity types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

_WHITESPACE_RE = re.compile(r"\s+")


def is_important(value: str) -> bool:
    """Return True if *value* ends with ``!important``.

    The test ignores case and any whitespace, so ``red ! IMPORTANT`` counts.
    """
    return _WHITESPACE_RE.sub("", value).lower().endswith("!important")


@dataclass(frozen=True)
class Declaration:
    """The value half of one ``property: value`` pair.

    A trailing ``!important`` marker is kept inside ``value`` so the
    declaration serializes back exactly as it was written.
    """

    value: str

    @property
    def important(self) -> bool:
        return is_important(self.value)

    def __str__(self) -> str:
        return self.value


# Property name (lower-cased) -> declaration.
DeclarationBlock = dict[str, Declaration]


@dataclass(frozen=True)
class Rule:
    """A single selector paired with its declaration block.

    Rules expanded from one comma-separated selector group share the same
    ``declarations`` object; it must be treated as read-only.
    """

    selector: str
    declarations: DeclarationBlock


class Specificity(NamedTuple):
    """Selector weight, compared lexicographically (ids first)."""

    ids: int
    classes: int
    types: int
