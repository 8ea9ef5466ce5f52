"""Codec for ``prop:value;...`` declaration strings and the !important merge."""

from __future__ import annotations

from inlinestyle.errors import MalformedDeclaration
from inlinestyle.stylesheet.model import Declaration, DeclarationBlock

__all__ = ["parse_declarations", "serialize_declarations", "merge_declarations"]


def parse_declarations(text: str) -> DeclarationBlock:
    """Decode a declaration string (rule body or ``style`` attribute).

    Only the first colon separates property from value, so values such as
    ``url(http://example.com/a.png)`` survive intact.  Property names are
    lower-cased.

    Raises :class:`MalformedDeclaration` for a segment without a colon.
    """
    block: DeclarationBlock = {}
    text = text.strip().strip(";")
    if not text:
        return block
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        prop, sep, value = segment.partition(":")
        prop = prop.strip().lower()
        if not sep or not prop:
            raise MalformedDeclaration(
                f"Invalid declaration: {segment!r}", declaration=segment
            )
        block[prop] = Declaration(value=value.strip())
    return block


def serialize_declarations(block: DeclarationBlock) -> str:
    """Encode *block* as ``prop:value`` pairs joined by ``;``."""
    return ";".join(f"{prop}:{decl.value}" for prop, decl in block.items())


def merge_declarations(
    base: DeclarationBlock, incoming: DeclarationBlock
) -> DeclarationBlock:
    """Merge *incoming* on top of *base* and return a new block.

    A property already marked important in *base* is never replaced, even by
    an incoming important value: the first important declaration wins.
    Every other incoming property is added or overwrites the base value.
    """
    merged = dict(base)
    for prop, decl in incoming.items():
        existing = merged.get(prop)
        if existing is None or not existing.important:
            merged[prop] = decl
    return merged
