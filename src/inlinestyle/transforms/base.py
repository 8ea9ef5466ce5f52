"""Base protocol for document transforms."""

from __future__ import annotations

from typing import Protocol

from inlinestyle.document import Document


class Transform(Protocol):
    """An in-place document transformation step."""

    def apply(self, document: Document) -> Document: ...
