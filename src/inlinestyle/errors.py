"""Error hierarchy for inlinestyle."""
from __future__ import annotations


class InlineStyleError(Exception):
    """Base error for all inlinestyle errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Stylesheet syntax errors (fatal to the stylesheet being processed)
# ---------------------------------------------------------------------------


class MalformedStylesheet(InlineStyleError):
    """A rule block has no opening ``{``."""

    def __init__(self, message: str, *, block: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.block = block


class MalformedDeclaration(InlineStyleError):
    """A declaration has no ``property:value`` separator."""

    def __init__(self, message: str, *, declaration: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.declaration = declaration


# ---------------------------------------------------------------------------
# Recoverable errors (returned as values, not raised by the pipeline)
# ---------------------------------------------------------------------------


class SelectorSyntaxError(InlineStyleError):
    """A selector could not be translated into a document query."""

    def __init__(self, message: str, *, selector: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.selector = selector


class FetchFailure(InlineStyleError):
    """An external resource could not be retrieved."""

    def __init__(self, message: str, *, uri: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.uri = uri


# ---------------------------------------------------------------------------
# Document errors
# ---------------------------------------------------------------------------


class ResourceNotFound(InlineStyleError):
    """The source document could not be read."""

    def __init__(self, message: str, *, path: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.path = path


class DocumentError(InlineStyleError):
    """Markup could not be parsed, or no document has been loaded."""
