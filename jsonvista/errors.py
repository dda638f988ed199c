"""
Exceptions raised while turning an inline edit into a document rewrite.

All of them are recoverable: the public patch API catches them and reports a
plain boolean, so the stored document is never left half-written.
"""

from typing import Optional, Sequence

from jsonvista.models import PathSegment


class InlineEditError(Exception):
    """Base class for inline edit failures. Carries a user-facing message."""

    def __init__(self, message: str, path: Optional[Sequence[PathSegment]] = None):
        self.message = message
        self.path = list(path) if path is not None else None
        super().__init__(message)


class ValidationError(InlineEditError):
    """The draft text (or the value to write) does not fit the declared type."""


class PathError(InlineEditError):
    """A path could not be composed, or does not resolve in the current document."""


class DocumentStateError(InlineEditError):
    """The current document text is not valid JSON."""
