"""Document error types raised by the parser and surfaced to build tools"""

from pathlib import Path
from typing import Optional


class DocumentError(ValueError):
    """Base error for a document that cannot be ingested."""

    def __init__(self, message: str, field: Optional[str] = None, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.path = path

    def with_path(self, path: Path) -> "DocumentError":
        """Attach the source path (kept if already set) and return self for re-raising."""
        if self.path is None:
            self.path = path
        return self

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class MalformedDocument(DocumentError):
    """Delimiter, line-shape, or required-field problem."""


class InvalidFieldType(DocumentError):
    """A present field holds a value that cannot be parsed as its type."""
