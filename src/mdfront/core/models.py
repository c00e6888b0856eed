"""Parsed document model shared by the parser, serializer, and catalog"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from mdfront.core.utils.slug import slugify


REQUIRED_FIELDS = ("title", "date", "draft", "description", "tags")


class Document(BaseModel):
    """A front-matter document: ordered metadata plus the verbatim markdown body."""
    metadata: dict[str, Any]
    body: str
    path: Optional[Path] = None
    newline: str = "\n"                                         # opening delimiter and new field lines
    closing: str = "\n"                                         # closing delimiter terminator, "" at end of file
    raw: dict[str, str] = Field(default_factory=dict, repr=False)  # source line per key, terminator included

    @property
    def title(self) -> str:
        return self.metadata["title"]

    @property
    def date(self) -> datetime:
        return self.metadata["date"]

    @property
    def draft(self) -> bool:
        return self.metadata["draft"]

    @property
    def description(self) -> str:
        return self.metadata["description"]

    @property
    def tags(self) -> list[str]:
        return self.metadata["tags"]

    @property
    def slug(self) -> str:
        """Explicit slug field, else the file stem, else the title."""
        if self.metadata.get("slug"):
            return slugify(str(self.metadata["slug"]))
        if self.path is not None:
            return slugify(self.path.stem)
        return slugify(self.title)
