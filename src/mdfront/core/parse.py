"""File discovery and front-matter document parsing"""

from pathlib import Path
from typing import Optional

import structlog

from mdfront.core.frontmatter import parse_metadata, split_front_matter
from mdfront.core.models import Document
from mdfront.errors import DocumentError, MalformedDocument


LOGGER = structlog.get_logger(__name__)

MD_EXTENSIONS = {'.md', '.markdown', '.mdx'}


def parse_text(text: str, path: Optional[Path] = None) -> Document:
    """Parse raw document text into a Document. Pure; raises DocumentError subclasses."""
    try:
        lines, body, newline, closing = split_front_matter(text)
        metadata, raw = parse_metadata(lines)
    except DocumentError as e:
        if path is not None:
            e.with_path(path)
        raise
    return Document(metadata=metadata, body=body, path=path, newline=newline, closing=closing, raw=raw)


def parse_file(path: Path) -> Document:
    """Read a UTF-8 file byte-for-byte (line endings kept, a leading BOM dropped) and parse it."""
    try:
        text = path.read_bytes().decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"not valid UTF-8 at byte {e.start}: {e.reason}", path=path) from e
    doc = parse_text(text, path)
    LOGGER.debug("document.parsed", path=str(path), slug=doc.slug, draft=doc.draft)
    return doc


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single markdown file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)
