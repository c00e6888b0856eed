"""Pipeline step functions: discovery, check, listing, and catalog ingest"""

from pathlib import Path
from typing import Optional

import structlog
from sqlalchemy.engine import Engine
from sqlmodel import Session

from mdfront.core.listing import by_date, published, with_tag
from mdfront.core.models import Document
from mdfront.core.parse import discover_files, parse_file
from mdfront.crud.documents import upsert_doc
from mdfront.errors import DocumentError


LOGGER = structlog.get_logger(__name__)


def load_documents(path: Path, strict: bool = True) -> tuple[list[Document], list[DocumentError]]:
    """Parse every markdown file under path.

    strict re-raises the first DocumentError; otherwise invalid files are
    logged, collected, and left out of the returned documents.
    """
    docs: list[Document] = []
    errors: list[DocumentError] = []
    for p in discover_files(path):
        try:
            docs.append(parse_file(p))
        except DocumentError as e:
            if strict:
                raise
            LOGGER.warning("document.skipped", path=str(p), field=e.field, error=e.message)
            errors.append(e)
    return docs, errors


def run_check(path: Path) -> list[tuple[Path, Optional[DocumentError]]]:
    """Validate each file under path. Returns (file, error or None) pairs."""
    results = []
    for p in discover_files(path):
        try:
            parse_file(p)
            results.append((p, None))
        except DocumentError as e:
            results.append((p, e))
    return results


def run_list(
    path: Path,
    include_drafts: bool = False,
    tag: Optional[str] = None,
    strict: bool = True,
    ) -> list[Document]:
    """Documents under path, newest first; drafts only when include_drafts."""
    docs, _ = load_documents(path, strict)
    selected = by_date(docs) if include_drafts else published(docs)
    return with_tag(selected, tag) if tag else selected


def run_ingest(
    engine: Engine,
    path: Path,
    include_drafts: bool = False,
    strict: bool = True,
    ) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Upsert documents under path into the catalog.

    Returns (counts, changes) where changes is a list of (status, slug) for
    created/updated documents. Drafts count as 'skipped' unless include_drafts;
    unparseable files count as 'invalid' in non-strict mode.
    """
    docs, errors = load_documents(path, strict)
    counts = {"created": 0, "updated": 0, "unchanged": 0, "skipped": 0, "invalid": len(errors)}
    changes = []
    with Session(engine) as session:
        for doc in docs:
            if doc.draft and not include_drafts:
                counts["skipped"] += 1
                continue
            stored, status = upsert_doc(session, doc)
            counts[status] += 1
            if status != 'unchanged':
                changes.append((status, stored.slug))
        session.commit()
    LOGGER.info("catalog.ingested", path=str(path), **counts)
    return counts, changes
