"""Catalog persistence: upsert by source path and lookup queries"""

import hashlib
from datetime import datetime, timezone

import structlog
from pydantic_core import to_jsonable_python
from sqlmodel import Session, col, select

from mdfront.core.models import Document
from mdfront.core.serialize import dump_document
from mdfront.crud.models import StoredDocument


LOGGER = structlog.get_logger(__name__)


def get_by_path(session: Session, path: str) -> StoredDocument | None:
    """Return the StoredDocument with the given source path, or None if not found."""
    return session.exec(select(StoredDocument).where(StoredDocument.path == path)).one_or_none()


def get_by_slug(session: Session, slug: str) -> StoredDocument | None:
    """Return the first StoredDocument with the given slug, or None if not found."""
    return session.exec(select(StoredDocument).where(StoredDocument.slug == slug)).first()


def get_all_documents(session: Session) -> list[StoredDocument]:
    return list(session.exec(select(StoredDocument).order_by(col(StoredDocument.path))).all())


def get_published(session: Session) -> list[StoredDocument]:
    """Non-draft documents, newest instant first, ties ordered by slug (dates are stored as UTC)."""
    stmt = (
        select(StoredDocument)
        .where(col(StoredDocument.draft).is_(False))
        .order_by(col(StoredDocument.date).desc(), col(StoredDocument.slug))
    )
    return list(session.exec(stmt).all())


def _content_hash(doc: Document) -> str:
    """SHA-256 of the serialized source; equal hashes mean nothing to update."""
    return hashlib.sha256(dump_document(doc).encode("utf-8")).hexdigest()


def _row_values(doc: Document) -> dict:
    if doc.path is None:
        raise ValueError(f"Document '{doc.title}' has no source path and cannot be cataloged")
    return {
        "path": str(doc.path),
        "slug": doc.slug,
        "title": doc.title,
        "description": doc.description,
        "date": doc.date.astimezone(timezone.utc),
        "draft": doc.draft,
        "tags": list(doc.tags),
        "frontmatter": to_jsonable_python(doc.metadata),
        "body": doc.body,
        "hash": _content_hash(doc),
    }


def upsert_doc(session: Session, doc: Document) -> tuple[StoredDocument, str]:
    """Insert or update the catalog row for doc.path.

    Returns (row, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    """
    values = _row_values(doc)
    stored = get_by_path(session, values["path"])

    if stored:
        if stored.hash == values["hash"]:
            return stored, 'unchanged'
        for name, value in values.items():
            setattr(stored, name, value)
        stored.updated_at = datetime.now()
        status = 'updated'
    else:
        stored = StoredDocument(**values)
        status = 'created'

    session.add(stored)
    session.flush()
    LOGGER.debug("catalog.upserted", path=stored.path, slug=stored.slug, status=status)
    return stored, status
