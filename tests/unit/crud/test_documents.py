"""Unit tests for crud/documents.py"""

from datetime import datetime

import pytest

from mdfront.crud.documents import (
    get_all_documents, get_by_path, get_by_slug, get_published, upsert_doc,
)
from mdfront.core.parse import parse_text


def test_upsert_creates(session, make_doc):
    """A new path is inserted with typed columns copied from the document."""
    stored, status = upsert_doc(session, make_doc())
    assert status == "created"
    assert stored.path == "posts/hello.md"
    assert stored.slug == "hello"
    assert stored.title == "Hello"
    assert stored.draft is False
    assert stored.tags == ["catalog", "test"]
    assert stored.body.startswith("# Hello")
    assert len(stored.hash) == 64


def test_upsert_stores_json_safe_frontmatter(session, make_doc):
    """Metadata is stored JSON-safe; the date becomes an ISO string."""
    stored, _ = upsert_doc(session, make_doc())
    assert list(stored.frontmatter) == ["title", "date", "draft", "description", "tags"]
    assert stored.frontmatter["date"].startswith("2026-02-04T12:00:00")


def test_upsert_unchanged(session, make_doc):
    upsert_doc(session, make_doc())
    _, status = upsert_doc(session, make_doc())
    assert status == "unchanged"


def test_upsert_updates_changed_content(session, make_doc):
    first, _ = upsert_doc(session, make_doc())
    old_hash = first.hash
    stored, status = upsert_doc(session, make_doc(title="Hello Again"))
    assert status == "updated"
    assert stored.id == first.id
    assert stored.title == "Hello Again"
    assert stored.hash != old_hash


def test_upsert_requires_path(session):
    doc = parse_text(
        "---\ntitle: T\ndate: 2026-02-04T12:00:00+00:00\ndraft: false\ndescription: D\ntags: []\n---\n")
    with pytest.raises(ValueError, match="no source path"):
        upsert_doc(session, doc)


def test_get_by_path_and_slug(session, make_doc):
    upsert_doc(session, make_doc(slug="alpha", title="Alpha"))
    assert get_by_path(session, "posts/alpha.md").title == "Alpha"
    assert get_by_slug(session, "alpha").path == "posts/alpha.md"
    assert get_by_path(session, "posts/missing.md") is None
    assert get_by_slug(session, "missing") is None


def test_get_published_excludes_drafts_newest_first(session, make_doc):
    upsert_doc(session, make_doc(slug="old", title="Old", date="2025-01-01T00:00:00+00:00"))
    upsert_doc(session, make_doc(slug="new", title="New", date="2026-01-01T00:00:00+00:00"))
    upsert_doc(session, make_doc(slug="wip", title="WIP", draft="true"))
    assert [d.slug for d in get_published(session)] == ["new", "old"]


def test_get_all_documents_ordered_by_path(session, make_doc):
    upsert_doc(session, make_doc(slug="b"))
    upsert_doc(session, make_doc(slug="a"))
    assert [d.path for d in get_all_documents(session)] == ["posts/a.md", "posts/b.md"]


def test_get_published_orders_by_instant_across_offsets(session, make_doc):
    """Dates are stored as UTC, so ordering follows the instant, not the wall clock."""
    upsert_doc(session, make_doc(slug="east", date="2026-01-01T10:00:00+05:00"))   # 05:00Z
    upsert_doc(session, make_doc(slug="west", date="2026-01-01T08:00:00+00:00"))   # 08:00Z
    session.commit()
    session.expire_all()

    rows = get_published(session)
    assert [d.slug for d in rows] == ["west", "east"]
    east = get_by_slug(session, "east")
    assert east.date.replace(tzinfo=None) == datetime(2026, 1, 1, 5, 0)
