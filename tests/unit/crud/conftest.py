"""Shared fixtures for crud unit tests"""

from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from mdfront.core.parse import parse_text


DOC_TEMPLATE = """\
---
title: {title}
date: {date}
draft: {draft}
description: About {title}
tags: ["catalog", "test"]
---
# {title}

Body text.
"""


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Factory for a parsed Document at posts/<slug>.md."""
    def _make(slug="hello", title="Hello", date="2026-02-04T12:00:00+00:00", draft="false"):
        text = DOC_TEMPLATE.format(title=title, date=date, draft=draft)
        return parse_text(text, path=Path("posts") / f"{slug}.md")
    return _make
