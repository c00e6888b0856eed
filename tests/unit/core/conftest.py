"""Shared fixtures for core unit tests"""

from pathlib import Path

import pytest


SAMPLE_DOC = """\
---
title: "Shipping a Parser"
date: 2026-02-04T12:00:00+00:00
draft: false
description: Notes on front matter
tags: ["python", "parsing", "notes"]
---
# Shipping a Parser

Some *emphasis* and a [link](https://example.com).

```python
print("hello")
```

> A quoted line.

- item one
- item two
"""


def make_doc_text(
    title: str = "Post",
    date: str = "2026-02-04T12:00:00+00:00",
    draft: str = "false",
    tags: str = '["a", "b"]',
    body: str = "# Body\n",
    ) -> str:
    """Build a well-formed document with the given field texts."""
    return (
        "---\n"
        f"title: {title}\n"
        f"date: {date}\n"
        f"draft: {draft}\n"
        "description: A post\n"
        f"tags: {tags}\n"
        "---\n"
        f"{body}"
    )


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_DOC


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path) -> Path:
    """A content directory with two published posts, one draft, and a non-markdown file."""
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)
    (root / "posts" / "first-post.md").write_text(
        make_doc_text(title="First Post", date="2026-01-10T09:00:00+00:00"), encoding="utf-8")
    (root / "posts" / "second-post.md").write_text(
        make_doc_text(title="Second Post", date="2026-02-04T12:00:00+00:00", tags='["b", "c"]'), encoding="utf-8")
    (root / "wip.md").write_text(
        make_doc_text(title="Work in Progress", draft="true"), encoding="utf-8")
    (root / "notes.txt").write_text("not a document", encoding="utf-8")
    return root


@pytest.fixture(name="doc_text")
def doc_text_fixture():
    """Factory for well-formed document text (see make_doc_text)."""
    return make_doc_text
