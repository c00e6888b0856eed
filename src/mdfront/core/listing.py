"""Publication listing: the draft filter and ordering a site build applies"""

from collections.abc import Iterable

from mdfront.core.models import Document


def by_date(docs: Iterable[Document]) -> list[Document]:
    """Newest first; documents sharing a timestamp are ordered by slug."""
    return sorted(sorted(docs, key=lambda d: d.slug), key=lambda d: d.date, reverse=True)


def published(docs: Iterable[Document]) -> list[Document]:
    """Documents visible in public output (draft: false), newest first."""
    return by_date(d for d in docs if not d.draft)


def drafts(docs: Iterable[Document]) -> list[Document]:
    return by_date(d for d in docs if d.draft)


def with_tag(docs: Iterable[Document], tag: str) -> list[Document]:
    return [d for d in docs if tag in d.tags]


def tag_index(docs: Iterable[Document]) -> dict[str, list[Document]]:
    """Map each tag to its documents, tags in first-seen order, one entry per document."""
    index: dict[str, list[Document]] = {}
    for doc in docs:
        for tag in dict.fromkeys(doc.tags):
            index.setdefault(tag, []).append(doc)
    return index
