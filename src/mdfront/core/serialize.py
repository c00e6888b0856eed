"""Front-matter serialization: write a Document back to source text"""

import json
from datetime import datetime
from typing import Any

from mdfront.core.frontmatter import BOOLEAN_TOKENS, DELIMITER, INT_RE, parse_line, parse_value
from mdfront.core.models import Document


def _is_plain(text: str) -> bool:
    """True when text reads back unchanged without quotes."""
    return (
        text != ""
        and text == text.strip()
        and text[0] not in "\"'["
        and text.lower() not in BOOLEAN_TOKENS
        and not INT_RE.match(text)
        and "\n" not in text
        and "\r" not in text
    )


def format_value(value: Any) -> str:
    """Canonical metadata text for a value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value), ensure_ascii=False, default=str)
    if isinstance(value, str):
        return value if _is_plain(value) else json.dumps(value, ensure_ascii=False)
    return str(value)


def _unchanged(key: str, source: str, value: Any) -> bool:
    _, text = parse_line(source)
    parsed = parse_value(key, text)
    return type(parsed) is type(value) and parsed == value


def dump_metadata(doc: Document) -> str:
    """Delimited metadata block; fields whose value is unchanged keep their source line."""
    nl = doc.newline
    lines = [DELIMITER + nl]
    for key, value in doc.metadata.items():
        source = doc.raw.get(key)
        if source is not None and _unchanged(key, source, value):
            lines.append(source)
            continue
        text = format_value(value)
        lines.append(f"{key}: {text}{nl}" if text else f"{key}:{nl}")
    lines.append(DELIMITER + (doc.closing or (nl if doc.body else "")))
    return "".join(lines)


def dump_document(doc: Document) -> str:
    return dump_metadata(doc) + doc.body
