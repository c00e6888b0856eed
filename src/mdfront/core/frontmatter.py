"""Front-matter block splitting and metadata value parsing

A document opens with a '---' line, carries one 'key: value' pair per line,
and closes the block with a second '---' line. Known fields are coerced to
their types; other keys keep simple scalars or bracketed lists.
"""

import json
import re
from datetime import datetime
from typing import Any, Callable, Iterator

import yaml

from mdfront.core.models import REQUIRED_FIELDS
from mdfront.errors import InvalidFieldType, MalformedDocument


DELIMITER = "---"
LINE_RE = re.compile(r'^(?P<key>[A-Za-z_][\w-]*):(?:[ \t]+(?P<value>.*?))?[ \t]*$')
INT_RE = re.compile(r'^[-+]?\d+$')
BOOLEAN_TOKENS = {
    "true": True, "yes": True, "on": True,
    "false": False, "no": False, "off": False,
}


def _iter_lines(text: str) -> Iterator[tuple[str, str, int]]:
    """Yield (line, terminator, end_offset), splitting on '\\n' and keeping '\\r\\n' intact."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield text[start:], "", len(text)
            return
        line, term = text[start:end], "\n"
        if line.endswith("\r"):
            line, term = line[:-1], "\r\n"
        yield line, term, end + 1
        start = end + 1


def split_front_matter(text: str) -> tuple[list[str], str, str, str]:
    """Return (metadata_lines, body, newline, closing).

    metadata_lines keep their terminators; body is everything after the
    closing delimiter line, verbatim. newline and closing are the opening and
    closing delimiter terminators (closing is empty at end of file).
    """
    lines = _iter_lines(text)
    first = next(lines, None)
    if first is None or first[0] != DELIMITER:
        raise MalformedDocument(f"missing opening '{DELIMITER}' delimiter on line 1")
    newline = first[1] or "\n"

    block: list[str] = []
    for line, term, end in lines:
        if line == DELIMITER:
            return block, text[end:], newline, term
        block.append(line + term)
    raise MalformedDocument(f"missing closing '{DELIMITER}' delimiter after the metadata block")


def parse_line(source: str, lineno: int = 0) -> tuple[str, str]:
    """Split one metadata line into (key, raw_value_text)."""
    m = LINE_RE.match(source.rstrip("\r\n"))
    if not m:
        raise MalformedDocument(f"line {lineno} is not a 'key: value' pair: {source.rstrip()!r}")
    return m.group("key"), m.group("value") or ""


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def _unquote(text: str, field: str) -> str:
    """Decode a double-quoted (JSON rules) or single-quoted (YAML rules) string."""
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidFieldType(f"'{field}' is not a valid quoted string: {e.msg}", field=field) from e
    if len(text) >= 2 and text[0] == text[-1] == "'":
        return text[1:-1].replace("''", "'")
    return text


def parse_timestamp(text: str, field: str = "date") -> datetime:
    """Parse an ISO-8601 timestamp that must carry a UTC offset ('Z' means +00:00)."""
    value = _strip_quotes(text)
    candidate = value[:-1] + "+00:00" if value[-1:] in ("Z", "z") else value
    try:
        stamp = datetime.fromisoformat(candidate)
    except ValueError as e:
        raise MalformedDocument(f"'{field}' is not an ISO-8601 timestamp: {value!r}", field=field) from e
    if stamp.tzinfo is None:
        raise MalformedDocument(f"'{field}' has no UTC offset: {value!r}", field=field)
    return stamp


def parse_boolean(text: str, field: str = "draft") -> bool:
    token = _strip_quotes(text).lower()
    if token not in BOOLEAN_TOKENS:
        raise InvalidFieldType(f"'{field}' must be a boolean (true/false), got {text!r}", field=field)
    return BOOLEAN_TOKENS[token]


def parse_list(text: str, field: str) -> list:
    """Parse a bracketed flow list such as ["a", "b"]."""
    if not (text.startswith("[") and text.endswith("]")):
        raise InvalidFieldType(f"'{field}' must be a bracketed list, got {text!r}", field=field)
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidFieldType(f"'{field}' is not a valid list: {e}", field=field) from e
    if not isinstance(value, list):
        raise InvalidFieldType(f"'{field}' must be a bracketed list, got {text!r}", field=field)
    return value


def _parse_tags(text: str, field: str) -> list[str]:
    tags = parse_list(text, field)
    bad = [t for t in tags if not isinstance(t, str)]
    if bad:
        raise InvalidFieldType(f"'{field}' must contain only strings, got {bad[0]!r}", field=field)
    return tags


def _parse_scalar(text: str, field: str) -> Any:
    """Untyped keys: None, list, quoted string, boolean, integer, else the text itself."""
    if text == "":
        return None
    if text.startswith("["):
        return parse_list(text, field)
    if text[0] in "\"'":
        return _unquote(text, field)
    if text.lower() in BOOLEAN_TOKENS:
        return BOOLEAN_TOKENS[text.lower()]
    if INT_RE.match(text):
        return int(text)
    return text


FIELD_PARSERS: dict[str, Callable[[str, str], Any]] = {
    "title":       _unquote,
    "description": _unquote,
    "date":        parse_timestamp,
    "draft":       parse_boolean,
    "tags":        _parse_tags,
}


def parse_value(key: str, text: str) -> Any:
    """Coerce raw value text for key using its field parser."""
    return FIELD_PARSERS.get(key, _parse_scalar)(text, key)


def parse_metadata(lines: list[str]) -> tuple[dict[str, Any], dict[str, str]]:
    """Return (metadata, raw_lines) for the block, enforcing required fields."""
    metadata: dict[str, Any] = {}
    raw: dict[str, str] = {}
    for lineno, source in enumerate(lines, start=2):
        key, text = parse_line(source, lineno)
        if key in metadata:
            raise MalformedDocument(f"duplicate key '{key}' on line {lineno}", field=key)
        metadata[key] = parse_value(key, text)
        raw[key] = source

    missing = [name for name in REQUIRED_FIELDS if name not in metadata]
    if missing:
        raise MalformedDocument(f"missing required field(s): {', '.join(missing)}", field=missing[0])
    return metadata, raw
