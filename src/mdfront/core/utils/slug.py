"""URL-safe slugs for documents published by path or title"""

import re
import unicodedata


_NON_SLUG_RE = re.compile(r'[^a-z0-9\s-]')
_SEPARATOR_RE = re.compile(r'[\s_-]+')


def slugify(text: str) -> str:
    """Fold text to ASCII and return a lowercase, hyphen-separated slug.

    'Café Notes: Part_2' -> 'cafe-notes-part-2'
    """
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = _NON_SLUG_RE.sub('', text.lower().replace('_', ' '))
    return _SEPARATOR_RE.sub('-', text).strip('-')
