"""Plain-text helpers for rendered HTML"""

import math
import re

from markupsafe import Markup


WORDS_PER_MINUTE = 200
RAW_TEXT_RE = re.compile(r'<(script|style)\b[^>]*>.*?</\1\s*>', re.IGNORECASE | re.DOTALL)


def strip_tags(html: str | None) -> str:
    """Remove markup (script and style bodies included), unescape entities, collapse whitespace. None → ''."""
    if not html:
        return ""
    return Markup(RAW_TEXT_RE.sub(" ", html)).striptags()


def truncate(text: str, length: int) -> str:
    """Cut text to at most length characters, dropping any trailing whitespace left at the cut."""
    if len(text) <= length:
        return text
    return text[:length].rstrip()


def word_count(text: str) -> int:
    return len(text.split())


def reading_time(words: int) -> int:
    """Minutes to read, rounded up; 0 for empty content."""
    return math.ceil(words / WORDS_PER_MINUTE) if words else 0
