from __future__ import annotations

import re
from typing import Iterator

# Letters and digits with internal apostrophes or hyphens ("don't", "well-known").
# Underscore is excluded so markup such as __bold__ separates words.
WORD_PATTERN = re.compile(r"[^\W_]+(?:['’\-][^\W_]+)*", re.UNICODE)


def iter_words(text: str) -> Iterator[str]:
    """Yield the words of text in order."""
    for match in WORD_PATTERN.finditer(text):
        yield match.group(0)


def count_words(text: str) -> int:
    """Single-pass word count used when the full analysis is too expensive."""
    return sum(1 for _ in WORD_PATTERN.finditer(text))
