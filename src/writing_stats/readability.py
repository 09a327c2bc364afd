from __future__ import annotations

import re
from typing import Iterable, Sequence

from .models import LixBand

VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
LONG_WORD_LENGTH = 6
COMPLEX_WORD_SYLLABLES = 3

_BANDS = (
    LixBand.VERY_EASY,
    LixBand.EASY,
    LixBand.MEDIUM,
    LixBand.DIFFICULT,
    LixBand.VERY_DIFFICULT,
)


def estimate_syllables(word: str) -> int:
    """
    Estimate syllables as the number of vowel groups.

    A trailing silent "e" group is dropped when the word has other vowel
    groups; the result is never below 1.
    """
    lowered = word.lower()
    groups = list(VOWEL_GROUP_RE.finditer(lowered))
    count = len(groups)
    if count > 1:
        last = groups[-1]
        if last.end() == len(lowered) and set(last.group()) == {"e"}:
            count -= 1
    return max(1, count)


def is_complex_word(word: str) -> bool:
    return estimate_syllables(word) >= COMPLEX_WORD_SYLLABLES


def is_long_word(word: str) -> bool:
    return len(word) > LONG_WORD_LENGTH


def count_complex_words(words: Iterable[str]) -> int:
    return sum(1 for word in words if is_complex_word(word))


def lix_score(word_count: int, sentence_count: int, long_word_count: int) -> float:
    """LIX = words per sentence + percentage of long words; 0 for empty input."""
    if word_count <= 0 or sentence_count <= 0:
        return 0.0
    return (word_count / sentence_count) + 100.0 * (long_word_count / word_count)


def lix_band(score: float, thresholds: Sequence[float]) -> LixBand:
    """Map a LIX score onto its band using ascending thresholds."""
    for band, threshold in zip(_BANDS, thresholds):
        if score < threshold:
            return band
    return LixBand.VERY_DIFFICULT


def readability_index(
    word_count: int, sentence_count: int, complex_word_count: int
) -> float:
    """0.4 * (words per sentence + percentage of complex words)."""
    if word_count <= 0 or sentence_count <= 0:
        return 0.0
    return 0.4 * (
        (word_count / sentence_count) + 100.0 * (complex_word_count / word_count)
    )
