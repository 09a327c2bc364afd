"""Sentence and paragraph segmentation heuristics.

These are punctuation heuristics, not a grammatical parser: a run of ``.``,
``?`` or ``!`` (optionally followed by closing quotes or brackets) ends a
sentence when whitespace or the end of the text follows it, unless the word
right before it looks like an initial or a common abbreviation.
"""

from __future__ import annotations

import re
from typing import List

from .tokenization import WORD_PATTERN

TERMINATOR_RE = re.compile(r"[.?!]+[\"'”’»)\]]*(?=\s|$)")
PRECEDING_WORD_RE = re.compile(r"([^\W_]+(?:\.[^\W_]+)*)$")
# Longer than any guarded abbreviation, so a clipped word never matches one.
LOOKBACK_CHARS = 16

ABBREVIATIONS = frozenset(
    {
        "mr",
        "mrs",
        "ms",
        "dr",
        "st",
        "jr",
        "sr",
        "prof",
        "rev",
        "gen",
        "sgt",
        "capt",
        "vs",
        "etc",
        "e.g",
        "i.e",
    }
)


def _is_abbreviation(word: str) -> bool:
    if len(word) == 1:
        return word.isupper()
    return word.lower() in ABBREVIATIONS


def split_into_sentences(text: str) -> List[str]:
    """Split text into sentences, dropping segments that contain no words."""
    if not text:
        return []

    sentences: List[str] = []
    start = 0
    for match in TERMINATOR_RE.finditer(text):
        if match.group() == ".":
            lookback = max(start, match.start() - LOOKBACK_CHARS)
            preceding = PRECEDING_WORD_RE.search(text, lookback, match.start())
            if preceding is not None and _is_abbreviation(preceding.group(1)):
                continue
        sentences.append(text[start : match.end()].strip())
        start = match.end()

    remainder = text[start:].strip()
    if remainder:
        sentences.append(remainder)
    return [sentence for sentence in sentences if WORD_PATTERN.search(sentence)]


def count_sentences(text: str) -> int:
    return len(split_into_sentences(text))


def count_paragraphs(text: str) -> int:
    """Count maximal runs of non-blank lines."""
    paragraphs = 0
    in_paragraph = False
    for line in text.splitlines():
        if line.strip():
            if not in_paragraph:
                paragraphs += 1
            in_paragraph = True
        else:
            in_paragraph = False
    return paragraphs
