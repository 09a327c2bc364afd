from __future__ import annotations

import logging
import math

from .config import StatisticsConfig
from .models import DocumentSnapshot, Metrics
from .readability import (
    count_complex_words,
    is_long_word,
    lix_band,
    lix_score,
    readability_index,
)
from .sentences import count_paragraphs, count_sentences
from .tokenization import count_words, iter_words

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = StatisticsConfig()


def analyze(
    snapshot: DocumentSnapshot, config: StatisticsConfig | None = None
) -> Metrics:
    """Compute document metrics for the snapshot's selection or whole text."""
    cfg = config or _DEFAULT_CONFIG
    text = snapshot.analyzed_text

    if len(text) > cfg.max_full_analysis_chars:
        logger.warning(
            "Text of %d characters exceeds %d; computing approximate metrics.",
            len(text),
            cfg.max_full_analysis_chars,
        )
        return approximate_metrics(text, cfg)

    words = list(iter_words(text))
    word_count = len(words)
    if word_count == 0:
        return Metrics(
            character_count=len(text),
            paragraph_count=count_paragraphs(text),
        )

    sentence_count = max(1, count_sentences(text))
    complex_count = count_complex_words(words)
    long_count = sum(1 for word in words if is_long_word(word))
    lix = lix_score(word_count, sentence_count, long_count)

    return Metrics(
        word_count=word_count,
        character_count=len(text),
        sentence_count=sentence_count,
        paragraph_count=count_paragraphs(text),
        page_count=page_count(word_count, cfg.words_per_page),
        complex_word_count=complex_count,
        reading_time_minutes=reading_time(word_count, cfg.average_reading_wpm),
        lix_score=lix,
        lix_band=lix_band(lix, cfg.lix_thresholds),
        readability_index=readability_index(word_count, sentence_count, complex_count),
    )


def approximate_metrics(text: str, config: StatisticsConfig) -> Metrics:
    """Cheap single-pass metrics; scores that need segmentation are unavailable."""
    word_count = count_words(text)
    if word_count == 0:
        return Metrics(character_count=len(text), approximate=True)
    return Metrics(
        word_count=word_count,
        character_count=len(text),
        sentence_count=None,
        paragraph_count=None,
        page_count=page_count(word_count, config.words_per_page),
        complex_word_count=None,
        reading_time_minutes=reading_time(word_count, config.average_reading_wpm),
        lix_score=None,
        lix_band=None,
        readability_index=None,
        approximate=True,
    )


def page_count(word_count: int, words_per_page: int) -> int:
    if word_count <= 0:
        return 0
    return math.ceil(word_count / words_per_page)


def reading_time(word_count: int, average_reading_wpm: int) -> int:
    """Minutes needed to read word_count words; at least 1 for non-empty text."""
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / average_reading_wpm))
