import pytest

from writing_stats.models import LixBand
from writing_stats.readability import (
    count_complex_words,
    estimate_syllables,
    is_long_word,
    lix_band,
    lix_score,
    readability_index,
)

THRESHOLDS = [25.0, 35.0, 45.0, 55.0]


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("hello", 2),
        ("make", 1),
        ("the", 1),
        ("tree", 1),
        ("rhythm", 1),
        ("bcd", 1),
        ("beautiful", 3),
        ("Communication", 5),
        ("requires", 3),
    ],
)
def test_estimate_syllables(word: str, expected: int):
    assert estimate_syllables(word) == expected


def test_complex_words_need_three_syllables():
    assert count_complex_words(["cat", "table", "beautiful", "understanding"]) == 2


def test_long_words_are_longer_than_six_characters():
    assert not is_long_word("simple")
    assert is_long_word("complex")


def test_lix_score_and_zero_guards():
    assert lix_score(10, 2, 5) == pytest.approx(55.0)
    assert lix_score(0, 0, 0) == 0.0
    assert lix_score(5, 0, 1) == 0.0


@pytest.mark.parametrize(
    ("score", "band"),
    [
        (0.0, LixBand.VERY_EASY),
        (24.9, LixBand.VERY_EASY),
        (25.0, LixBand.EASY),
        (40.0, LixBand.MEDIUM),
        (54.9, LixBand.DIFFICULT),
        (55.0, LixBand.VERY_DIFFICULT),
        (120.0, LixBand.VERY_DIFFICULT),
    ],
)
def test_lix_band_thresholds(score: float, band: LixBand):
    assert lix_band(score, THRESHOLDS) is band


def test_readability_index_formula_and_guards():
    assert readability_index(20, 2, 4) == pytest.approx(0.4 * (10 + 20))
    assert readability_index(0, 1, 0) == 0.0
    assert readability_index(3, 0, 1) == 0.0
