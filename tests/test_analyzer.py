import pytest

from tests.utils import make_words
from writing_stats.analyzer import analyze, page_count, reading_time
from writing_stats.config import StatisticsConfig
from writing_stats.models import DocumentSnapshot, LixBand, Metrics

SAMPLES = [
    "",
    "Hello world.",
    "Communication requires considerable understanding.",
    "A short one.\n\nAnother paragraph with extraordinarily complicated vocabulary!",
]


def test_empty_document_yields_all_zero_metrics():
    metrics = analyze(DocumentSnapshot(""))
    assert metrics == Metrics()
    assert metrics.lix_score == 0.0
    assert metrics.readability_index == 0.0
    assert metrics.reading_time_minutes == 0


def test_hello_world_counts():
    metrics = analyze(DocumentSnapshot("Hello world."))
    assert metrics.word_count == 2
    assert metrics.character_count == 12
    assert metrics.sentence_count == 1
    assert metrics.paragraph_count == 1
    assert metrics.page_count == 1
    assert metrics.reading_time_minutes == 1


def test_three_short_sentences():
    metrics = analyze(DocumentSnapshot("One. Two. Three."))
    assert metrics.sentence_count == 3
    assert metrics.word_count == 3


def test_unterminated_text_is_one_sentence():
    metrics = analyze(DocumentSnapshot("no punctuation at all"))
    assert metrics.sentence_count == 1


def test_page_count_boundary():
    config = StatisticsConfig(words_per_page=450)
    assert analyze(DocumentSnapshot(make_words(450)), config).page_count == 1
    assert analyze(DocumentSnapshot(make_words(451)), config).page_count == 2


def test_reading_time_rounds_up():
    assert reading_time(1, 200) == 1
    assert reading_time(200, 200) == 1
    assert reading_time(201, 200) == 2
    assert reading_time(0, 200) == 0
    assert page_count(0, 450) == 0


def test_easy_text_scores():
    metrics = analyze(DocumentSnapshot("The quick brown fox jumps over the lazy dog."))
    assert metrics.word_count == 9
    assert metrics.complex_word_count == 0
    assert metrics.lix_score == pytest.approx(9.0)
    assert metrics.lix_band is LixBand.VERY_EASY
    assert metrics.readability_index == pytest.approx(3.6)


def test_difficult_text_scores():
    metrics = analyze(
        DocumentSnapshot("Communication requires considerable understanding.")
    )
    assert metrics.word_count == 4
    assert metrics.complex_word_count == 4
    assert metrics.lix_score == pytest.approx(104.0)
    assert metrics.lix_band is LixBand.VERY_DIFFICULT
    assert metrics.readability_index == pytest.approx(41.6)


@pytest.mark.parametrize("text", SAMPLES)
def test_complex_words_never_exceed_word_count(text: str):
    metrics = analyze(DocumentSnapshot(text))
    assert 0 <= metrics.complex_word_count <= metrics.word_count


@pytest.mark.parametrize("text", SAMPLES)
def test_analyze_is_idempotent(text: str):
    snapshot = DocumentSnapshot(text)
    assert analyze(snapshot) == analyze(snapshot)


def test_selection_is_independent_of_surrounding_text():
    text = "First one here. Second sentence is longer here. Third one."
    start = text.index("Second")
    end = text.index("Third") - 1
    metrics = analyze(DocumentSnapshot(text, selection=(start, end)))

    assert metrics.sentence_count == 1
    assert metrics.word_count == 5
    assert metrics.character_count == end - start
    assert metrics == analyze(DocumentSnapshot(text[start:end]))


def test_selection_offsets_are_clamped_and_ordered():
    text = "alpha beta gamma"
    reversed_selection = analyze(DocumentSnapshot(text, selection=(10, 0)))
    assert reversed_selection.word_count == 2
    out_of_range = analyze(DocumentSnapshot(text, selection=(6, 500)))
    assert out_of_range.word_count == 2
    assert out_of_range.character_count == len(text) - 6


def test_oversized_text_uses_approximate_metrics():
    config = StatisticsConfig(max_full_analysis_chars=10)
    metrics = analyze(DocumentSnapshot("alpha beta gamma delta."), config)

    assert metrics.approximate
    assert metrics.word_count == 4
    assert metrics.character_count == 23
    assert metrics.page_count == 1
    assert metrics.reading_time_minutes == 1
    assert metrics.sentence_count is None
    assert metrics.lix_score is None
    assert metrics.lix_band is None
    assert metrics.to_dict()["lix_band"] is None


def test_invalid_bytes_degrade_to_separators():
    snapshot = DocumentSnapshot.from_raw(b"caf\xc3 ok.")
    metrics = analyze(snapshot)
    assert metrics.word_count == 2
    assert metrics.sentence_count == 1


def test_to_dict_uses_band_labels():
    payload = analyze(DocumentSnapshot("Hello world.")).to_dict()
    assert payload["word_count"] == 2
    assert payload["lix_band"] == "Very Easy"
    assert payload["approximate"] is False


def test_oversized_text_without_words_keeps_zero_scores():
    config = StatisticsConfig(max_full_analysis_chars=10)
    metrics = analyze(DocumentSnapshot(" " * 50 + "--- ***\n" * 5), config)

    assert metrics.approximate
    assert metrics.word_count == 0
    assert metrics.character_count == 90
    assert metrics.sentence_count == 0
    assert metrics.complex_word_count == 0
    assert metrics.lix_score == 0
    assert metrics.readability_index == 0
    assert metrics.reading_time_minutes == 0
    assert metrics.page_count == 0
