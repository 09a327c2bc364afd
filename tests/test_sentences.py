import time

from writing_stats.sentences import count_paragraphs, count_sentences, split_into_sentences


def test_split_on_terminators_followed_by_space_or_end():
    assert split_into_sentences("One. Two. Three.") == ["One.", "Two.", "Three."]
    assert count_sentences("Really?! Yes! Fine") == 3


def test_terminator_inside_token_does_not_split():
    assert count_sentences("Version 3.14 shipped on example.com today.") == 1


def test_initials_and_titles_do_not_split():
    assert count_sentences("J. R. Tolkien wrote it. Mr. Smith read it.") == 2
    assert count_sentences("Ask Dr. Who, e.g. tomorrow.") == 1


def test_closing_quotes_stay_with_their_sentence():
    sentences = split_into_sentences('He said "stop." Then he left.')
    assert sentences == ['He said "stop."', "Then he left."]


def test_punctuation_only_segments_are_not_sentences():
    assert count_sentences("... !!! ??") == 0
    assert count_sentences("") == 0


def test_count_paragraphs_ignores_leading_and_trailing_blank_runs():
    text = "\n\nFirst line\nstill first.\n\n\n   \nSecond.\n\n"
    assert count_paragraphs(text) == 2
    assert count_paragraphs("   \n\t\n") == 0


def test_long_run_of_initials_is_split_in_linear_time():
    text = "A. " * 40_000 + "Mr. Smith left. " * 5_000
    started = time.perf_counter()
    assert count_sentences(text) == 5_000
    assert time.perf_counter() - started < 5.0


def test_long_word_before_period_is_not_clipped_into_an_abbreviation():
    text = "Incomprehensibilities abound for Dr. Incomprehensibilities. Yes."
    assert count_sentences(text) == 2
