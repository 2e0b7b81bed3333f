"""
Tests for tools/phrase_frequency_utils.py - Phrase frequency pipeline.

Functions tested:
- extract_phrases(): Sliding-window phrase extraction
- aggregate_phrases(): Frequency counting
- get_phrase_frequency(): Tokenize + extract + aggregate
- get_top_phrases(): Ranking with lexicographic tie-break
- analyze_content(): End-to-end analysis
"""

from collections import Counter
from unittest.mock import MagicMock

import pytest

from logging_utils import Phase, PhaseLogger
from tools.phrase_frequency_utils import (
    PhraseCount,
    TextAnalysisResult,
    aggregate_phrases,
    analyze_content,
    extract_phrases,
    get_phrase_frequency,
    get_top_phrases,
)


class TestExtractPhrases:
    """Tests for extract_phrases()."""

    def test_bigrams_overlap_by_one_word(self):
        """
        Given: Four words and phrase_size=2
        When: extract_phrases() is called
        Then: Three overlapping bigrams are produced in order
        """
        words = ["a", "b", "c", "d"]
        assert list(extract_phrases(words, 2)) == ["a b", "b c", "c d"]

    @pytest.mark.parametrize(
        "length,size",
        [(0, 2), (1, 2), (2, 2), (5, 2), (5, 3), (5, 5), (5, 6), (10, 20)],
    )
    def test_phrase_count_is_max_zero_l_minus_p_plus_one(self, length, size):
        words = [f"w{i}" for i in range(length)]
        assert len(list(extract_phrases(words, size))) == max(0, length - size + 1)

    def test_window_equal_to_length_yields_whole_text(self):
        assert list(extract_phrases(["one", "two", "three"], 3)) == ["one two three"]

    def test_non_positive_size_yields_nothing(self):
        """Given: phrase_size <= 0, Then: Degrades to no phrases instead of failing"""
        assert list(extract_phrases(["a", "b"], 0)) == []
        assert list(extract_phrases(["a", "b"], -1)) == []

    def test_none_words_yields_nothing(self):
        assert list(extract_phrases(None, 2)) == []


class TestAggregatePhrases:
    """Tests for aggregate_phrases()."""

    def test_counts_each_distinct_phrase(self):
        result = aggregate_phrases(["x y", "y z", "x y"])
        assert result == {"x y": 2, "y z": 1}

    def test_empty_input_gives_empty_mapping(self):
        assert aggregate_phrases([]) == {}
        assert aggregate_phrases(None) == {}

    def test_case_sensitive_exact_match(self):
        result = aggregate_phrases(["The cat", "the cat"])
        assert result == {"The cat": 1, "the cat": 1}


class TestGetPhraseFrequency:
    """Tests for get_phrase_frequency()."""

    def test_cat_scenario(self, cat_text):
        """
        Given: 'the cat sat. the cat ran!' and phrase_size=2
        When: get_phrase_frequency() is called
        Then: 'the cat' appears twice and punctuation stays attached
        """
        assert get_phrase_frequency(cat_text, 2) == {
            "the cat": 2,
            "cat sat.": 1,
            "sat. the": 1,
            "cat ran!": 1,
        }

    def test_whitespace_is_normalized_to_single_space(self):
        assert get_phrase_frequency("a\t\tb\n\nc", 2) == {"a b": 1, "b c": 1}

    def test_none_content_gives_empty_counter(self):
        assert get_phrase_frequency(None, 2) == Counter()

    def test_empty_content_gives_empty_counter(self):
        assert get_phrase_frequency("", 2) == Counter()

    def test_phrase_size_larger_than_text(self):
        content = " ".join(f"w{i}" for i in range(10))
        assert get_phrase_frequency(content, 20) == Counter()


class TestGetTopPhrases:
    """Tests for get_top_phrases()."""

    def test_sorted_by_count_descending(self):
        counts = {"a b": 1, "b c": 3, "c d": 2}
        assert get_top_phrases(counts, 3) == [
            PhraseCount("b c", 3),
            PhraseCount("c d", 2),
            PhraseCount("a b", 1),
        ]

    def test_ties_broken_lexicographically(self):
        """
        Given: Several phrases with the same count
        When: get_top_phrases() is called
        Then: Ties are ordered by phrase ascending
        """
        counts = {"sat. the": 1, "the cat": 2, "cat sat.": 1, "cat ran!": 1}
        assert get_top_phrases(counts, 4) == [
            ("the cat", 2),
            ("cat ran!", 1),
            ("cat sat.", 1),
            ("sat. the", 1),
        ]

    def test_truncates_to_top(self):
        counts = {"a b": 5, "b c": 4, "c d": 3}
        assert [item.phrase for item in get_top_phrases(counts, 2)] == ["a b", "b c"]

    def test_top_larger_than_size_returns_everything(self):
        counts = {"a b": 1, "b c": 2}
        assert len(get_top_phrases(counts, 100)) == 2

    def test_empty_counts_returns_empty_list(self):
        assert get_top_phrases({}, 5) == []
        assert get_top_phrases(None, 5) == []

    def test_non_positive_top_returns_empty_list(self):
        assert get_top_phrases({"a b": 1}, 0) == []

    def test_ordering_independent_of_insertion_order(self):
        forward = {"x": 1, "y": 1, "z": 2}
        backward = {"z": 2, "y": 1, "x": 1}
        assert get_top_phrases(forward, 3) == get_top_phrases(backward, 3)


class TestAnalyzeContent:
    """Tests for analyze_content()."""

    def test_cat_scenario(self, cat_text):
        """
        Given: 'the cat sat. the cat ran!', phrase_size=2, top=2
        When: analyze_content() is called
        Then: 6 words, 3 sentences, 'the cat' first, 'cat ran!' second
        """
        result = analyze_content(cat_text, phrase_size=2, top=2)

        assert result.word_count == 6
        assert result.sentence_count == 3
        assert result.total_phrases == 5
        assert result.distinct_phrases == 4
        assert result.top_phrases == (("the cat", 2), ("cat ran!", 1))

    @pytest.mark.parametrize("content", ["", None])
    def test_empty_content_degrades_to_zero(self, content, caplog):
        """Given: Empty or None content, Then: Zero counts, no phrases, no exception"""
        with caplog.at_level("WARNING"):
            result = analyze_content(content, phrase_size=2, top=5)

        assert result.word_count == 0
        assert result.sentence_count == 0
        assert result.total_phrases == 0
        assert result.top_phrases == ()
        assert "Empty or missing content" in caplog.text

    def test_empty_content_warning_uses_supplied_logger(self):
        """
        Given: Empty content and a caller-supplied PhaseLogger
        When: analyze_content() is called
        Then: The degraded-input warning goes through that logger and no phase runs
        """
        phase_logger = MagicMock(spec=PhaseLogger)

        analyze_content("", phrase_size=2, top=5, phase_logger=phase_logger)

        phase_logger.warning.assert_called_once()
        assert "Empty or missing content" in phase_logger.warning.call_args.args[0]
        phase_logger.phase.assert_not_called()

    def test_phrase_size_exceeding_word_count(self):
        content = " ".join(f"w{i}" for i in range(10))
        result = analyze_content(content, phrase_size=20, top=3)

        assert result.word_count == 10
        assert result.total_phrases == 0
        assert result.top_phrases == ()

    def test_idempotent(self, sample_text):
        first = analyze_content(sample_text, phrase_size=2, top=5)
        second = analyze_content(sample_text, phrase_size=2, top=5)
        assert first == second

    def test_sample_text_ranking(self, sample_text):
        result = analyze_content(sample_text, phrase_size=3, top=2)
        # Both trigrams occur three times; uppercase sorts before lowercase
        assert result.top_phrases == (("The quick brown", 3), ("quick brown fox", 3))

    def test_collapse_terminators_changes_sentence_count_only(self):
        content = "Hi!! Bye."
        default = analyze_content(content, phrase_size=2, top=3)
        collapsed = analyze_content(content, phrase_size=2, top=3, collapse_terminators=True)

        assert default.sentence_count == 4
        assert collapsed.sentence_count == 3
        assert default.top_phrases == collapsed.top_phrases

    def test_runs_every_phase_on_supplied_logger(self, cat_text):
        phase_logger = PhaseLogger(run_id="test")
        phase_logger.phase = MagicMock(wraps=phase_logger.phase)

        analyze_content(cat_text, phrase_size=2, top=2, phase_logger=phase_logger)

        phases = [call.args[0] for call in phase_logger.phase.call_args_list]
        assert phases == [Phase.TOKENIZE, Phase.SENTENCES, Phase.PHRASES, Phase.RANK]

    def test_verbose_logger_reports_stage_results(self, cat_text, caplog):
        phase_logger = PhaseLogger(run_id="cat.txt", verbose=True)

        with caplog.at_level("INFO"):
            analyze_content(cat_text, phrase_size=2, top=2, phase_logger=phase_logger)

        assert "words: 6" in caplog.text
        assert "distinct phrases: 4" in caplog.text
        assert "TOP_K_SELECTION COMPLETED" in caplog.text


class TestTextAnalysisResult:
    """Tests for TextAnalysisResult helpers."""

    def test_to_dict(self):
        result = TextAnalysisResult(
            word_count=6,
            sentence_count=3,
            phrase_size=2,
            top=2,
            total_phrases=5,
            distinct_phrases=4,
            top_phrases=(PhraseCount("the cat", 2), PhraseCount("cat ran!", 1)),
        )

        assert result.to_dict() == {
            "word_count": 6,
            "sentence_count": 3,
            "phrase_size": 2,
            "top": 2,
            "total_phrases": 5,
            "distinct_phrases": 4,
            "top_phrases": [
                {"phrase": "the cat", "count": 2},
                {"phrase": "cat ran!", "count": 1},
            ],
        }

    def test_counts_property(self):
        result = analyze_content("one two. three", phrase_size=2, top=1)
        assert result.counts == {"words": 3, "sentences": 2}
