"""Phrase extraction, frequency aggregation and top-K ranking."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from logging_utils import Phase, PhaseLogger
from word_count_utils import split_sentences, tokenize

logger = logging.getLogger(__name__)


class PhraseCount(NamedTuple):
    phrase: str
    count: int


@dataclass(frozen=True)
class TextAnalysisResult:
    """Counts and ranked phrases produced by analyze_content()."""

    word_count: int
    sentence_count: int
    phrase_size: int
    top: int
    total_phrases: int
    distinct_phrases: int
    top_phrases: Tuple[PhraseCount, ...]

    @property
    def counts(self) -> Dict[str, int]:
        return {"words": self.word_count, "sentences": self.sentence_count}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word_count": self.word_count,
            "sentence_count": self.sentence_count,
            "phrase_size": self.phrase_size,
            "top": self.top,
            "total_phrases": self.total_phrases,
            "distinct_phrases": self.distinct_phrases,
            "top_phrases": [
                {"phrase": item.phrase, "count": item.count} for item in self.top_phrases
            ],
        }


def extract_phrases(words: Optional[Sequence[str]], phrase_size: int) -> Iterator[str]:
    """
    Yield one phrase per window position of ``phrase_size`` consecutive words.

    Windows overlap and advance one word at a time, so a sequence of L words
    yields max(0, L - phrase_size + 1) phrases. Non-positive sizes and missing
    input yield nothing.
    """
    if not words or phrase_size <= 0:
        return
    for start in range(len(words) - phrase_size + 1):
        yield " ".join(words[start:start + phrase_size])


def aggregate_phrases(phrases: Optional[Iterable[str]]) -> Counter:
    """Count occurrences of each distinct phrase in a single pass."""
    return Counter(phrases or ())


def get_phrase_frequency(content: Optional[str], phrase_size: int) -> Counter:
    """
    Map each phrase of ``phrase_size`` words in ``content`` to its frequency.

    Phrases are matched exactly: case and punctuation inside tokens are
    preserved. Missing content or a non-positive size gives an empty Counter.
    """
    if content is None or phrase_size <= 0:
        return Counter()
    return aggregate_phrases(extract_phrases(tokenize(content), phrase_size))


def _rank_key(item: Tuple[str, int]) -> Tuple[int, str]:
    phrase, count = item
    return -count, phrase


def get_top_phrases(phrase_counts: Optional[Mapping[str, int]], top: int) -> List[PhraseCount]:
    """
    Return the ``top`` most frequent phrases.

    Phrases are ordered by count descending; equal counts are ordered by
    phrase in ascending code-point order, so the result is reproducible.
    A ``top`` larger than the number of phrases returns all of them.
    """
    if not phrase_counts or top <= 0:
        return []
    ranked = sorted(phrase_counts.items(), key=_rank_key)
    return [PhraseCount(phrase, count) for phrase, count in ranked[:top]]


def analyze_content(
    content: Optional[str],
    phrase_size: int,
    top: int,
    *,
    collapse_terminators: bool = False,
    phase_logger: Optional[PhaseLogger] = None,
) -> TextAnalysisResult:
    """
    Run the full analysis pipeline over one text.

    Never raises for missing or empty content: the result then carries zero
    counts and no phrases.

    Args:
        content: Text to analyze (None is treated as empty)
        phrase_size: Number of words per phrase
        top: Maximum number of ranked phrases to return
        collapse_terminators: Treat runs of '.', '!' and '?' as one sentence boundary
        phase_logger: Optional logger receiving per-phase progress and timings

    Returns:
        TextAnalysisResult with word/sentence counts and the ranked phrases
    """
    phase_logger = phase_logger or PhaseLogger(run_id="analysis", logger=logger)

    if not content:
        phase_logger.warning("Empty or missing content: reporting zero counts and no phrases")
        return TextAnalysisResult(
            word_count=0,
            sentence_count=0,
            phrase_size=phrase_size,
            top=top,
            total_phrases=0,
            distinct_phrases=0,
            top_phrases=(),
        )

    phase_logger.log_content_preview(content)

    with phase_logger.phase(Phase.TOKENIZE):
        words = tokenize(content)
        phase_logger.log_stage_result("words", len(words))

    with phase_logger.phase(Phase.SENTENCES):
        sentences = split_sentences(content, collapse_terminators=collapse_terminators)
        phase_logger.log_stage_result("sentences", len(sentences))

    with phase_logger.phase(Phase.PHRASES, sub_label=f"{phrase_size}-word phrases"):
        if phrase_size > len(words):
            logger.info(
                f"Phrase size {phrase_size} exceeds word count {len(words)}; no phrases extracted"
            )
        phrase_counts = aggregate_phrases(extract_phrases(words, phrase_size))
        total_phrases = sum(phrase_counts.values())
        phase_logger.log_stage_result("phrases", total_phrases)
        phase_logger.log_stage_result("distinct phrases", len(phrase_counts))

    with phase_logger.phase(Phase.RANK, sub_label=f"top {top}"):
        top_phrases = get_top_phrases(phrase_counts, top)
        if top_phrases:
            phase_logger.debug(f"Most frequent phrase: {top_phrases[0].phrase!r} x{top_phrases[0].count}")

    return TextAnalysisResult(
        word_count=len(words),
        sentence_count=len(sentences),
        phrase_size=phrase_size,
        top=top,
        total_phrases=total_phrases,
        distinct_phrases=len(phrase_counts),
        top_phrases=tuple(top_phrases),
    )
