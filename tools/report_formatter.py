"""Fixed-width text tables and JSON rendering for analysis reports."""

from __future__ import annotations

from typing import Iterable, List, Mapping

import json_utils as json
from tools.phrase_frequency_utils import PhraseCount, TextAnalysisResult

COUNTS_TABLE_BORDER = "+----------------------+-------+"
PHRASE_TABLE_BORDER = "+--------------------------------+-------+"

COUNT_ROWS = (
    ("Number of words", "words"),
    ("Number of sentences", "sentences"),
)


def format_word_and_sentence_counts(counts: Mapping[str, int]) -> str:
    """Render the Type/Count table: words first, then sentences."""
    lines: List[str] = [
        COUNTS_TABLE_BORDER,
        f"| {'Type':<20} | {'Count':>5} |",
        COUNTS_TABLE_BORDER,
    ]
    for label, key in COUNT_ROWS:
        lines.append(f"| {label:<20} | {counts.get(key, 0):>5} |")
        lines.append(COUNTS_TABLE_BORDER)
    return "\n".join(lines) + "\n"


def format_phrase_table(top_phrases: Iterable[PhraseCount]) -> str:
    """
    Render the Phrase/Count table in ranked order.

    The phrase column is 30 characters wide; longer phrases widen their own
    row instead of being truncated.
    """
    lines: List[str] = [
        PHRASE_TABLE_BORDER,
        f"| {'Phrase':<30} | {'Count':>5} |",
        PHRASE_TABLE_BORDER,
    ]
    for phrase, count in top_phrases:
        lines.append(f"| {phrase:<30} | {count:>5} |")
    lines.append(PHRASE_TABLE_BORDER)
    return "\n".join(lines) + "\n"


def format_report(result: TextAnalysisResult) -> str:
    return (
        f"{format_word_and_sentence_counts(result.counts)}\n"
        f"Top phrases:\n"
        f"{format_phrase_table(result.top_phrases)}"
    )


def format_json_report(result: TextAnalysisResult) -> str:
    return json.dumps(result.to_dict(), indent=2)
